"""
Monitoring session.

One Session per ``start()``: the fixed URL list for the run and the
active flag the cycle runner polls between URLs. Deactivation is one-way;
a restart creates a new Session.
"""

import itertools
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple


_session_ids = itertools.count(1)


@dataclass
class Session:
    urls: Tuple[str, ...]
    id: int = field(default_factory=lambda: next(_session_ids))
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stopped_at: Optional[datetime] = None
    cycle_count: int = 0
    _active: bool = field(default=True, repr=False)

    def is_active(self) -> bool:
        return self._active

    def deactivate(self) -> None:
        if self._active:
            self._active = False
            self.stopped_at = datetime.now(timezone.utc)
