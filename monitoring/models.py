"""
============================================================================
URL STATUS MONITOR - STATUS MODEL
============================================================================
Immutable value objects passed between the prober, the cycle runner, the
status store and the display:

    ProbeOutcome   ← result of one probe (success / http error / timeout /
                     connection error / other error)
    URLStatus      ← WAITING, CHECKING or RESOLVED(outcome)
    StatusUpdate   ← (index, url, status) event emitted on every transition

All three are frozen dataclasses, so a reader always sees a complete value.

Version: 1.0.0
License: MIT
============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from config.constants import StatusLabels


# ============================================================================
# PROBE OUTCOME
# ============================================================================

class OutcomeKind(str, Enum):
    """Tag of a ProbeOutcome."""
    SUCCESS = "success"
    HTTP_ERROR = "http_error"
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    OTHER_ERROR = "other_error"


@dataclass(frozen=True)
class ProbeOutcome:
    """
    Result of a single probe attempt.

    ``code`` is set for SUCCESS and HTTP_ERROR, ``message`` for
    OTHER_ERROR. Build instances through the classmethods.
    """
    kind: OutcomeKind
    code: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, code: int) -> "ProbeOutcome":
        return cls(OutcomeKind.SUCCESS, code=code)

    @classmethod
    def http_error(cls, code: int) -> "ProbeOutcome":
        return cls(OutcomeKind.HTTP_ERROR, code=code)

    @classmethod
    def timeout(cls) -> "ProbeOutcome":
        return cls(OutcomeKind.TIMEOUT)

    @classmethod
    def connection_error(cls) -> "ProbeOutcome":
        return cls(OutcomeKind.CONNECTION_ERROR)

    @classmethod
    def other_error(cls, message: str) -> "ProbeOutcome":
        return cls(OutcomeKind.OTHER_ERROR, message=message)

    @property
    def is_success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    def describe(self) -> str:
        """Short text for tables and logs, e.g. ``OK (200)``."""
        label = StatusLabels.for_outcome(self.kind.value)
        if self.code is not None:
            return f"{label} ({self.code})"
        if self.message:
            return f"{label}: {self.message}"
        return label


# ============================================================================
# URL STATUS
# ============================================================================

class StatusState(str, Enum):
    """Lifecycle position of one monitored URL."""
    WAITING = "waiting"
    CHECKING = "checking"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class URLStatus:
    """
    Current status of one monitored URL.

    Transitions: WAITING → CHECKING → RESOLVED, then
    RESOLVED → CHECKING → RESOLVED on every cycle that probes the URL.
    """
    state: StatusState
    outcome: Optional[ProbeOutcome] = None

    def __post_init__(self) -> None:
        if (self.state == StatusState.RESOLVED) != (self.outcome is not None):
            raise ValueError("a RESOLVED status carries an outcome, other states do not")

    @classmethod
    def waiting(cls) -> "URLStatus":
        return cls(StatusState.WAITING)

    @classmethod
    def checking(cls) -> "URLStatus":
        return cls(StatusState.CHECKING)

    @classmethod
    def resolved(cls, outcome: ProbeOutcome) -> "URLStatus":
        return cls(StatusState.RESOLVED, outcome)

    @property
    def is_resolved(self) -> bool:
        return self.state == StatusState.RESOLVED

    @property
    def is_healthy(self) -> bool:
        """True when resolved with a successful probe."""
        return self.outcome is not None and self.outcome.is_success

    def describe(self) -> str:
        if self.outcome is not None:
            return self.outcome.describe()
        if self.state == StatusState.CHECKING:
            return StatusLabels.CHECKING
        return StatusLabels.WAITING


# ============================================================================
# STATUS UPDATE EVENT
# ============================================================================

@dataclass(frozen=True)
class StatusUpdate:
    """One status transition, addressed by position in the input list."""
    index: int
    url: str
    status: URLStatus
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
