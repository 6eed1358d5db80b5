"""
============================================================================
URL STATUS MONITOR - CONSOLE DISPLAY
============================================================================
Renders the status store as a rich table and re-renders it on every
StatusUpdate.

Visual treatment
----------------
    WAITING                → dim
    CHECKING               → yellow (pending)
    RESOLVED(success)      → green  (positive)
    RESOLVED(anything else)→ red    (negative)

Version: 1.0.0
License: MIT
============================================================================
"""

from datetime import datetime
from typing import Callable, List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from config.constants import Defaults, StatusStyles
from monitoring.models import StatusState, StatusUpdate, URLStatus
from monitoring.store import StatusStore
from utils.logger import route_console_logs


def status_style(status: URLStatus) -> str:
    """rich style for the visual treatment of *status*."""
    if status.state == StatusState.CHECKING:
        return StatusStyles.PENDING
    if status.state == StatusState.WAITING:
        return StatusStyles.WAITING
    return StatusStyles.POSITIVE if status.is_healthy else StatusStyles.NEGATIVE


def build_table(
    rows: List[Tuple[str, URLStatus]],
    title: Optional[str] = None,
    caption: Optional[str] = None,
) -> Table:
    """One row per monitored URL, in the order given."""
    table = Table(title=title, caption=caption, box=box.SIMPLE_HEAVY, expand=False)
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("URL", overflow="fold")
    table.add_column("Status", no_wrap=True)

    for index, (url, status) in enumerate(rows, start=1):
        table.add_row(str(index), url, Text(status.describe(), style=status_style(status)))
    return table


class ConsoleDisplay:
    """
    Live table bound to a StatusStore.

    Usage
    -----
        with ConsoleDisplay(store, title="URL Status Monitor"):
            await scheduler.start()
            ...
    """

    def __init__(
        self,
        store: StatusStore,
        console: Optional[Console] = None,
        title: Optional[str] = None,
    ):
        self.store = store
        self.console = console or Console()
        self.title = title
        self._live: Optional[Live] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._last_update: Optional[datetime] = None

    def render(self) -> Table:
        counts = self.store.counts()
        caption = f"{counts['healthy']} up · {counts['failing']} down · {counts['pending']} pending"
        if self._last_update is not None:
            caption += f" · updated {self._last_update.strftime(Defaults.TIME_FORMAT)}"
        return build_table(self.store.snapshot(), title=self.title, caption=caption)

    def on_update(self, update: StatusUpdate) -> None:
        self._last_update = update.timestamp.astimezone()
        if self._live is not None:
            self._live.update(self.render(), refresh=True)

    def start(self) -> None:
        if self._live is not None:
            return
        self._live = Live(
            self.render(),
            console=self.console,
            auto_refresh=False,
            refresh_per_second=Defaults.REFRESH_PER_SECOND,
        )
        self._live.start()
        route_console_logs(self.console)
        self._unsubscribe = self.store.subscribe(self.on_update)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._live is not None:
            route_console_logs(None)
            self._live.stop()
            self._live = None

    def print_snapshot(self) -> None:
        """Print the current table once (no live refresh)."""
        self.console.print(self.render())

    def __enter__(self) -> "ConsoleDisplay":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
