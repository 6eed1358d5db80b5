"""
============================================================================
URL STATUS MONITOR - SCHEDULER
============================================================================
Drives the cycle runner: one immediate cycle on start, then a new cycle a
fixed interval after the previous one *finished*. A slow cycle delays the
next one; cycles never overlap.

State machine
-------------
    STOPPED ──start()──▶ RUNNING ──stop()──▶ STOPPED

start() while RUNNING and stop() while STOPPED are logged no-ops.

Each start() creates a fresh Session and resets every status to WAITING.
stop() deactivates the session (the runner checks it between URLs and
drops late results) and cancels the loop task, which interrupts a pending
wait or an in-flight probe without waiting for its timeout.

Usage
-----
    scheduler = MonitorScheduler(urls, store, runner, interval=10)
    await scheduler.start()
    # ... later ...
    await scheduler.stop()

or, with guaranteed teardown:

    async with MonitorScheduler(urls, store, runner) as scheduler:
        ...

Version: 1.0.0
License: MIT
============================================================================
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from config.constants import Defaults
from monitoring.cycle import CycleReport, CycleRunner
from monitoring.session import Session
from monitoring.store import StatusStore
from utils.logger import get_logger


logger = get_logger("Scheduler")


class SchedulerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class MonitorScheduler:
    """
    Asyncio-based cycle scheduler for one fixed URL list.

    Parameters
    ----------
    urls : Sequence[str]
        Monitored URLs in display order.
    store : StatusStore
        Receives every status transition.
    runner : CycleRunner
        Executes each cycle.
    interval : float
        Seconds between the end of one cycle and the start of the next.
    force_all : bool
        True re-probes every URL each cycle. False enables the
        skip-on-success policy.
    on_cycle : Callable[[CycleReport], None] | None
        Called after every completed cycle.
    """

    def __init__(
        self,
        urls: Sequence[str],
        store: StatusStore,
        runner: CycleRunner,
        interval: float = Defaults.CYCLE_INTERVAL,
        force_all: bool = True,
        on_cycle: Optional[Callable[[CycleReport], None]] = None,
    ):
        if interval < 0:
            raise ValueError("interval must not be negative")
        self.urls = tuple(urls)
        self.store = store
        self.runner = runner
        self.interval = interval
        self.force_all = force_all
        self.on_cycle = on_cycle

        self._state = SchedulerState.STOPPED
        self._session: Optional[Session] = None
        self._loop_task: Optional[asyncio.Task] = None
        self.last_report: Optional[CycleReport] = None
        self.last_cycle_at: Optional[datetime] = None

        logger.debug(
            f"Scheduler created: {len(self.urls)} URL(s), "
            f"interval={self.interval}s, force_all={self.force_all}"
        )

    # ------------------------------------------------------------------
    # LIFECYCLE
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Start a new session: reset statuses, run a cycle now, then repeat."""
        if self._state == SchedulerState.RUNNING:
            logger.warning("Scheduler is already running")
            return

        self._session = Session(self.urls)
        self.store.reset(self.urls)
        self._state = SchedulerState.RUNNING
        self._loop_task = asyncio.create_task(
            self._main_loop(self._session),
            name=f"monitor-session-{self._session.id}",
        )
        logger.info(f"✓ Scheduler started (session {self._session.id})")

    async def stop(self) -> None:
        """Stop the session; in-flight probes are abandoned, not awaited."""
        if self._state == SchedulerState.STOPPED:
            logger.debug("Scheduler is already stopped")
            return

        self._state = SchedulerState.STOPPED
        session = self._session
        if session is not None:
            session.deactivate()

        task, self._loop_task = self._loop_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        if session is not None:
            logger.info(f"✓ Scheduler stopped (session {session.id}, {session.cycle_count} cycle(s))")

    async def __aenter__(self) -> "MonitorScheduler":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SchedulerState.RUNNING

    @property
    def session(self) -> Optional[Session]:
        return self._session

    # ------------------------------------------------------------------
    # MAIN LOOP
    # ------------------------------------------------------------------

    async def _main_loop(self, session: Session) -> None:
        """
        Run a cycle, wait ``interval``, repeat while *session* is active.
        """
        logger.debug(f"[Scheduler] Loop for session {session.id} started")
        while session.is_active():
            try:
                report = await self.runner.run_cycle(
                    session.urls, self.store, self.force_all, session.is_active
                )
            except Exception as e:
                logger.exception(f"[Scheduler] Cycle failed: {e}")
            else:
                self._cycle_finished(session, report)

            if not session.is_active():
                break
            await asyncio.sleep(self.interval)

        logger.debug(f"[Scheduler] Loop for session {session.id} exited")

    def _cycle_finished(self, session: Session, report: CycleReport) -> None:
        if report.aborted:
            return
        session.cycle_count += 1
        self.last_report = report
        self.last_cycle_at = datetime.now()

        counts = self.store.counts()
        logger.info(
            f"[Scheduler] Cycle {session.cycle_count} done in {report.elapsed:.2f}s: "
            f"{counts['healthy']} up, {counts['failing']} down, "
            f"{report.skipped} skipped"
        )
        if self.on_cycle is not None:
            try:
                self.on_cycle(report)
            except Exception as e:
                logger.exception(f"[Scheduler] on_cycle callback failed: {e}")

    # ------------------------------------------------------------------
    # DIAGNOSTICS
    # ------------------------------------------------------------------

    def get_stats(self) -> Dict[str, Any]:
        """Return scheduler status for logs and the CLI footer."""
        session = self._session
        return {
            "state": self._state.value,
            "session_id": session.id if session else None,
            "cycle_count": session.cycle_count if session else 0,
            "interval": self.interval,
            "force_all": self.force_all,
            "last_cycle_at": self.last_cycle_at.isoformat() if self.last_cycle_at else None,
            "last_cycle_seconds": round(self.last_report.elapsed, 3) if self.last_report else None,
        }

    def summary_lines(self) -> List[str]:
        """Current statuses as ``url: description`` lines, in input order."""
        return [f"{url}: {status.describe()}" for url, status in self.store.snapshot()]
