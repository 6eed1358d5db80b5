"""
============================================================================
URL STATUS MONITOR - MAIN APPLICATION
============================================================================
Command-line entry point. Wires the layers together:

    • Settings (Pydantic) + loguru logging
    • URL list loaded from a text file (fatal if missing or empty)
    • HTTPProber → CycleRunner → MonitorScheduler → StatusStore
    • ConsoleDisplay subscribed to the store

Startup Order
-------------
1.  Load settings, apply CLI overrides, configure logging
2.  Load the URL list (exit 1 on a configuration error)
3.  Build prober, runner, store, scheduler, display
4.  Start the live table, then the scheduler
5.  Wait for Ctrl+C / SIGTERM

Shutdown Order (reverse)
------------------------
    stop scheduler (cancels pending wait / in-flight probe) → stop display

With ``--once`` a single forced cycle runs, the table is printed and the
exit status is 0 when every URL succeeded, 2 otherwise.

Version: 1.0.0
License: MIT
============================================================================
"""

import asyncio
import signal
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from config.settings import Settings, get_settings
from display.console import ConsoleDisplay
from exceptions.base import ConfigurationError
from monitoring.cycle import CycleRunner
from monitoring.prober import HTTPProber
from monitoring.scheduler import MonitorScheduler
from monitoring.store import StatusStore
from utils.logger import get_logger, setup_logging
from utils.url_list import load_url_list


logger = get_logger("Main")

app = typer.Typer(add_completion=False, help="Monitor the reachability of a list of URLs.")


# ============================================================================
# APPLICATION CLASS
# ============================================================================

class UrlMonitorApplication:
    """
    Top-level application orchestrator.

    Owns every component and is the single place that knows the startup /
    shutdown order.
    """

    def __init__(self, settings: Optional[Settings] = None, display: bool = True):
        self.settings = settings or get_settings()
        self.show_display = display

        # --- components (populated during startup) ---
        self.urls: List[str] = []
        self.store: Optional[StatusStore] = None
        self.runner: Optional[CycleRunner] = None
        self.scheduler: Optional[MonitorScheduler] = None
        self.display: Optional[ConsoleDisplay] = None

        self._shutdown_event = asyncio.Event()

    # ------------------------------------------------------------------
    # STARTUP
    # ------------------------------------------------------------------

    def startup(self) -> None:
        """
        Load the URL list and build the engine.

        Raises:
            ConfigurationError: the URL list is missing or empty
        """
        monitoring = self.settings.monitoring
        logger.info(f"{self.settings.app_name} v{self.settings.app_version} starting")

        self.urls = load_url_list(self.settings.urls_file)

        self.store = StatusStore()
        self.runner = CycleRunner(
            HTTPProber(monitoring),
            timeout=monitoring.timeout,
            max_concurrency=monitoring.max_concurrency,
        )
        self.scheduler = MonitorScheduler(
            self.urls,
            self.store,
            self.runner,
            interval=monitoring.interval,
            force_all=monitoring.force_all,
        )
        if self.show_display:
            self.display = ConsoleDisplay(self.store, title=self.settings.app_name)

        logger.info(
            f"  ✓ Monitoring {len(self.urls)} URL(s), timeout={monitoring.timeout}s, "
            f"interval={monitoring.interval}s, concurrency={monitoring.max_concurrency}, "
            f"force_all={monitoring.force_all}"
        )

    # ------------------------------------------------------------------
    # RUN
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Start monitoring and block until shutdown is requested."""
        if self.display:
            self.display.start()
        await self.scheduler.start()
        await self._shutdown_event.wait()

    async def run_once(self) -> int:
        """
        Run one forced cycle and return the process exit status.

        A shutdown request ends the cycle early: the in-flight probe is
        cancelled and the remaining URLs are left as they are.
        """
        self.store.reset(self.urls)
        cycle = asyncio.create_task(
            self.runner.run_cycle(self.urls, self.store, True, self.is_active),
            name="single-cycle",
        )
        shutdown = asyncio.create_task(self._shutdown_event.wait(), name="shutdown-wait")

        done, pending = await asyncio.wait({cycle, shutdown}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if cycle in done:
            cycle.result()
        else:
            logger.warning("Single cycle interrupted before every URL was checked")

        if self.display:
            self.display.print_snapshot()

        counts = self.store.counts()
        logger.info(f"Single cycle: {counts['healthy']} up, {counts['failing']} down")
        return 0 if counts["healthy"] == len(self.urls) else 2

    def is_active(self) -> bool:
        return not self._shutdown_event.is_set()

    def request_shutdown(self) -> None:
        logger.info("  ⚡ Shutdown requested")
        self._shutdown_event.set()

    # ------------------------------------------------------------------
    # SHUTDOWN
    # ------------------------------------------------------------------

    async def shutdown(self) -> None:
        """
        Stop the scheduler, then the display. Each step is isolated so a
        failure in one does not leave the other running.
        """
        if self.scheduler:
            try:
                await self.scheduler.stop()
            except Exception as e:
                logger.error(f"  ✗ Scheduler stop error: {e}")

        if self.display:
            try:
                self.display.stop()
            except Exception as e:
                logger.error(f"  ✗ Display stop error: {e}")

        logger.info("  ✓ Shutdown complete")


# ============================================================================
# SIGNAL HANDLER SETUP
# ============================================================================

def _install_signal_handlers(loop: asyncio.AbstractEventLoop, application: UrlMonitorApplication) -> None:
    """
    Route SIGTERM / SIGINT to a graceful shutdown.
    """
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, application.request_shutdown)
        except (NotImplementedError, RuntimeError):
            # Not supported on Windows; KeyboardInterrupt still ends asyncio.run()
            pass


async def _run_application(application: UrlMonitorApplication, once: bool) -> int:
    _install_signal_handlers(asyncio.get_running_loop(), application)
    try:
        if once:
            return await application.run_once()
        await application.run()
        return 0
    finally:
        await application.shutdown()


# ============================================================================
# CLI
# ============================================================================

@app.command()
def main(
    urls_file: Optional[Path] = typer.Option(
        None, "--urls-file", "-f", help="Text file with one URL per line (default: the URLS_FILE setting)."
    ),
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", min=0, help="Seconds between the end of one cycle and the next."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", min=0.1, help="Per-probe timeout in seconds."
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", min=1, max=64, help="Probes in flight per cycle (1 = sequential)."
    ),
    skip_healthy: Optional[bool] = typer.Option(
        None, "--skip-healthy/--check-all", help="Skip URLs that are already up on later cycles."
    ),
    once: bool = typer.Option(False, "--once", help="Run a single cycle, print the table and exit."),
) -> None:
    """Monitor every URL in the URL list file until interrupted."""
    try:
        settings = get_settings().with_overrides(
            urls_file=urls_file,
            interval=interval,
            timeout=timeout,
            max_concurrency=concurrency,
            force_all=None if skip_healthy is None else not skip_healthy,
        )
    except ValidationError as e:
        typer.secho(f"Invalid configuration:\n{e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    setup_logging(settings)

    application = UrlMonitorApplication(settings)
    try:
        application.startup()
    except ConfigurationError as e:
        logger.error(e.log_format())
        typer.secho(e.user_message(), err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    try:
        code = asyncio.run(_run_application(application, once))
    except KeyboardInterrupt:
        code = 0
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
