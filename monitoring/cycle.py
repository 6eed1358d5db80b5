"""
============================================================================
URL STATUS MONITOR - CYCLE RUNNER
============================================================================
One cycle = one pass over every monitored URL, in input order.

Per URL
-------
1.  ``is_active()`` false            → abort the rest of the cycle
2.  not force_all and already healthy → skip (skip-on-success policy)
3.  otherwise                         → CHECKING, probe, RESOLVED(outcome)

A result that arrives after the session went inactive is discarded so a
stopped session is never written to again. One URL's failure never stops
the others.

With ``max_concurrency`` > 1 probes run in parallel under an
asyncio.Semaphore; the store is indexed by position, so the display order
stays the input order whatever the completion order.

Version: 1.0.0
License: MIT
============================================================================
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence

from monitoring.models import ProbeOutcome, URLStatus
from monitoring.store import StatusStore
from utils.logger import get_logger


logger = get_logger("CycleRunner")


class Prober(Protocol):
    async def probe(self, url: str, timeout: Optional[float] = None) -> ProbeOutcome:
        ...


class _Result(str, Enum):
    PROBED = "probed"
    SKIPPED = "skipped"
    DISCARDED = "discarded"
    ABORTED = "aborted"


@dataclass
class CycleReport:
    """What happened during one cycle."""
    total: int = 0
    probed: int = 0
    skipped: int = 0
    discarded: int = 0
    aborted: bool = False
    elapsed: float = 0.0

    def record(self, result: _Result) -> None:
        if result == _Result.PROBED:
            self.probed += 1
        elif result == _Result.SKIPPED:
            self.skipped += 1
        elif result == _Result.DISCARDED:
            self.discarded += 1
            self.aborted = True
        else:
            self.aborted = True


class CycleRunner:
    """
    Runs one probe cycle over an ordered URL list.

    Parameters
    ----------
    prober : Prober
        Anything with ``async probe(url, timeout) -> ProbeOutcome``.
    timeout : float | None
        Passed to every probe; None lets the prober use its default.
    max_concurrency : int
        1 probes sequentially; higher values allow that many probes
        in flight at once.
    """

    def __init__(
        self,
        prober: Prober,
        timeout: Optional[float] = None,
        max_concurrency: int = 1,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.prober = prober
        self.timeout = timeout
        self.max_concurrency = max_concurrency

    async def run_cycle(
        self,
        urls: Sequence[str],
        store: StatusStore,
        force_all: bool,
        is_active: Callable[[], bool],
    ) -> CycleReport:
        """
        Probe every URL once, writing each transition to *store*.

        *store* must already hold exactly *urls* (see ``StatusStore.reset``).
        """
        if tuple(urls) != store.urls:
            raise ValueError("store does not hold the URLs of this cycle")

        report = CycleReport(total=len(urls))
        start_time = time.perf_counter()

        if self.max_concurrency == 1:
            for index, url in enumerate(urls):
                result = await self._check_one(index, url, store, force_all, is_active)
                report.record(result)
                if result in (_Result.ABORTED, _Result.DISCARDED):
                    break
        else:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def guarded(index: int, url: str) -> _Result:
                async with semaphore:
                    return await self._check_one(index, url, store, force_all, is_active)

            results = await asyncio.gather(
                *(guarded(index, url) for index, url in enumerate(urls))
            )
            for result in results:
                report.record(result)

        report.elapsed = time.perf_counter() - start_time
        logger.debug(
            f"[Cycle] {report.probed} probed, {report.skipped} skipped, "
            f"{report.discarded} discarded in {report.elapsed:.2f}s"
            + (" (aborted)" if report.aborted else "")
        )
        return report

    async def _check_one(
        self,
        index: int,
        url: str,
        store: StatusStore,
        force_all: bool,
        is_active: Callable[[], bool],
    ) -> _Result:
        if not is_active():
            return _Result.ABORTED

        if not force_all and store.get(index).is_healthy:
            logger.debug(f"[Cycle] #{index} {url} healthy, skipped")
            return _Result.SKIPPED

        store.set(index, URLStatus.checking())
        try:
            outcome = await self.prober.probe(url, self.timeout)
        except Exception as e:
            # Probers report failures as outcomes; this only catches bugs.
            logger.exception(f"[Cycle] Prober raised for {url}: {e}")
            outcome = ProbeOutcome.other_error(f"Prober error: {str(e)[:200]}")

        if not is_active():
            logger.debug(f"[Cycle] #{index} {url} result discarded, session inactive")
            return _Result.DISCARDED

        store.set(index, URLStatus.resolved(outcome))
        return _Result.PROBED
