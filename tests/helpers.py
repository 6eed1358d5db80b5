"""
Test doubles and async helpers shared across the test modules.
"""

import asyncio
from typing import Callable, Dict, List, Optional

import pytest

from monitoring.models import ProbeOutcome, StatusState, StatusUpdate


class FakeProber:
    """
    Scripted prober.

    ``outcomes`` maps URL → ProbeOutcome, an exception to raise, or a
    zero-argument callable returning an outcome. ``delays`` maps URL →
    seconds to sleep before answering.
    """

    def __init__(
        self,
        outcomes: Optional[Dict[str, object]] = None,
        delays: Optional[Dict[str, float]] = None,
        default: Optional[ProbeOutcome] = None,
    ):
        self.outcomes = outcomes or {}
        self.delays = delays or {}
        self.default = default or ProbeOutcome.success(200)
        self.calls: List[str] = []
        self.started_at: List[float] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def probe(self, url: str, timeout: Optional[float] = None) -> ProbeOutcome:
        self.calls.append(url)
        self.started_at.append(asyncio.get_running_loop().time())
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(url, 0)
            if delay:
                await asyncio.sleep(delay)
            outcome = self.outcomes.get(url, self.default)
            if isinstance(outcome, BaseException):
                raise outcome
            if callable(outcome):
                return outcome()
            return outcome
        finally:
            self.in_flight -= 1


class UpdateRecorder:
    """Collects StatusUpdate events from a store subscription."""

    def __init__(self) -> None:
        self.updates: List[StatusUpdate] = []

    def __call__(self, update: StatusUpdate) -> None:
        self.updates.append(update)

    def clear(self) -> None:
        self.updates.clear()

    def states(self) -> List[tuple]:
        return [(u.index, u.status.state) for u in self.updates]

    def for_index(self, index: int) -> List[StatusState]:
        return [u.status.state for u in self.updates if u.index == index]


async def wait_until(predicate: Callable[[], bool], timeout: float = 3.0, step: float = 0.01) -> None:
    """Poll *predicate* until true; fail the test after *timeout* seconds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            pytest.fail(f"condition not met within {timeout}s")
        await asyncio.sleep(step)

