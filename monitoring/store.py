"""
============================================================================
URL STATUS MONITOR - STATUS STORE
============================================================================
Single source of truth for the current status of every monitored URL.

Entries are addressed by their position in the input list, so display
order is always input order and duplicate URLs stay independent. Each
write replaces an immutable URLStatus under a lock and then notifies the
subscribers with a StatusUpdate. Subscribers are plain callables; a
subscriber that raises is logged and skipped.

Version: 1.0.0
License: MIT
============================================================================
"""

import threading
from typing import Callable, List, Sequence, Tuple

from monitoring.models import StatusUpdate, URLStatus
from utils.logger import get_logger


logger = get_logger("StatusStore")


Subscriber = Callable[[StatusUpdate], None]


class StatusStore:
    """
    Ordered ``(url, URLStatus)`` pairs plus change notification.

    Usage
    -----
        store = StatusStore()
        unsubscribe = store.subscribe(print)
        store.reset(["https://a.example", "https://b.example"])
        store.set(0, URLStatus.checking())
    """

    def __init__(self) -> None:
        self._urls: Tuple[str, ...] = ()
        self._statuses: List[URLStatus] = []
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # SUBSCRIPTIONS
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register *callback* for every future StatusUpdate.

        Returns a function that removes the subscription.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, update: StatusUpdate) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(update)
            except Exception as e:
                logger.exception(
                    f"[Store] Subscriber {callback!r} failed on update "
                    f"#{update.index}: {e}"
                )

    # ------------------------------------------------------------------
    # WRITES
    # ------------------------------------------------------------------

    def reset(self, urls: Sequence[str]) -> None:
        """Replace the URL list and set every entry to WAITING."""
        waiting = URLStatus.waiting()
        with self._lock:
            self._urls = tuple(urls)
            self._statuses = [waiting] * len(self._urls)
            urls = self._urls
        for index, url in enumerate(urls):
            self._notify(StatusUpdate(index, url, waiting))

    def set(self, index: int, status: URLStatus) -> StatusUpdate:
        """Replace the status at *index* and notify subscribers."""
        with self._lock:
            url = self._urls[index]
            self._statuses[index] = status
        update = StatusUpdate(index, url, status)
        self._notify(update)
        return update

    # ------------------------------------------------------------------
    # READS
    # ------------------------------------------------------------------

    def get(self, index: int) -> URLStatus:
        with self._lock:
            return self._statuses[index]

    @property
    def urls(self) -> Tuple[str, ...]:
        return self._urls

    def snapshot(self) -> List[Tuple[str, URLStatus]]:
        """All entries in input order."""
        with self._lock:
            return list(zip(self._urls, self._statuses))

    def counts(self) -> dict:
        """Number of URLs per display bucket."""
        healthy = failing = pending = 0
        for _, status in self.snapshot():
            if status.is_healthy:
                healthy += 1
            elif status.is_resolved:
                failing += 1
            else:
                pending += 1
        return {"healthy": healthy, "failing": failing, "pending": pending}

    def __len__(self) -> int:
        return len(self._urls)
