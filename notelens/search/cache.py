"""Thread-safe cache of per-attachment image analysis."""

import threading
from concurrent.futures import Future
from typing import Callable

from loguru import logger

from notelens.domain.search import ImageSearchContext


class AnalysisCache:
    """Maps attachment IDs to their ``ImageSearchContext``.

    ``get_or_compute`` runs the computation at most once per key: concurrent callers asking
    for a key that is being computed wait for the in-flight result instead of starting their
    own. Entries are never evicted; the first completed computation for a key is kept.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, ImageSearchContext] = {}
        self._in_flight: dict[str, Future] = {}

    def get(self, attachment_id: str) -> ImageSearchContext | None:
        with self._lock:
            return self._entries.get(attachment_id)

    def __contains__(self, attachment_id: str) -> bool:
        with self._lock:
            return attachment_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_compute(
        self, attachment_id: str, compute: Callable[[], ImageSearchContext]
    ) -> ImageSearchContext:
        with self._lock:
            cached = self._entries.get(attachment_id)
            if cached is not None:
                return cached
            future = self._in_flight.get(attachment_id)
            is_owner = future is None
            if is_owner:
                future = Future()
                self._in_flight[attachment_id] = future

        if not is_owner:
            logger.debug(f"Waiting for in-flight analysis of {attachment_id}")
            return future.result()

        try:
            context = compute()
        except BaseException as e:
            with self._lock:
                del self._in_flight[attachment_id]
            future.set_exception(e)
            raise

        with self._lock:
            context = self._entries.setdefault(attachment_id, context)
            del self._in_flight[attachment_id]
        future.set_result(context)
        return context

    def remove(self, attachment_id: str) -> None:
        """Drop the cached context of a removed attachment."""
        with self._lock:
            self._entries.pop(attachment_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
