from __future__ import annotations

import logging
import time
from collections import OrderedDict
from threading import Event, Lock
from typing import Callable, Iterable, Optional

from .core.resolution import MatchResult, resolve

logger = logging.getLogger(__name__)

Resolver = Callable[[str, tuple[str, ...]], MatchResult]


class _Flight:
    __slots__ = ("event", "result", "error")

    def __init__(self) -> None:
        self.event = Event()
        self.result: Optional[MatchResult] = None
        self.error: Optional[BaseException] = None


class ResolutionCache:
    """
    Single-flight, time-bounded cache in front of resolve().

    Concurrent callers asking for the same query share one computation;
    finished results are reused for ``ttl_seconds``. Replacing the registry
    drops every cached result.
    """

    def __init__(
        self,
        registry: Iterable[str],
        *,
        ttl_seconds: float = 30.0,
        max_entries: int = 1024,
        resolver: Resolver = resolve,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._resolver = resolver
        self._clock = clock
        self._lock = Lock()
        self._registry: tuple[str, ...] = tuple(registry)
        self._generation = 0
        self._entries: OrderedDict[str, tuple[float, MatchResult]] = OrderedDict()
        self._inflight: dict[str, _Flight] = {}

    @property
    def registry(self) -> tuple[str, ...]:
        with self._lock:
            return self._registry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def resolve(self, query: Optional[str]) -> MatchResult:
        key = query if isinstance(query, str) else ""
        with self._lock:
            cached = self._lookup(key)
            if cached is not None:
                return cached
            flight = self._inflight.get(key)
            leader = flight is None
            if leader:
                flight = _Flight()
                self._inflight[key] = flight
                registry = self._registry
                generation = self._generation

        if not leader:
            logger.debug("Waiting for in-flight resolution of %r", key)
            flight.event.wait()
            if flight.error is not None:
                raise flight.error
            return flight.result

        try:
            flight.result = self._resolver(key, registry)
        except BaseException as exc:
            flight.error = exc
            logger.warning("Resolution of %r failed: %s", key, exc)
            raise
        finally:
            with self._lock:
                if self._inflight.get(key) is flight:
                    del self._inflight[key]
                if flight.result is not None and generation == self._generation:
                    self._store(key, flight.result)
            flight.event.set()
        return flight.result

    def update_registry(self, registry: Iterable[str]) -> None:
        with self._lock:
            self._registry = tuple(registry)
            self._generation += 1
            self._entries.clear()
            # Running computations still answer their waiters but are not stored
            self._inflight.clear()
        logger.info("Registry updated (%d entries), cache cleared", len(self._registry))

    def invalidate(self, query: Optional[str] = None) -> None:
        with self._lock:
            if query is None:
                self._entries.clear()
            else:
                self._entries.pop(query, None)

    def _lookup(self, key: str) -> Optional[MatchResult]:
        cached = self._entries.get(key)
        if cached is None:
            return None
        stored_at, result = cached
        if self._clock() - stored_at < self.ttl_seconds:
            return result
        del self._entries[key]
        return None

    def _store(self, key: str, result: MatchResult) -> None:
        if self.ttl_seconds <= 0 or self.max_entries <= 0:
            return
        self._entries[key] = (self._clock(), result)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
