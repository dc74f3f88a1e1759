"""Staleness guard for asynchronous fetches feeding visible state."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class GuardToken:
    generation: int
    key: Hashable = None


@dataclass
class FetchOutcome(Generic[T]):
    value: Optional[T] = None
    stale: bool = False


class FetchGuard:
    """Track the latest request of one logical subscription.

    Every ``begin`` supersedes earlier tokens; results are committed only while their
    token is still current. ``fetch`` also attaches callers to an identical request that
    is already in flight instead of starting a second one.
    """

    def __init__(self, name: str = "fetch") -> None:
        self._name = name
        self._generation = 0
        self._inflight: Dict[Hashable, asyncio.Future] = {}

    def begin(self, key: Hashable = None) -> GuardToken:
        self._generation += 1
        return GuardToken(generation=self._generation, key=key)

    def is_current(self, token: GuardToken) -> bool:
        return token.generation == self._generation

    def cancel(self) -> None:
        self._generation += 1

    def in_flight(self, key: Hashable) -> bool:
        return key in self._inflight

    async def fetch(self, key: Hashable, operation: Callable[[], Awaitable[T]]) -> FetchOutcome[T]:
        token = self.begin(key)
        future = self._inflight.get(key)
        if future is None:
            future = asyncio.ensure_future(operation())
            self._inflight[key] = future
            future.add_done_callback(lambda done: self._release(key, done))
        else:
            logger.debug("[%s] joining in-flight request %r", self._name, key)

        # shield: a cancelled waiter must not cancel the request other callers share
        value = await asyncio.shield(future)
        if not self.is_current(token):
            logger.debug("[%s] discarding stale result for %r", self._name, key)
            return FetchOutcome(stale=True)
        return FetchOutcome(value=value)

    def _release(self, key: Hashable, done: asyncio.Future) -> None:
        if self._inflight.get(key) is done:
            del self._inflight[key]
