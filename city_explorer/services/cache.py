"""Cache lookup result type and the opt-in in-flight de-duplication guard."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Hit(Generic[T]):
    """Rows already stored for the requested key."""

    rows: list[T] = field(default_factory=list)


@dataclass(frozen=True)
class Miss:
    """Nothing stored yet for the requested key."""


MISS = Miss()

CacheResult = Union[Hit[T], Miss]


def cache_result(rows: list[T]) -> CacheResult[T]:
    return Hit(rows) if rows else MISS


class SingleFlight:
    """Share one in-flight call among concurrent callers of the same key.

    The first caller for a key starts the call; callers arriving before it
    finishes await the same task and receive its result or exception. The
    key is released as soon as the task completes.
    """

    def __init__(self) -> None:
        self._inflight: dict[Hashable, asyncio.Task[Any]] = {}

    def __len__(self) -> int:
        return len(self._inflight)

    async def do(self, key: Hashable, call: Callable[[], Awaitable[T]]) -> T:
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(call())
            self._inflight[key] = task
            task.add_done_callback(lambda _t: self._release(key, _t))
        # shield: a cancelled waiter must not cancel the shared call
        return await asyncio.shield(task)

    def _release(self, key: Hashable, task: asyncio.Task[Any]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
