"""Bounded, order-preserving fan-out for work inside a single stage."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_ordered(
    items: Sequence[T],
    worker: Callable[[int, T], Awaitable[R]],
    *,
    limit: int = 1,
) -> list[R]:
    """Run ``worker(index, item)`` for every item with at most *limit* in flight.

    Results come back in item order whatever the completion order. On the
    first failure the remaining tasks are cancelled and the error re-raised.
    """
    if limit < 1:
        raise ValueError("limit must be >= 1")
    if not items:
        return []

    if limit == 1 or len(items) == 1:
        return [await worker(index, item) for index, item in enumerate(items)]

    semaphore = asyncio.Semaphore(limit)

    async def _bounded(index: int, item: T) -> tuple[int, R]:
        async with semaphore:
            return index, await worker(index, item)

    tasks = [asyncio.create_task(_bounded(index, item)) for index, item in enumerate(items)]
    try:
        tagged = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    return [result for _, result in sorted(tagged, key=lambda pair: pair[0])]
