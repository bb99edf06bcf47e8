"""Bounded-concurrency fan-out for independent store reads."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_bounded(
    items: Sequence[T],
    fetch: Callable[[T], Awaitable[R]],
    concurrency: int,
) -> list[R]:
    """Run ``fetch`` for every item with at most ``concurrency`` in flight.

    Results are returned in the order of ``items``, not completion order.
    If any call fails, or the caller is cancelled, every other in-flight
    call is cancelled before the error propagates. The first failure is
    raised as itself rather than as an ExceptionGroup; when several calls
    fail together the group is chained as its cause.

    Raises:
        ValueError: If concurrency is less than 1
    """
    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")
    if not items:
        return []

    semaphore = asyncio.Semaphore(concurrency)
    results: list[R | None] = [None] * len(items)

    async def run(index: int, item: T) -> None:
        async with semaphore:
            results[index] = await fetch(item)

    try:
        async with asyncio.TaskGroup() as group:
            for index, item in enumerate(items):
                group.create_task(run(index, item))
    except ExceptionGroup as eg:
        if len(eg.exceptions) == 1:
            raise eg.exceptions[0] from None
        raise eg.exceptions[0] from eg

    return results  # type: ignore[return-value]
