"""
Bounded fan-out for per-device work.

Every item gets its own task, at most `limit` run at once, and any exception
raised by the worker is turned into a result value by `on_error`. The returned
list therefore always has exactly one entry per submitted item.
"""
# Standard library imports
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def run_bounded(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    on_error: Callable[[T, Exception], R],
    limit: int,
    item_timeout: Optional[float] = None,
    on_result: Optional[Callable[[R], None]] = None,
) -> List[R]:
    """
    Run `worker` for every item concurrently, bounded by `limit`.

    Args:
        items: Work items (devices, device ids, resource names)
        worker: Coroutine function producing a result for one item
        on_error: Converts a worker failure into a result value for that item
        limit: Maximum number of workers in flight
        item_timeout: Optional hard cap per item, applied once the item holds a slot
        on_result: Called as each result arrives, in completion order

    Returns:
        Results in completion order, len(results) == len(items)
    """
    semaphore = asyncio.Semaphore(max(1, limit))

    async def guarded(item: T) -> R:
        async with semaphore:
            try:
                if item_timeout is not None:
                    return await asyncio.wait_for(worker(item), timeout=item_timeout)
                return await worker(item)
            except asyncio.TimeoutError:
                logger.warning(f"Bulk item {item!r} timed out after {item_timeout}s")
                return on_error(item, TimeoutError(f"Timed out after {item_timeout}s"))
            except Exception as e:
                logger.warning(f"Bulk item {item!r} failed: {e}")
                return on_error(item, e)

    tasks = [asyncio.ensure_future(guarded(item)) for item in items]
    results: List[R] = []
    for finished in asyncio.as_completed(tasks):
        result = await finished
        if on_result is not None:
            on_result(result)
        results.append(result)
    return results
