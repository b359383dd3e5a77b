"""
Streaming group-by engine.

Splits one async source into per-key groups without buffering the whole
source. The first item of a new key starts a task that reduces that key's
group; later items of the same key are queued to it. Every group task owns its
own fold state, and the only merge point is the final ``asyncio.gather``.

Group queues are bounded: when a group falls ``buffer_size`` items behind,
the source is not pulled again until that group catches up.

FAILURE SEMANTICS:
- A failing source or group cancels every other group task, closes the
  source, then re-raises.
- Cancelling the caller cancels every group task and closes the source.
- Result order follows first appearance of each key and carries no meaning.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Coroutine, Hashable
from typing import Any, TypeVar

from confeti.helpers.exceptions import ConsistencyViolation

logger = logging.getLogger(__name__)

T = TypeVar("T")
V = TypeVar("V")
K = TypeVar("K", bound=Hashable)
R = TypeVar("R")

GroupReducer = Callable[[K, AsyncIterator[V]], Coroutine[Any, Any, R]]

# Items a group may lag behind the source
DEFAULT_GROUP_BUFFER = 64

_END = object()


def closing_stream(source: AsyncIterable[T]) -> contextlib.AbstractAsyncContextManager[AsyncIterable[T]]:
    """Close ``source`` on exit when it is an async generator (or anything with ``aclose``)."""
    if hasattr(source, "aclose"):
        return contextlib.aclosing(source)  # type: ignore[type-var]
    return contextlib.nullcontext(source)


async def _drain(queue: asyncio.Queue) -> AsyncIterator[Any]:
    while True:
        item = await queue.get()
        if item is _END:
            return
        yield item


async def _enqueue(queue: asyncio.Queue, task: asyncio.Task, item: Any) -> None:
    """Queue an item for a group, waiting for room while the group task is alive."""
    if task.done():
        # Surfaces a failed group; a group that already returned gets nothing more
        await task
        return
    if not queue.full():
        queue.put_nowait(item)
        return

    putter = asyncio.ensure_future(queue.put(item))
    try:
        await asyncio.wait((putter, task), return_when=asyncio.FIRST_COMPLETED)
    finally:
        if not putter.done():
            putter.cancel()
    if not putter.done() or putter.cancelled():
        await task


async def group_by(
    source: AsyncIterable[T],
    key_fn: Callable[[T], K],
    reduce_group: GroupReducer[K, V, R],
    value_fn: Callable[[T], V] | None = None,
    buffer_size: int = DEFAULT_GROUP_BUFFER,
) -> list[tuple[K, R]]:
    """
    Group an async source by key and reduce every group concurrently.

    Args:
        source: Items to group; closed when grouping ends early
        key_fn: Grouping key of an item (must not return None)
        reduce_group: Coroutine function called once per key with the key and
            an async iterator over that key's values
        value_fn: Optional projection applied to an item before it is queued
        buffer_size: Maximum queued items per group before the source waits

    Returns:
        List of (key, reduced value) pairs, one per distinct key

    Raises:
        ConsistencyViolation: If key_fn returns None
        ValueError: If buffer_size is not positive
        Exception: Whatever the source or a group reducer raised
    """
    if buffer_size < 1:
        raise ValueError(f"Group buffer size must be positive, got {buffer_size}")

    queues: dict[K, asyncio.Queue] = {}
    tasks: dict[K, asyncio.Task] = {}

    async with closing_stream(source):
        try:
            async for item in source:
                key = key_fn(item)
                if key is None:
                    raise ConsistencyViolation("Grouping key must not be null")

                queue = queues.get(key)
                if queue is None:
                    queue = queues[key] = asyncio.Queue(maxsize=buffer_size)
                    tasks[key] = asyncio.create_task(reduce_group(key, _drain(queue)))

                await _enqueue(queue, tasks[key], item if value_fn is None else value_fn(item))

            for key, queue in queues.items():
                await _enqueue(queue, tasks[key], _END)
            results = await asyncio.gather(*tasks.values())
        except BaseException:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)
            raise

    logger.debug(f"[grouping] Reduced {len(results)} groups")
    return list(zip(tasks.keys(), results, strict=True))
