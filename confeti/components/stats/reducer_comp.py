"""
Generic stats reducer for entities that already carry a report total.

Unlike the category counter, nothing is counted here: each entity exposes a
precomputed ``report_total`` and the reducer only groups, selects and shapes.

Every operation is all-or-nothing. Any failure while fetching, grouping or
transforming is raised as a single StatisticsError carrying the original
message; no partially built result escapes.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Coroutine, Hashable
from typing import Any, ParamSpec, TypeVar

from confeti.components.stats.grouping_comp import DEFAULT_GROUP_BUFFER, closing_stream, group_by
from confeti.helpers.dto.report_dto import ReportStats
from confeti.helpers.exceptions import ConsistencyViolation, StatisticsError, TransformError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")
S = TypeVar("S", bound=ReportStats)
K = TypeVar("K", bound=Hashable)
U = TypeVar("U")
R = TypeVar("R")


def _single_failure(func: Callable[P, Awaitable[R]]) -> Callable[P, Coroutine[Any, Any, R]]:
    """Collapse any failure of a reducer operation into one StatisticsError."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except StatisticsError:
            raise
        except Exception as e:
            logger.debug(f"[reducer] {func.__name__} failed: {e}")
            raise StatisticsError(str(e)) from e

    return wrapper


def _apply(transform: Callable[..., R], *args: Any) -> R:
    try:
        return transform(*args)
    except Exception as e:
        raise TransformError(str(e)) from e


@_single_failure
async def collect_all(elements: AsyncIterable[T]) -> list[T]:
    """Collect an async sequence into a list, no grouping."""
    async with closing_stream(elements):
        return [element async for element in elements]


@_single_failure
async def collect_totals(
    elements: AsyncIterable[S],
    key_fn: Callable[[S], K],
    transform: Callable[[dict[K, int]], R],
) -> R:
    """
    Map each entity's key to its report total, then shape the mapping.

    Each key must identify exactly one entity; totals are selected, not summed.

    Args:
        elements: Stats entities
        key_fn: Key of an entity (e.g. its year)
        transform: Builds the response payload from {key: total}

    Returns:
        Whatever transform returns

    Raises:
        StatisticsError: On fetch failure, duplicate key (ConsistencyViolation)
            or transform failure (TransformError)
    """
    totals: dict[K, int] = {}
    async with closing_stream(elements):
        async for element in elements:
            key = key_fn(element)
            if key is None:
                raise ConsistencyViolation("Stats key must not be null")
            if key in totals:
                raise ConsistencyViolation(f"Duplicate stats key {key!r}")
            totals[key] = element.report_total
    return _apply(transform, totals)


@_single_failure
async def reduce_one(element: Awaitable[S | None], transform: Callable[[S | None], R]) -> R:
    """Await a single (possibly missing) stats entity and shape it."""
    return _apply(transform, await element)


@_single_failure
async def reduce_groups(
    elements: AsyncIterable[S],
    group_fn: Callable[[S], K],
    reduce_group: Callable[[K, AsyncIterator[S]], Coroutine[Any, Any, U]],
    transform: Callable[[U, K], R],
    buffer_size: int = DEFAULT_GROUP_BUFFER,
) -> list[R]:
    """
    Group entities, reduce every group asynchronously, and pair each summary with its key.

    Args:
        elements: Stats entities
        group_fn: Group key of an entity
        reduce_group: Coroutine function producing one summary per group; it
            may do further async work (e.g. a nested lookup)
        transform: Builds one response item from (summary, key)
        buffer_size: Maximum entities queued per group while its reducer is busy

    Returns:
        One transformed item per group (no guaranteed order)
    """

    async def guarded(key: K, group: AsyncIterator[S]) -> U:
        try:
            return await reduce_group(key, group)
        except StatisticsError:
            raise
        except Exception as e:
            raise TransformError(str(e)) from e

    groups = await group_by(elements, key_fn=group_fn, reduce_group=guarded, buffer_size=buffer_size)
    return [_apply(transform, summary, key) for key, summary in groups]
