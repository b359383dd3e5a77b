"""ArangoDB client factory and async cursor streaming for confeti.

Connection pooling handled automatically by python-arango client.
The driver is blocking; every round-trip is pushed to a worker thread with
``asyncio.to_thread`` so the event loop keeps scheduling other groups.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from itertools import islice
from typing import TYPE_CHECKING, Any, cast

from arango import ArangoClient
from arango.exceptions import ArangoError
from requests.exceptions import RequestException

from confeti.helpers.exceptions import ReportLookupError

if TYPE_CHECKING:
    from arango.cursor import Cursor
    from arango.database import StandardDatabase

logger = logging.getLogger(__name__)

# Driver failures that mean "the store could not answer this lookup"
LOOKUP_FAILURES = (ArangoError, RequestException)

_JSON_PRIMITIVES = (str, int, float, bool, type(None))


def _jsonify_for_arango(obj: Any, *, _path: str = "$") -> Any:
    """Recursively validate bind_vars as JSON-serializable primitives.

    Allows JSON primitives and dict/list/tuple containers (recursed). Anything
    else is rejected so call sites convert explicitly.

    Raises:
        TypeError: If obj contains non-serializable types (with path context)
    """
    if isinstance(obj, _JSON_PRIMITIVES):
        return obj
    if isinstance(obj, dict):
        return {str(k): _jsonify_for_arango(v, _path=f"{_path}.{k}") for k, v in obj.items()}
    if isinstance(obj, list | tuple):
        return [_jsonify_for_arango(v, _path=f"{_path}[{i}]") for i, v in enumerate(obj)]
    raise TypeError(
        f"Object at {_path} not JSON-serializable for Arango: {type(obj).__name__}. "
        f"Convert to primitive before passing to persistence layer."
    )


def create_arango_client(
    hosts: str = "http://localhost:8529",
    username: str = "confeti",
    password: str = "confeti",
    db_name: str = "confeti",
) -> StandardDatabase:
    """Create ArangoDB client and return a database handle.

    Args:
        hosts: ArangoDB server URL(s)
        username: Database username
        password: Database password
        db_name: Database name

    Returns:
        StandardDatabase handle (connections are opened lazily)
    """
    client = ArangoClient(hosts=hosts)
    return client.db(db_name, username=username, password=password)


async def _release_cursor(cursor: Cursor) -> None:
    """Delete a server-side cursor that still holds rows; the DELETE runs off the event loop."""

    def release() -> None:
        if cursor.has_more():
            cursor.close(ignore_missing=True)

    with contextlib.suppress(*LOOKUP_FAILURES):
        await asyncio.to_thread(release)


async def stream_query(
    db: Any,
    query: str,
    bind_vars: dict[str, Any] | None = None,
    batch_size: int = 500,
) -> AsyncIterator[dict[str, Any]]:
    """Run an AQL query and yield its rows without loading the full result.

    Rows are pulled ``batch_size`` at a time on a worker thread. Closing the
    iterator early releases the server-side cursor.

    Args:
        db: Database handle exposing ``.aql.execute``
        query: AQL query text
        bind_vars: Query bind variables (JSON primitives only)
        batch_size: Rows per server round-trip and per thread hop

    Yields:
        Result documents as dicts

    Raises:
        ReportLookupError: If the store is unreachable or the query fails
    """
    safe_bind_vars = _jsonify_for_arango(bind_vars or {})

    def open_cursor() -> Cursor:
        return cast("Cursor", db.aql.execute(query, bind_vars=safe_bind_vars, batch_size=batch_size, stream=True))

    try:
        cursor = await asyncio.to_thread(open_cursor)
    except LOOKUP_FAILURES as e:
        logger.error(f"[persistence] AQL query failed: {e}")
        raise ReportLookupError(f"Report lookup failed: {e}") from e

    try:
        while True:
            try:
                chunk = await asyncio.to_thread(lambda: list(islice(cursor, batch_size)))
            except LOOKUP_FAILURES as e:
                logger.error(f"[persistence] Reading AQL cursor failed: {e}")
                raise ReportLookupError(f"Report lookup failed: {e}") from e
            if not chunk:
                return
            for row in chunk:
                yield row
    finally:
        await _release_cursor(cursor)
