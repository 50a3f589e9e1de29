"""
Fail-fast and introspection helpers built on execute_with_status().

The *_or_die helpers treat a failed statement as a programming bug and
hand it to the connection's failure policy. Fetch helpers materialize
rows into plain dicts; queries are expected to be paged with an explicit
LIMIT, so reading every row into a list is fine. Callers that want to
stream should use execute_with_status() and read result.cursor.

table_metadata() is the exception: a failed lookup is a normal outcome
and comes back as None.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .execution import execute_with_status
from .result import ColumnInfo, StatementResult

if TYPE_CHECKING:
    from .connection import DBConnection
    from .policy import FailurePolicy

logger = logging.getLogger(__name__)


def execute_or_die(
    conn: "DBConnection",
    sql: str,
    params: Any = None,
    log_errors: Optional[bool] = None,
    policy: Optional["FailurePolicy"] = None,
) -> StatementResult:
    """
    Run ``sql`` and return the successful result.

    On failure the error is always logged together with the SQL text,
    then ``policy`` (or the connection's policy) takes over and does
    not return.
    """
    result = execute_with_status(conn, sql, params, log_errors)
    if not result.success:
        logger.error("SQL failure: %s %s", result.error_message, sql)
        (policy or conn.failure_policy).handle(result)
    return result


def fetch_row_or_die(
    conn: "DBConnection",
    sql: str,
    params: Any = None,
    log_errors: Optional[bool] = None,
    policy: Optional["FailurePolicy"] = None,
) -> Optional[Dict[str, Any]]:
    """First row as a dict, or None when the query matched nothing."""
    result = execute_or_die(conn, sql, params, log_errors, policy)
    return result.fetch_one()


def fetch_all_rows_or_die(
    conn: "DBConnection",
    sql: str,
    params: Any = None,
    log_errors: Optional[bool] = None,
    policy: Optional["FailurePolicy"] = None,
) -> List[Dict[str, Any]]:
    """Every row as a list of dicts; an empty list when nothing matched."""
    result = execute_or_die(conn, sql, params, log_errors, policy)
    return result.fetch_all()


def table_metadata(conn: "DBConnection", table_name: str) -> Optional[List[ColumnInfo]]:
    """
    Describe the columns of ``table_name``.

    Returns
    -------
    list of ColumnInfo
        One entry per column, in table order.
    None
        The introspection query failed, or reported no columns. Every
        real table has at least one column, and both SQLite and Postgres
        answer an unknown table with an empty set instead of an error.
    """
    backend = conn.backend
    result = execute_with_status(conn, backend.describe_columns_sql(), (table_name,))
    if not result.success:
        return None

    rows = result.fetch_all()
    if not rows:
        logger.info("No columns reported for table %r", table_name)
        return None

    return backend.describe_columns(rows)


__all__ = [
    "execute_or_die",
    "fetch_row_or_die",
    "fetch_all_rows_or_die",
    "table_metadata",
]
