"""
Status-reporting execution wrapper.

execute_with_status() collapses prepare() and execute() into one call
whose outcome is always a StatementResult:

    result.success       True/False
    result.elapsed_time  seconds spent in prepare + execute
    result.error_code    SQLSTATE, "42000" when the driver has none
    result.error_info    (sqlstate, driver_code, message)
    result.error_message error_info joined with ':'

Driver failures never escape; callers check result.success.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Optional

from ..errors import QueryError, ReservedFieldError
from .helpers import normalize_params
from .result import StatementResult
from .statement import ErrorMode

if TYPE_CHECKING:
    from .connection import DBConnection

logger = logging.getLogger(__name__)

# Attribute names owned by StatementResult; a driver cursor must not have them.
RESERVED_FIELDS = ("success", "elapsed_time")


def execute_with_status(
    conn: "DBConnection",
    sql: str,
    params: Any = None,
    log_errors: Optional[bool] = None,
) -> StatementResult:
    """
    Prepare and execute ``sql`` with full error capture.

    Parameters
    ----------
    conn:
        DBConnection to run the statement on.
    sql:
        SQL text with driver-style placeholders.
    params:
        None, a single value, a list/tuple of values, or a dict of
        named values. A single value is bound as a one-element tuple.
    log_errors:
        Write the joined error triple to the error log on failure. None
        uses the connection's default.

    Returns
    -------
    StatementResult
        Positioned for fetching when ``success`` is True.

    Raises
    ------
    ReservedFieldError
        Only if the driver cursor already defines a reserved field.
    """
    if log_errors is None:
        log_errors = conn.log_errors

    bound = normalize_params(params)
    cursor = None
    error: Optional[QueryError] = None

    with conn.error_mode(ErrorMode.EXCEPTION):
        start = time.perf_counter()
        try:
            statement = conn.prepare(sql)
            cursor = statement.cursor
            statement.execute(bound)
        except QueryError as e:
            error = e
        elapsed = time.perf_counter() - start

    _check_reserved_fields(cursor)

    if error is None:
        logger.debug("SQL ok in %.6fs: %s", elapsed, sql)
        return StatementResult.succeeded(sql, bound, cursor, elapsed)

    if log_errors:
        logger.error("%s", ":".join(error.error_info))

    _discard_cursor(cursor)
    return StatementResult.failed(sql, bound, error.error_info, elapsed)


def _check_reserved_fields(cursor: Any) -> None:
    if cursor is None:
        return
    for name in RESERVED_FIELDS:
        if hasattr(cursor, name):
            message = f"{type(cursor).__name__} should not have a {name!r} member"
            logger.critical(message)
            raise ReservedFieldError(message)


def _discard_cursor(cursor: Any) -> None:
    if cursor is None:
        return
    try:
        cursor.close()
    except Exception:
        logger.debug("Failed to close cursor of failed statement", exc_info=True)


__all__ = [
    "RESERVED_FIELDS",
    "execute_with_status",
]
