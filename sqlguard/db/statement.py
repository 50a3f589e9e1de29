"""
Prepared statements and the connection-wide error mode.

DB-API 2.0 has no separate prepare step, so "prepare" here means
validating the statement text and opening a cursor for it. Errors from
either step are reported through the owning connection's error mode.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from ..errors import ConfigurationError
from . import helpers
from .helpers import Params

if TYPE_CHECKING:
    from .connection import DBConnection


class ErrorMode(str, Enum):
    """
    How DBConnection reports a driver failure.

    SILENT     return a falsy value, remember the error in ``last_error``
    WARNING    as SILENT, and log a warning
    EXCEPTION  raise QueryError
    """

    SILENT = "silent"
    WARNING = "warning"
    EXCEPTION = "exception"

    @classmethod
    def coerce(cls, value: Any) -> "ErrorMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown error mode {value!r}; expected one of "
                f"{[m.value for m in cls]}"
            ) from None


class PreparedStatement:
    """
    A statement bound to an open cursor, ready for execute().

    Created by DBConnection.prepare(); not meant to be built directly.
    """

    def __init__(self, conn: "DBConnection", cursor: Any, sql: str):
        self.conn = conn
        self.cursor = cursor
        self.sql = sql

    def execute(self, params: Params = None) -> bool:
        """
        Run the statement with already-normalized parameters.

        Returns True on success. On failure the connection's error mode
        decides between raising QueryError and returning False.
        """
        try:
            helpers.safe_execute(self.cursor, self.sql, params)
        except Exception as e:
            self.conn.report_error(e, self.sql)
            return False
        return True

    def __repr__(self) -> str:
        return f"PreparedStatement({self.sql!r})"


__all__ = [
    "ErrorMode",
    "PreparedStatement",
]
