"""
Exception types and driver-error normalization for sqlguard.

Hierarchy:

    SQLGuardError
        QueryError          driver failure surfaced in ErrorMode.EXCEPTION
        StatementFailed     fail-fast escalation of a failed StatementResult
        ReservedFieldError  driver cursor already owns a wrapper field name
        ConfigurationError  invalid configuration value
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

# SQLSTATE class 42: syntax error or access rule violation.
DEFAULT_SQLSTATE = "42000"
SUCCESS_SQLSTATE = "00000"


def describe_driver_error(exc: BaseException) -> Tuple[str, str, str]:
    """
    Reduce a driver exception to ``(sqlstate, driver_code, message)``.

    Recognized attributes:
        psycopg2   pgcode / pgerror
        psycopg 3  sqlstate
        sqlite3    sqlite_errorname / sqlite_errorcode (Python 3.11+)
        MySQL      args == (errno, message)

    Missing parts default to "42000"; the message defaults to str(exc).
    """
    sqlstate = getattr(exc, "pgcode", None) or getattr(exc, "sqlstate", None)

    driver_code: Any = (
        getattr(exc, "pgcode", None)
        or getattr(exc, "sqlite_errorname", None)
        or getattr(exc, "sqlite_errorcode", None)
    )
    message: Any = getattr(exc, "pgerror", None)

    args = getattr(exc, "args", ())
    if driver_code is None and len(args) >= 2 and isinstance(args[0], int):
        driver_code = args[0]
        message = message or args[1]

    message = (str(message).strip() if message else "") or str(exc) or type(exc).__name__

    return (
        str(sqlstate) if sqlstate else DEFAULT_SQLSTATE,
        str(driver_code) if driver_code is not None else DEFAULT_SQLSTATE,
        message,
    )


class SQLGuardError(Exception):
    """Base class for every error raised by sqlguard."""


class QueryError(SQLGuardError):
    """
    A prepare or execute call rejected by the database driver.

    Attributes
    ----------
    sqlstate:
        Five-character SQLSTATE, or "42000" when the driver reports none.
    driver_code:
        Driver-specific code (pgcode, sqlite error name, MySQL errno...).
    message:
        Human-readable driver message.
    sql:
        Statement text that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        sqlstate: str = DEFAULT_SQLSTATE,
        driver_code: str = DEFAULT_SQLSTATE,
        sql: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.sqlstate = sqlstate
        self.driver_code = driver_code
        self.sql = sql

    @classmethod
    def from_exception(cls, exc: BaseException, sql: Optional[str] = None) -> "QueryError":
        sqlstate, driver_code, message = describe_driver_error(exc)
        return cls(message, sqlstate=sqlstate, driver_code=driver_code, sql=sql)

    @property
    def error_info(self) -> Tuple[str, str, str]:
        return (self.sqlstate, self.driver_code, self.message)


class StatementFailed(SQLGuardError):
    """
    Raised when a failed statement is escalated instead of aborting.

    The failed StatementResult is available as ``.result``.
    """

    def __init__(self, result: Any):
        super().__init__(result.error_message)
        self.result = result


class ReservedFieldError(SQLGuardError):
    """The driver cursor already carries ``success`` or ``elapsed_time``."""


class ConfigurationError(SQLGuardError, ValueError):
    pass


__all__ = [
    "DEFAULT_SQLSTATE",
    "SUCCESS_SQLSTATE",
    "describe_driver_error",
    "SQLGuardError",
    "QueryError",
    "StatementFailed",
    "ReservedFieldError",
    "ConfigurationError",
]
