"""
Unified database connection abstraction for sqlguard.

This file defines:
- DBConnection: a wrapper around a live database handle
- DBConnector: factory that opens DBConnections from a backend

Backends must expose:
    backend.connect() -> raw DB-API connection
    backend.describe_columns_sql() -> introspection statement
    backend.describe_columns(rows) -> list of ColumnInfo
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from ..errors import QueryError
from . import execution, queries
from .helpers import normalize_params, row_to_dict
from .backend_base import ensure_backend
from .policy import AbortPolicy, FailurePolicy, policy_from_config
from .result import ColumnInfo, StatementResult
from .statement import ErrorMode, PreparedStatement

logger = logging.getLogger(__name__)


class DBConnection:
    """
    Thin wrapper around a raw DB-API 2.0 connection.

    Responsibilities:
        - Own the connection-wide error mode (see ErrorMode)
        - Prepare statements and run low-level queries
        - Expose the status-reporting and fail-fast helpers as methods
        - Leave transaction handling to the caller

    Notes:
        - One in-flight call per connection; the error mode is shared
          state and is not guarded against concurrent use
        - Caller must commit() after mutating operations
        - Safe to close() multiple times
    """

    def __init__(
        self,
        raw_conn: Any,
        backend: Any,
        *,
        errmode: Any = ErrorMode.EXCEPTION,
        failure_policy: Optional[FailurePolicy] = None,
        log_errors: bool = True,
    ):
        self.raw = raw_conn
        self.backend = backend
        self.errmode = ErrorMode.coerce(errmode)
        self.failure_policy = failure_policy or AbortPolicy()
        self.log_errors = log_errors
        self.last_error: Optional[QueryError] = None

    # ------------------------------------------------------------------
    # Error mode
    # ------------------------------------------------------------------

    @contextmanager
    def error_mode(self, mode: Any) -> Iterator["DBConnection"]:
        """
        Switch the error mode for the duration of a block.

        The previous mode is restored on every exit path.
        """
        previous = self.errmode
        self.errmode = ErrorMode.coerce(mode)
        try:
            yield self
        finally:
            self.errmode = previous

    def report_error(self, exc: BaseException, sql: Optional[str]) -> None:
        """
        Record a driver failure and report it according to the error mode.

        Raises QueryError in ErrorMode.EXCEPTION, otherwise returns.
        """
        error = exc if isinstance(exc, QueryError) else QueryError.from_exception(exc, sql)
        self.last_error = error

        if self.errmode is ErrorMode.EXCEPTION:
            if error is exc:
                raise error
            raise error from exc

        if self.errmode is ErrorMode.WARNING:
            logger.warning("DB statement failed: %s | Query: %r", error.message, sql)

    # ------------------------------------------------------------------
    # Low-level statement API
    # ------------------------------------------------------------------

    def prepare(self, sql: str) -> Optional[PreparedStatement]:
        """
        Validate the statement text and open a cursor for it.

        Returns None on failure unless the error mode raises.
        """
        try:
            if not isinstance(sql, str) or not sql.strip():
                raise QueryError("Query was empty", sql=sql)
            cursor = self.raw.cursor()
        except Exception as e:
            self.report_error(e, sql)
            return None
        return PreparedStatement(self, cursor, sql)

    def execute(self, query: str, params: Any = None):
        """
        Execute a single SQL statement.
        Returns the underlying cursor, or None on failure.
        """
        statement = self.prepare(query)
        if statement is None:
            return None
        if not statement.execute(normalize_params(params)):
            return None
        return statement.cursor

    def fetch_all(self, query: str, params: Any = None) -> Optional[List[Dict[str, Any]]]:
        """
        Execute a SELECT statement and return a list of dict rows.
        """
        cur = self.execute(query, params)
        if cur is None:
            return None
        return [row_to_dict(r, cur.description) for r in cur.fetchall()]

    def fetch_one(self, query: str, params: Any = None) -> Optional[Dict[str, Any]]:
        """
        Execute a SELECT statement and return a single dict row or None.
        """
        cur = self.execute(query, params)
        if cur is None:
            return None
        row = cur.fetchone()
        return row_to_dict(row, cur.description) if row is not None else None

    # ------------------------------------------------------------------
    # Status-reporting helpers
    # ------------------------------------------------------------------

    def execute_with_status(
        self, sql: str, params: Any = None, log_errors: Optional[bool] = None
    ) -> StatementResult:
        return execution.execute_with_status(self, sql, params, log_errors)

    def execute_or_die(
        self,
        sql: str,
        params: Any = None,
        log_errors: Optional[bool] = None,
        policy: Optional[FailurePolicy] = None,
    ) -> StatementResult:
        return queries.execute_or_die(self, sql, params, log_errors, policy)

    def fetch_row_or_die(
        self,
        sql: str,
        params: Any = None,
        log_errors: Optional[bool] = None,
        policy: Optional[FailurePolicy] = None,
    ) -> Optional[Dict[str, Any]]:
        return queries.fetch_row_or_die(self, sql, params, log_errors, policy)

    def fetch_all_rows_or_die(
        self,
        sql: str,
        params: Any = None,
        log_errors: Optional[bool] = None,
        policy: Optional[FailurePolicy] = None,
    ) -> List[Dict[str, Any]]:
        return queries.fetch_all_rows_or_die(self, sql, params, log_errors, policy)

    def table_metadata(self, table_name: str) -> Optional[List[ColumnInfo]]:
        return queries.table_metadata(self, table_name)

    # ------------------------------------------------------------------
    # Transaction and connection lifecycle
    # ------------------------------------------------------------------

    def commit(self) -> None:
        """
        Commit the current transaction.
        """
        try:
            self.raw.commit()
        except Exception as e:
            raise RuntimeError(f"Commit failed: {e}") from e

    def rollback(self) -> None:
        """
        Roll back the current transaction.
        """
        try:
            self.raw.rollback()
        except Exception:
            # Some backends auto-handle rollback; this is best-effort only.
            logger.debug("Rollback failed", exc_info=True)

    def close(self) -> None:
        """
        Close the underlying connection safely.
        """
        try:
            self.raw.close()
        except Exception:
            # Allow double-close or backend errors w/out propagating
            logger.debug("Close failed", exc_info=True)


# ----------------------------------------------------------------------
# Connector
# ----------------------------------------------------------------------

class DBConnector:
    """
    Database connection factory.

    Every get() opens a fresh connection; nothing is pooled or reused.

    The backend must provide:
        - connect()  -> raw DB-API connection
    """

    def __init__(self, backend: Any, config: Any = None):
        self.backend = ensure_backend(backend)
        self.config = config
        self.errmode = ErrorMode.coerce(getattr(config, "error_mode", ErrorMode.EXCEPTION))
        self.log_errors = bool(getattr(config, "log_errors", True))
        self.failure_policy = policy_from_config(config)

    def get(self) -> DBConnection:
        """
        Open a new DBConnection wrapper.
        """
        raw = self.backend.connect()
        return DBConnection(
            raw,
            self.backend,
            errmode=self.errmode,
            failure_policy=self.failure_policy,
            log_errors=self.log_errors,
        )

    # ------------------------------------------------------------------
    # Context manager syntax:
    #     with connector.connection() as conn:
    #         ...
    # ------------------------------------------------------------------

    def connection(self):
        return _ConnectionContext(self)


class _ConnectionContext:
    """
    Internal context manager for DBConnection.
    """

    def __init__(self, connector: DBConnector):
        self.connector = connector
        self.conn: Optional[DBConnection] = None

    def __enter__(self) -> DBConnection:
        self.conn = self.connector.get()
        return self.conn

    def __exit__(self, exc_type, exc, tb):
        if self.conn is None:
            return False

        # Rollback on error
        if exc_type is not None:
            self.conn.rollback()

        # Always close
        self.conn.close()

        # Propagate exceptions
        return False


__all__ = [
    "DBConnection",
    "DBConnector",
]
