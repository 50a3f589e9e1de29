"""
sqlguard.db

Query execution layer for sqlguard.

This package provides:

- A connection wrapper with a scoped error mode:
      * DBConnection
      * DBConnector
      * ErrorMode

- The status-reporting execution wrapper and helpers built on it:
      * execute_with_status
      * execute_or_die
      * fetch_row_or_die
      * fetch_all_rows_or_die
      * table_metadata

- Result types:
      * StatementResult
      * ColumnInfo

- Fail-fast policies:
      * AbortPolicy
      * RaisePolicy

- Concrete database backend implementations:
      * SQLiteBackend   (default: local development + tests)
      * PostgresBackend
"""

from .connection import DBConnection, DBConnector
from .statement import ErrorMode, PreparedStatement
from .execution import execute_with_status
from .queries import (
    execute_or_die,
    fetch_row_or_die,
    fetch_all_rows_or_die,
    table_metadata,
)
from .result import StatementResult, ColumnInfo
from .policy import FailurePolicy, AbortPolicy, RaisePolicy
from .sqlite_backend import SQLiteBackend
from .postgres_backend import PostgresBackend
from .backend_base import DBBackend, BackendLike, ensure_backend
from .helpers import normalize_params, row_to_dict

__all__ = [
    # Connection
    "DBConnection",
    "DBConnector",
    "ErrorMode",
    "PreparedStatement",

    # Execution + helpers
    "execute_with_status",
    "execute_or_die",
    "fetch_row_or_die",
    "fetch_all_rows_or_die",
    "table_metadata",

    # Results
    "StatementResult",
    "ColumnInfo",

    # Policies
    "FailurePolicy",
    "AbortPolicy",
    "RaisePolicy",

    # Backends
    "SQLiteBackend",
    "PostgresBackend",
    "DBBackend",
    "BackendLike",
    "ensure_backend",

    # Utilities
    "normalize_params",
    "row_to_dict",
]
