"""
Backend base interfaces for sqlguard.

This module defines the minimal contracts that all database backends
(SQLite, Postgres, etc.) must satisfy.

It is intentionally light-weight:

- It does NOT depend on any specific DB driver.
- It only encodes the structural requirements assumed by:
      * sqlguard.db.connection.DBConnector
      * sqlguard.db.queries.table_metadata

Backends must expose:

    backend.connect() -> raw_connection
    backend.describe_columns_sql() -> str, one placeholder for the table name
    backend.describe_columns(rows) -> list[ColumnInfo]
    backend.init_schema(conn, script)  # optional

This file provides:
- DBBackend: abstract base class
- BackendLike: structural protocol
- ensure_backend: runtime validator
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .result import ColumnInfo


# ---------------------------------------------------------------------------
# Abstract Base Backend
# ---------------------------------------------------------------------------

class DBBackend(ABC):
    """
    Abstract base class for a sqlguard backend.

    Concrete subclasses may define any constructor signature they want
    (e.g. SQLiteBackend(db_path), PostgresBackend(dsn)).
    """

    name: str = "generic"

    @abstractmethod
    def connect(self) -> Any:
        """
        Acquire and return a new raw DB-API 2.0 connection.
        """
        raise NotImplementedError

    @abstractmethod
    def describe_columns_sql(self) -> str:
        """
        Introspection statement listing a table's columns in order.

        Must take exactly one positional parameter: the table name.
        """
        raise NotImplementedError

    @abstractmethod
    def describe_columns(self, rows: List[Dict[str, Any]]) -> List[ColumnInfo]:
        """
        Convert the rows returned by describe_columns_sql() to ColumnInfo.
        """
        raise NotImplementedError

    def init_schema(self, conn: Any, script: Optional[str] = None) -> None:
        """
        Optional schema bootstrap.

        Default: no-op.
        """
        return None


# ---------------------------------------------------------------------------
# Structural Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class BackendLike(Protocol):
    """
    Structural protocol for objects usable as a sqlguard backend.

    Lets DBConnector and the metadata helper operate on test doubles
    without them subclassing DBBackend.
    """

    def connect(self) -> Any:
        ...

    def describe_columns_sql(self) -> str:
        ...

    def describe_columns(self, rows: List[Dict[str, Any]]) -> List[ColumnInfo]:
        ...


# ---------------------------------------------------------------------------
# Runtime Guard
# ---------------------------------------------------------------------------

def ensure_backend(backend: Any) -> BackendLike:
    """
    Validate that an object behaves like a sqlguard backend.

    Raises:
        TypeError if required attributes are missing.
    """
    if not isinstance(backend, BackendLike):
        missing = [
            attr
            for attr in ("connect", "describe_columns_sql", "describe_columns")
            if not callable(getattr(backend, attr, None))
        ]
        raise TypeError(
            f"Invalid sqlguard backend {backend!r}: missing attributes {missing}"
        )

    return backend


__all__ = [
    "DBBackend",
    "BackendLike",
    "ensure_backend",
]
