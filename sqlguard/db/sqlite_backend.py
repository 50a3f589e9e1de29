"""
SQLite backend for sqlguard.

Used for:
    - local development
    - tests
    - CLI tools and small services

Implements:
    - connect()
    - describe_columns_sql() / describe_columns()
    - init_schema()
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import sqlite3
from pathlib import Path

from .backend_base import DBBackend
from .result import ColumnInfo


# pragma_table_info() needs SQLite 3.16+; the table name is bound, not spliced.
DESCRIBE_COLUMNS_SQL = """
SELECT name, type, "notnull" AS not_null, dflt_value, pk
FROM pragma_table_info(?)
ORDER BY cid
"""


class SQLiteBackend(DBBackend):
    """
    Minimal SQLite backend.

    Parameters
    ----------
    db_path : str
        Path to the SQLite database file, or ":memory:".
    """

    name = "sqlite"

    def __init__(self, db_path: str):
        self.path = db_path if db_path == ":memory:" else Path(db_path)

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self) -> sqlite3.Connection:
        """
        Open a SQLite3 connection with row_factory=dict-like access.

        Also ensures foreign keys are enforced.
        """
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def describe_columns_sql(self) -> str:
        return DESCRIBE_COLUMNS_SQL

    def describe_columns(self, rows: List[Dict[str, Any]]) -> List[ColumnInfo]:
        pk_columns = [r for r in rows if r["pk"]]
        columns = []
        for row in rows:
            col_type = row["type"] or ""
            # A lone INTEGER PRIMARY KEY aliases the rowid
            rowid_alias = (
                bool(row["pk"])
                and len(pk_columns) == 1
                and col_type.upper() == "INTEGER"
            )
            columns.append(
                ColumnInfo(
                    name=row["name"],
                    type=col_type,
                    nullable=not row["not_null"] and not rowid_alias,
                    key="PRI" if row["pk"] else "",
                    default=row["dflt_value"],
                    extra="auto_increment" if rowid_alias else "",
                )
            )
        return columns

    # ------------------------------------------------------------------
    # Schema initializer
    # ------------------------------------------------------------------

    def init_schema(self, conn, script: Optional[str] = None) -> None:
        """
        Run a bootstrap script (CREATE TABLE IF NOT EXISTS ...).

        Idempotent as long as the script is.
        """
        if not script:
            return
        cur = conn.cursor()
        cur.executescript(script)
        conn.commit()
