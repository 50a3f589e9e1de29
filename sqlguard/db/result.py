"""
Statement results and column metadata records.

StatementResult wraps the driver cursor of one executed statement together
with its success flag, timing and normalized error triple.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..errors import DEFAULT_SQLSTATE, SUCCESS_SQLSTATE, StatementFailed
from .helpers import Params, row_to_dict


# ----------------------------------------------------------------------
# Statement result
# ----------------------------------------------------------------------

@dataclass
class StatementResult:
    """
    Outcome of one prepare→execute round-trip.

    Wraps the driver cursor rather than extending it, so the status
    fields below never collide with driver attributes.

    Exactly one of these holds:
        - success is True and cursor is positioned for fetching
        - success is False, cursor is None and the error fields describe
          what the driver reported
    """

    sql: str
    params: Params = None
    cursor: Any = None
    success: bool = False
    elapsed_time: float = 0.0
    error_code: str = DEFAULT_SQLSTATE
    error_info: Tuple[str, str, str] = field(
        default=(DEFAULT_SQLSTATE, DEFAULT_SQLSTATE, "")
    )

    @classmethod
    def succeeded(cls, sql: str, params: Params, cursor: Any, elapsed_time: float) -> "StatementResult":
        return cls(
            sql=sql,
            params=params,
            cursor=cursor,
            success=True,
            elapsed_time=elapsed_time,
            error_code=SUCCESS_SQLSTATE,
            error_info=(SUCCESS_SQLSTATE, "", ""),
        )

    @classmethod
    def failed(
        cls,
        sql: str,
        params: Params,
        error_info: Tuple[str, str, str],
        elapsed_time: float,
    ) -> "StatementResult":
        return cls(
            sql=sql,
            params=params,
            cursor=None,
            success=False,
            elapsed_time=elapsed_time,
            error_code=error_info[0],
            error_info=error_info,
        )

    @property
    def error_message(self) -> str:
        """The error triple joined with ':' for logging; empty on success."""
        if self.success:
            return ""
        return ":".join(str(part) for part in self.error_info)

    def __bool__(self) -> bool:
        return self.success

    # ------------------------------------------------------------------
    # Cursor access
    # ------------------------------------------------------------------

    @property
    def rowcount(self) -> int:
        if self.cursor is None:
            return -1
        return getattr(self.cursor, "rowcount", -1)

    @property
    def column_names(self) -> List[str]:
        if self.cursor is None or not self.cursor.description:
            return []
        return [col[0] for col in self.cursor.description]

    def fetch_one(self) -> Optional[Dict[str, Any]]:
        """Next row as a dict, or None once the result set is exhausted.

        Statements that produce no result set (UPDATE, INSERT, DDL) also
        give None.
        """
        self._require_success()
        if self.cursor.description is None:
            return None
        row = self.cursor.fetchone()
        if row is None:
            return None
        return row_to_dict(row, self.cursor.description)

    def fetch_all(self) -> List[Dict[str, Any]]:
        """Every remaining row, in result-set order."""
        self._require_success()
        description = self.cursor.description
        if description is None:
            return []
        return [row_to_dict(row, description) for row in self.cursor.fetchall()]

    def _require_success(self) -> None:
        if not self.success:
            raise StatementFailed(self)


# ----------------------------------------------------------------------
# Table metadata
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class ColumnInfo:
    """
    One column of a table, in the shape MySQL's SHOW COLUMNS reports.

    key is "PRI" for primary-key columns, otherwise "".
    extra is "auto_increment", "identity" or "".
    """

    name: str
    type: str
    nullable: bool
    key: str = ""
    default: Optional[str] = None
    extra: str = ""


__all__ = [
    "StatementResult",
    "ColumnInfo",
]
