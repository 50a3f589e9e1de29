"""
Shared DB helper utilities.

These functions ensure:
    - one parameter shape for every driver call
    - predictable row→dict mapping

Backends and the execution wrapper import this module as `.helpers`
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Sequence, Tuple, Union

Params = Union[Tuple[Any, ...], Dict[str, Any], None]


# ----------------------------------------------------------------------
# Parameter handling
# ----------------------------------------------------------------------

def normalize_params(params: Any) -> Params:
    """
    Normalize caller-supplied parameters into a DB-API parameter set.

    - None           -> None (execute without parameters)
    - list / tuple   -> tuple
    - dict           -> unchanged (named placeholders)
    - anything else  -> one-element tuple

    Strings and bytes are single values, never sequences of characters.
    """
    if params is None:
        return None
    if isinstance(params, dict):
        return params
    if isinstance(params, (list, tuple)):
        return tuple(params)
    return (params,)


# ----------------------------------------------------------------------
# Execution helpers
# ----------------------------------------------------------------------

def safe_execute(cursor: Any, query: str, params: Params = None):
    """
    Execute a single SQL statement on an open cursor.

    Parameters
    ----------
    cursor:
        DB-API compatible cursor (sqlite3, psycopg2, etc.).
    query:
        SQL string with placeholders.
    params:
        Normalized parameters, or None to execute without any.

    Returns
    -------
    Any
        The cursor, positioned before the first row of the result set.
    """
    # psycopg2 only interprets "%" escapes when a parameter set is supplied
    if params is None:
        cursor.execute(query)
    else:
        cursor.execute(query, params)
    return cursor


# ----------------------------------------------------------------------
# Row mapping
# ----------------------------------------------------------------------

def row_to_dict(row: Any, description: Optional[Sequence[Sequence[Any]]] = None) -> dict:
    """
    Convert sqlite3.Row, psycopg2 RealDictRow or a plain tuple to a dict.

    Column order follows the select list.

    Parameters
    ----------
    row:
        Backend-specific row object.
    description:
        ``cursor.description``; supplies column names for tuple rows.

    Returns
    -------
    dict
        Plain Python dictionary representation of the row.
    """
    if row is None:
        return {}

    # psycopg2.extras.RealDictRow and other dict rows
    if isinstance(row, dict):
        return dict(row)

    # sqlite3.Row; a repeated column label keeps its last value
    if hasattr(row, "keys"):
        return dict(zip(row.keys(), tuple(row)))

    if description:
        return {col[0]: value for col, value in zip(description, row)}

    # Fallback: treat as a tuple-like sequence
    return dict(enumerate(row))


__all__ = [
    "Params",
    "normalize_params",
    "safe_execute",
    "row_to_dict",
]
