"""
Shared fixtures for sqlguard tests.
"""

import pytest

from sqlguard.config import SQLGuardConfig
from sqlguard.db import DBConnector, SQLiteBackend

SCHEMA = """
CREATE TABLE IF NOT EXISTS t (
    id     INTEGER PRIMARY KEY,
    name   TEXT NOT NULL,
    score  REAL DEFAULT 0
);

INSERT INTO t (name, score) VALUES ('alpha', 1.5);
INSERT INTO t (name, score) VALUES ('beta', 2.5);
INSERT INTO t (name, score) VALUES ('gamma', 3.5);
"""


class FakeDriverError(Exception):
    """Driver exception shaped like psycopg2.Error."""

    def __init__(self, message, pgcode=None):
        super().__init__(message)
        self.pgcode = pgcode
        self.pgerror = message


class FakeCursor:
    """Minimal DB-API cursor recording what it was asked to run."""

    def __init__(self, rows=None, description=None, fail=None):
        self.rows = list(rows or [])
        self.description = description
        self.rowcount = len(self.rows)
        self.fail = fail
        self.executed = []
        self.closed = False

    def execute(self, query, params=None):
        self.executed.append((query, params))
        if self.fail is not None:
            raise self.fail

    def fetchone(self):
        return self.rows.pop(0) if self.rows else None

    def fetchall(self):
        rows, self.rows = self.rows, []
        return rows

    def close(self):
        self.closed = True


class FakeRawConnection:
    """Raw connection handing out a prepared FakeCursor."""

    def __init__(self, cursor=None, cursor_error=None):
        self._cursor = cursor or FakeCursor()
        self.cursor_error = cursor_error
        self.closed = False

    def cursor(self):
        if self.cursor_error is not None:
            raise self.cursor_error
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        self.closed = True


def _open(backend, **config):
    connection = DBConnector(backend, SQLGuardConfig(db_uri=":memory:", **config)).get()
    backend.init_schema(connection.raw, SCHEMA)
    return connection


@pytest.fixture
def backend():
    return SQLiteBackend(":memory:")


@pytest.fixture
def conn(backend):
    """In-memory SQLite connection seeded with table t; aborts on failure."""
    connection = _open(backend)
    yield connection
    connection.close()


@pytest.fixture
def raising_conn(backend):
    """Same as conn, but fail-fast helpers raise StatementFailed."""
    connection = _open(backend, on_failure="raise")
    yield connection
    connection.close()
