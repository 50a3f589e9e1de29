"""
Tests for DBConnection error modes, low-level queries and DBConnector
"""

import logging
import sqlite3

import pytest

from sqlguard.config import SQLGuardConfig
from sqlguard.db import DBConnection, DBConnector, ErrorMode, SQLiteBackend
from sqlguard.errors import ConfigurationError, QueryError

from conftest import SCHEMA


class TestErrorModes:
    """Low-level calls follow the connection's error mode"""

    def test_exception_mode_raises_chained_query_error(self, conn):
        conn.errmode = ErrorMode.EXCEPTION

        with pytest.raises(QueryError) as exc_info:
            conn.execute("SELECT * FROM no_such_table")

        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
        assert exc_info.value.sql == "SELECT * FROM no_such_table"
        assert exc_info.value.error_info[0] == "42000"

    def test_silent_mode_returns_none(self, conn, caplog):
        conn.errmode = ErrorMode.SILENT

        assert conn.execute("SELECT * FROM no_such_table") is None
        assert "no such table" in conn.last_error.message
        assert caplog.records == []

    def test_warning_mode_logs(self, conn, caplog):
        conn.errmode = ErrorMode.WARNING

        with caplog.at_level(logging.WARNING, logger="sqlguard"):
            assert conn.fetch_all("SELECT * FROM no_such_table") is None

        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_prepare_rejects_empty_sql(self, conn):
        conn.errmode = ErrorMode.SILENT

        assert conn.prepare("") is None
        assert conn.last_error.message == "Query was empty"

    def test_error_mode_block_restores_after_exception(self, conn):
        conn.errmode = ErrorMode.WARNING

        with pytest.raises(RuntimeError):
            with conn.error_mode("exception"):
                assert conn.errmode is ErrorMode.EXCEPTION
                raise RuntimeError("inside block")

        assert conn.errmode is ErrorMode.WARNING

    def test_mode_names_are_case_insensitive(self, conn):
        with conn.error_mode(" Silent "):
            assert conn.errmode is ErrorMode.SILENT

    def test_unknown_mode(self, conn):
        with pytest.raises(ConfigurationError):
            with conn.error_mode("loud"):
                pass


class TestLowLevelQueries:
    """execute / fetch_one / fetch_all without status wrapping"""

    def test_fetch_one(self, conn):
        assert conn.fetch_one("SELECT name FROM t WHERE id = ?", 1) == {"name": "alpha"}
        assert conn.fetch_one("SELECT name FROM t WHERE id = ?", 42) is None

    def test_fetch_all(self, conn):
        assert conn.fetch_all("SELECT id FROM t WHERE id < ? ORDER BY id", (3,)) == [
            {"id": 1},
            {"id": 2},
        ]

    def test_execute_returns_cursor(self, conn):
        cur = conn.execute("SELECT COUNT(*) AS n FROM t")

        assert cur.fetchone()["n"] == 3


class TestDBConnector:
    """DBConnector opens and closes connections"""

    def test_config_drives_connection_settings(self):
        config = SQLGuardConfig(db_uri=":memory:", error_mode="warning", log_errors=False)
        conn = DBConnector(SQLiteBackend(":memory:"), config).get()

        try:
            assert conn.errmode is ErrorMode.WARNING
            assert conn.log_errors is False
        finally:
            conn.close()

    def test_defaults_without_config(self):
        conn = DBConnector(SQLiteBackend(":memory:")).get()

        try:
            assert conn.errmode is ErrorMode.EXCEPTION
            assert conn.log_errors is True
            assert isinstance(conn, DBConnection)
        finally:
            conn.close()

    def test_rejects_non_backend(self):
        with pytest.raises(TypeError, match="describe_columns"):
            DBConnector(object())

    def test_context_rolls_back_and_closes(self, tmp_path):
        backend = SQLiteBackend(str(tmp_path / "app.db"))
        connector = DBConnector(backend)
        with connector.connection() as conn:
            backend.init_schema(conn.raw, SCHEMA)

        with pytest.raises(RuntimeError):
            with connector.connection() as conn:
                conn.execute_or_die("INSERT INTO t (name) VALUES (?)", "uncommitted")
                raise RuntimeError("abort transaction")

        with connector.connection() as conn:
            assert conn.fetch_row_or_die("SELECT COUNT(*) AS n FROM t") == {"n": 3}

    def test_close_twice(self, conn):
        conn.close()
        conn.close()
