"""
Tests for table metadata introspection
"""

from sqlguard.db import ColumnInfo, DBConnector, SQLiteBackend, table_metadata


class TestSQLiteMetadata:
    """table_metadata against a real SQLite schema"""

    def test_columns_of_seeded_table(self, conn):
        columns = table_metadata(conn, "t")

        assert [c.name for c in columns] == ["id", "name", "score"]
        assert columns[0] == ColumnInfo(
            name="id", type="INTEGER", nullable=False, key="PRI", default=None, extra="auto_increment"
        )
        assert columns[1].nullable is False
        assert columns[1].key == ""
        assert columns[2].nullable is True
        assert columns[2].default == "0"
        assert columns[2].type == "REAL"

    def test_missing_table_returns_failure_sentinel(self, conn):
        columns = conn.table_metadata("no_such_table")

        assert columns is None

    def test_table_name_is_bound_not_spliced(self, conn):
        assert conn.table_metadata("t; DROP TABLE t") is None
        assert conn.fetch_row_or_die("SELECT COUNT(*) AS n FROM t") == {"n": 3}

    def test_composite_key_has_no_auto_increment(self, conn):
        conn.execute_or_die(
            "CREATE TABLE pair (a INTEGER NOT NULL, b TEXT NOT NULL, PRIMARY KEY (a, b))"
        )

        columns = conn.table_metadata("pair")

        assert [c.key for c in columns] == ["PRI", "PRI"]
        assert [c.extra for c in columns] == ["", ""]

    def test_failing_introspection_returns_none(self):
        class BrokenBackend(SQLiteBackend):
            def describe_columns_sql(self):
                return "SELECT * FROM pragma_no_such_function(?)"

        backend = BrokenBackend(":memory:")

        conn = DBConnector(backend).get()
        try:
            assert conn.table_metadata("anything") is None
        finally:
            conn.close()
