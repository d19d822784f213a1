"""
Unit tests for table_dumper.py
"""

from unittest import mock

import pytest

from sqldump.errors import NoColumnsError, TableExportError, TableMismatchError
from sqldump.models import LiteralMode, TableRecord
from sqldump.table_dumper import TableDumper


def make_cursor(columns, rows):
    """Create a mock cursor yielding the given rows."""
    cursor = mock.MagicMock()
    cursor.description = [(name, None, None, None, None, None, True) for name in columns]
    cursor.__iter__.return_value = iter(rows)
    return cursor


class TestTableDumper:
    """Tests for TableDumper class."""

    @pytest.fixture
    def mock_connection(self):
        """Create a mock database connection."""
        conn = mock.MagicMock()
        conn.get_create_table.return_value = ("users", "CREATE TABLE `users` (`id` int, `name` text)")
        conn.get_cursor.return_value = make_cursor(["id", "name"], [(1, "alice"), (2, "bob")])
        return conn

    def test_init(self, mock_connection):
        """Test TableDumper initialization."""
        dumper = TableDumper(mock_connection)
        assert dumper.connection == mock_connection
        assert dumper.encoder.mode == LiteralMode.RAW

    def test_init_escaped_mode(self, mock_connection):
        dumper = TableDumper(mock_connection, LiteralMode.ESCAPED)
        assert dumper.encoder.mode == LiteralMode.ESCAPED

    def test_export_table(self, mock_connection):
        """Test exporting a table with rows."""
        dumper = TableDumper(mock_connection)
        record = dumper.export_table("users")

        assert isinstance(record, TableRecord)
        assert record.name == "users"
        assert record.create_statement == "CREATE TABLE `users` (`id` int, `name` text)"
        assert record.values_clause == "('1','alice'),('2','bob')"
        assert record.row_count == 2

    def test_export_table_queries(self, mock_connection):
        """Test the structure lookup happens before the row scan."""
        dumper = TableDumper(mock_connection)
        dumper.export_table("users")

        mock_connection.get_create_table.assert_called_once_with("users")
        cursor = mock_connection.get_cursor.return_value
        cursor.execute.assert_called_once_with("SELECT * FROM `users`")


class TestGetCreateStatement:
    """Tests for get_create_statement method."""

    def test_returns_statement(self):
        conn = mock.MagicMock()
        conn.get_create_table.return_value = ("logs", "CREATE TABLE `logs` (`id` int)")
        dumper = TableDumper(conn)
        assert dumper.get_create_statement("logs") == "CREATE TABLE `logs` (`id` int)"

    def test_mismatched_table_name(self):
        """Test the echoed table name must match the requested one."""
        conn = mock.MagicMock()
        conn.get_create_table.return_value = ("other", "CREATE TABLE `other` (`id` int)")
        dumper = TableDumper(conn)

        with pytest.raises(TableMismatchError) as exc_info:
            dumper.get_create_statement("users")

        assert exc_info.value.table == "users"
        assert exc_info.value.returned == "other"
        assert "unexpected table" in str(exc_info.value)

    def test_no_row_returned(self):
        conn = mock.MagicMock()
        conn.get_create_table.return_value = None
        dumper = TableDumper(conn)

        with pytest.raises(TableExportError) as exc_info:
            dumper.get_create_statement("users")
        assert exc_info.value.table == "users"

    def test_query_failure_names_table(self):
        conn = mock.MagicMock()
        conn.get_create_table.side_effect = Exception("Table 'db.users' doesn't exist")
        dumper = TableDumper(conn)

        with pytest.raises(TableExportError) as exc_info:
            dumper.get_create_statement("users")

        assert exc_info.value.table == "users"
        assert "users" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, Exception)

    def test_mismatch_skips_row_scan(self):
        """Test no rows are read when the structure check fails."""
        conn = mock.MagicMock()
        conn.get_create_table.return_value = ("other", "CREATE TABLE `other` (`id` int)")
        dumper = TableDumper(conn)

        with pytest.raises(TableMismatchError):
            dumper.export_table("users")
        conn.get_cursor.assert_not_called()


class TestMaterializeValues:
    """Tests for materialize_values method."""

    def test_rows_in_source_order(self):
        conn = mock.MagicMock()
        conn.get_cursor.return_value = make_cursor(
            ["id", "name", "email"],
            [(3, "carol", "c@x"), (1, "alice", "a@x")]
        )
        dumper = TableDumper(conn)

        values, count = dumper.materialize_values("users")

        assert values == "('3','carol','c@x'),('1','alice','a@x')"
        assert count == 2

    def test_empty_table(self):
        """Test an empty table with columns yields an empty clause."""
        conn = mock.MagicMock()
        conn.get_cursor.return_value = make_cursor(["id"], [])
        dumper = TableDumper(conn)

        values, count = dumper.materialize_values("logs")

        assert values == ""
        assert count == 0

    def test_no_columns(self):
        conn = mock.MagicMock()
        conn.get_cursor.return_value = make_cursor([], [])
        dumper = TableDumper(conn)

        with pytest.raises(NoColumnsError) as exc_info:
            dumper.materialize_values("broken")
        assert exc_info.value.table == "broken"
        assert "no columns" in str(exc_info.value)

    def test_missing_description(self):
        conn = mock.MagicMock()
        cursor = make_cursor([], [])
        cursor.description = None
        conn.get_cursor.return_value = cursor
        dumper = TableDumper(conn)

        with pytest.raises(NoColumnsError):
            dumper.materialize_values("broken")

    def test_null_and_empty_render_alike(self):
        conn = mock.MagicMock()
        conn.get_cursor.return_value = make_cursor(["id", "note"], [(1, None), (2, "")])
        dumper = TableDumper(conn)

        values, _ = dumper.materialize_values("notes")
        assert values == "('1',''),('2','')"

    def test_cursor_closed_on_success(self):
        conn = mock.MagicMock()
        cursor = make_cursor(["id"], [(1,)])
        conn.get_cursor.return_value = cursor

        TableDumper(conn).materialize_values("t")
        cursor.close.assert_called_once()

    def test_cursor_closed_on_query_failure(self):
        conn = mock.MagicMock()
        cursor = make_cursor(["id"], [])
        cursor.execute.side_effect = Exception("Lost connection")
        conn.get_cursor.return_value = cursor

        with pytest.raises(TableExportError) as exc_info:
            TableDumper(conn).materialize_values("t")

        assert exc_info.value.table == "t"
        assert "Lost connection" in str(exc_info.value)
        cursor.close.assert_called_once()

    def test_close_error_after_failed_scan_keeps_table_error(self):
        """Test a streaming cursor refusing to close doesn't hide the scan error."""
        def rows():
            yield (1,)
            raise Exception("Lost connection during query")

        conn = mock.MagicMock()
        cursor = make_cursor(["id"], [])
        cursor.__iter__.return_value = rows()
        cursor.close.side_effect = Exception("Unread result found")
        conn.get_cursor.return_value = cursor

        with pytest.raises(TableExportError) as exc_info:
            TableDumper(conn).materialize_values("orders")

        assert exc_info.value.table == "orders"
        assert "Lost connection during query" in str(exc_info.value)
        cursor.close.assert_called_once()

    def test_close_error_on_no_columns_keeps_table_error(self):
        conn = mock.MagicMock()
        cursor = make_cursor([], [])
        cursor.close.side_effect = Exception("Unread result found")
        conn.get_cursor.return_value = cursor

        with pytest.raises(NoColumnsError):
            TableDumper(conn).materialize_values("t")

    def test_cursor_closed_on_no_columns(self):
        conn = mock.MagicMock()
        cursor = make_cursor([], [])
        conn.get_cursor.return_value = cursor

        with pytest.raises(NoColumnsError):
            TableDumper(conn).materialize_values("t")
        cursor.close.assert_called_once()

    def test_cursor_unavailable(self):
        conn = mock.MagicMock()
        conn.get_cursor.side_effect = Exception("Not connected")

        with pytest.raises(TableExportError):
            TableDumper(conn).materialize_values("t")

    def test_escaped_mode(self):
        conn = mock.MagicMock()
        conn.get_cursor.return_value = make_cursor(["id", "name"], [(1, "O'Brien"), (2, None)])
        dumper = TableDumper(conn, LiteralMode.ESCAPED)

        values, _ = dumper.materialize_values("people")
        assert values == "('1','O\\'Brien'),('2',NULL)"
