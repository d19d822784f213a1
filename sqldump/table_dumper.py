"""
Table export functionality for SQL Dumper.
"""

import logging

from .encoder import ValueEncoder
from .errors import DumpError, NoColumnsError, TableExportError, TableMismatchError
from .models import LiteralMode, TableRecord


class TableDumper:
    """Exports a single table as its DDL plus one VALUES clause."""

    def __init__(self, connection, literal_mode: LiteralMode = LiteralMode.RAW):
        self.connection = connection
        self.encoder = ValueEncoder(literal_mode)

    def export_table(self, table: str) -> TableRecord:
        """
        Export a table's structure and data.

        Args:
            table: Name of the table as returned by table enumeration.

        Returns:
            TableRecord holding the CREATE statement and encoded rows.

        Raises:
            TableExportError: If either the structure or the data could not
                be retrieved. Nothing is returned for a partially read table.
        """
        create_statement = self.get_create_statement(table)
        values_clause, row_count = self.materialize_values(table)
        logging.debug(f"Exported table '{table}': {row_count} rows")

        return TableRecord(
            name=table,
            create_statement=create_statement,
            values_clause=values_clause,
            row_count=row_count
        )

    def get_create_statement(self, table: str) -> str:
        """Fetch the CREATE TABLE statement, checking the server answered for this table."""
        try:
            result = self.connection.get_create_table(table)
        except Exception as e:
            raise TableExportError(table, str(e)) from e

        if not result:
            raise TableExportError(table, "SHOW CREATE TABLE returned no rows")

        returned_name, create_statement = result
        if returned_name != table:
            raise TableMismatchError(table, returned_name)

        return create_statement

    def materialize_values(self, table: str) -> tuple[str, int]:
        """
        Read every row of a table into a single VALUES clause.

        Returns:
            The comma-joined row tuples (empty for an empty table) and the
            number of rows read.
        """
        try:
            cursor = self.connection.get_cursor()
        except Exception as e:
            raise TableExportError(table, str(e)) from e

        try:
            cursor.execute(f"SELECT * FROM `{table}`")

            columns = [col[0] for col in (cursor.description or [])]
            if not columns:
                raise NoColumnsError(table)

            tuples = [self.encoder.encode_row(row) for row in cursor]
        except DumpError:
            self._discard_cursor(cursor, table)
            raise
        except Exception as e:
            self._discard_cursor(cursor, table)
            raise TableExportError(table, str(e)) from e

        try:
            cursor.close()
        except Exception as e:
            raise TableExportError(table, str(e)) from e

        return ','.join(tuples), len(tuples)

    def _discard_cursor(self, cursor, table: str) -> None:
        """Close a cursor after a failed scan without masking the scan error.

        A streaming cursor abandoned mid-result can refuse to close with
        unread rows pending.
        """
        try:
            cursor.close()
        except Exception as e:
            logging.debug(f"Ignoring error closing cursor for table '{table}': {e}")
