"""
Database connection management for SQL Dumper.
"""

import logging
from typing import Optional, Any

import mysql.connector
from mysql.connector import Error as MySQLError


class DatabaseConnection:
    """Manages MySQL database connections with context manager support.

    This is the only object the dump engine queries; anything exposing the
    same methods can stand in for it.
    """

    DEFAULT_PORT = 3306
    DEFAULT_CHARSET = 'utf8mb4'

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: Optional[str] = None
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    def connect(self) -> None:
        """Establish database connection."""
        try:
            self.connection = mysql.connector.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                charset=self.DEFAULT_CHARSET,
                use_unicode=True
            )
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def execute_query(self, query: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return all rows."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def execute_scalar(self, query: str, params: Optional[tuple] = None) -> Optional[tuple]:
        """Execute a query and return its first row, or None."""
        cursor = self.connection.cursor(buffered=True)
        try:
            cursor.execute(query, params)
            return cursor.fetchone()
        finally:
            cursor.close()

    def get_cursor(self, buffered: bool = False):
        """Get a cursor for streaming a table's rows.

        Args:
            buffered: If False (default), rows are streamed from the server
                     instead of being loaded into memory up front.
        """
        return self.connection.cursor(buffered=buffered)

    def get_server_version(self) -> str:
        """Get the server version string."""
        row = self.execute_scalar("SELECT VERSION()")
        if row is None:
            raise MySQLError(msg="SELECT VERSION() returned no rows")
        return str(row[0])

    def get_tables(self) -> list[str]:
        """Get list of all tables in the current database."""
        results = self.execute_query("SHOW TABLES")
        return [row[0] for row in results]

    def get_create_table(self, table: str) -> Optional[tuple[Any, Any]]:
        """Get the (table name, CREATE TABLE statement) pair the server reports."""
        row = self.execute_scalar(f"SHOW CREATE TABLE `{table}`")
        if row is None:
            return None
        return row[0], row[1]
