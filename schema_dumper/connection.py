"""
Database connection management for Schema Dumper.
"""

import logging
from typing import Optional

import mysql.connector
from mysql.connector import Error as MySQLError

from .errors import MetadataError, MetadataErrorKind
from .models import DEFAULT_PORT, ColumnInfo, ConnectionParams


class DatabaseConnection:
    """Manages MySQL database connections with context manager support."""

    DEFAULT_PORT = DEFAULT_PORT
    DEFAULT_CHARSET = 'utf8mb4'

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: Optional[str] = None,
        ssl_ca: Optional[str] = None
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.ssl_ca = ssl_ca
        self.connection = None

    @classmethod
    def from_params(cls, params: ConnectionParams) -> "DatabaseConnection":
        return cls(
            host=params.host,
            port=params.port,
            user=params.user,
            password=params.password,
            database=params.database or None,
            ssl_ca=params.ssl_ca
        )

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    def connect(self) -> None:
        """Establish database connection.

        When a CA certificate is given the server certificate is verified
        against it, including the host name.
        """
        options = dict(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database,
            charset=self.DEFAULT_CHARSET,
            use_unicode=True
        )
        if self.ssl_ca:
            options.update(ssl_ca=self.ssl_ca, ssl_verify_cert=True, ssl_verify_identity=True)

        try:
            self.connection = mysql.connector.connect(**options)
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise MetadataError(
                MetadataErrorKind.CONNECTION_FAILED,
                f"Could not connect to {self.host}:{self.port}: {e}"
            ) from e

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def execute_query(self, query: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return results."""
        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(query, params)
                return cursor.fetchall()
            finally:
                cursor.close()
        except MySQLError as e:
            raise MetadataError(MetadataErrorKind.QUERY_FAILED, f"Query failed: {e}") from e

    def get_table_columns(self, table: str) -> list[ColumnInfo]:
        """Get column information for a table."""
        quoted = table.replace('`', '``')
        results = self.execute_query(f"DESCRIBE `{quoted}`")
        return [
            ColumnInfo(
                name=_text(row[0]),
                type=_text(row[1]),
                nullable=_text(row[2]),
                key=_text(row[3]),
                default=row[4],
                extra=_text(row[5])
            )
            for row in results
        ]


def _text(value) -> str:
    # Some server versions return BLOB-typed metadata columns as bytes.
    if isinstance(value, (bytes, bytearray)):
        return value.decode('utf-8')
    return value
