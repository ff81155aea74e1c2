"""
Live schema metadata for Schema Dumper.
"""

import logging

from .connection import DatabaseConnection
from .models import ColumnInfo, SchemaTable, SizeReportEntry, TableKind


class SchemaInspector:
    """Read-only queries against information_schema for one connection."""

    TABLES_QUERY = (
        "SELECT table_name, table_type FROM information_schema.TABLES "
        "WHERE table_schema = %s AND table_type IN ({kinds})"
    )
    SIZE_QUERY = (
        "SELECT table_name, "
        "COALESCE(ROUND(((data_length + index_length) / 1024 / 1024), 2), 0.00) "
        "FROM information_schema.TABLES WHERE table_schema = %s "
        "ORDER BY (data_length + index_length) DESC"
    )

    def __init__(self, connection: DatabaseConnection):
        self.connection = connection

    def list_tables(self, database: str, include_views: bool = False) -> list[SchemaTable]:
        """List base tables (and optionally views) in server order."""
        kinds = [TableKind.BASE_TABLE]
        if include_views:
            kinds.append(TableKind.VIEW)

        query = self.TABLES_QUERY.format(kinds=', '.join(['%s'] * len(kinds)))
        params = (database, *(kind.value for kind in kinds))
        rows = self.connection.execute_query(query, params)

        tables = [SchemaTable(table_name=row[0], kind=TableKind(row[1])) for row in rows]
        logging.debug(f"Found {len(tables)} object(s) in schema '{database}'")
        return tables

    def list_views(self, database: str) -> list[str]:
        """List the names of all views in the schema."""
        rows = self.connection.execute_query(
            self.TABLES_QUERY.format(kinds='%s'),
            (database, TableKind.VIEW.value)
        )
        return [row[0] for row in rows]

    def size_ranking(self, database: str) -> list[SizeReportEntry]:
        """
        Rank every table of the schema by data + index size in megabytes.

        Tables without size statistics (views, for instance) report 0.00.
        The sort is stable, so ties keep the order the server returned.
        """
        rows = self.connection.execute_query(self.SIZE_QUERY, (database,))
        entries = [
            SizeReportEntry(table_name=row[0], size_mb=float(row[1] if row[1] is not None else 0.0))
            for row in rows
        ]
        return sorted(entries, key=lambda entry: entry.size_mb, reverse=True)

    def describe_table(self, table: str) -> list[ColumnInfo]:
        """Get the column structure of a table."""
        return self.connection.get_table_columns(table)
