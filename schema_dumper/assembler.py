"""
Output file assembly for Schema Dumper.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from .errors import SinkError, SinkErrorKind
from .models import DumpStats, ExportResult, TableStats


def open_sink(output_path: Path) -> BinaryIO:
    """Open the output file for writing, creating its directory."""
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        return open(output_path, 'wb')
    except OSError as e:
        raise SinkError(SinkErrorKind.OPEN_FAILED, f"Cannot open output file '{output_path}': {e}") from e


class OutputAssembler:
    """Appends the preamble, table fragments and view fragment to one sink."""

    def __init__(self, sink: BinaryIO, database: str, preamble: bool = True):
        self.sink = sink
        self.database = database
        self.preamble = preamble
        self.stats = DumpStats()

    def _write(self, data: bytes) -> int:
        try:
            self.sink.write(data)
        except OSError as e:
            raise SinkError(SinkErrorKind.WRITE_FAILED, f"Cannot write to output file: {e}") from e
        return len(data)

    def write_preamble(self) -> None:
        """Write CREATE DATABASE / USE so several dumps can be restored together."""
        quoted = self.database.replace('`', '``')
        self._write(f"CREATE DATABASE `{quoted}`;\nUSE `{quoted}`;\n".encode('utf-8'))

    def write_table(self, result: ExportResult) -> TableStats:
        """Write one table fragment; failed exports are recorded, not written."""
        table_stats = TableStats(table=result.table_name)

        if result.failed:
            table_stats.error = result.stderr_text.strip() or f"mysqldump exited with status {result.returncode}"
            self.stats.errors.append({'table': result.table_name, 'error': table_stats.error})
        else:
            table_stats.bytes_written = self._write(result.stdout_bytes)
            table_stats.success = True
            self.stats.total_bytes += table_stats.bytes_written

        self.stats.tables.append(table_stats)
        self.stats.total_tables += 1
        return table_stats

    def write_views(self, result: ExportResult, view_count: int) -> None:
        """Write the cleaned view fragment."""
        if result.failed:
            error = result.stderr_text.strip() or f"mysqldump exited with status {result.returncode}"
            self.stats.errors.append({'table': result.table_name, 'error': error})
            return

        self.stats.total_bytes += self._write(result.stdout_bytes)
        self.stats.views = view_count

    def assemble(
        self,
        results: Iterable[ExportResult],
        view_result: Optional[ExportResult] = None,
        view_count: int = 0
    ) -> DumpStats:
        """
        Write the whole artifact in order.

        ``results`` may be a generator; each fragment is written as soon as it
        is produced.
        """
        if self.preamble:
            self.write_preamble()

        for result in results:
            table_stats = self.write_table(result)
            self._log_table_result(table_stats)

        if view_result is not None:
            self.write_views(view_result, view_count)

        return self.stats

    @staticmethod
    def _log_table_result(table_stats: TableStats) -> None:
        if table_stats.success:
            logging.info(f"  ✓ {table_stats.table}: {table_stats.bytes_written} bytes")
        else:
            logging.error(f"  ✗ {table_stats.table}: {table_stats.error}")
