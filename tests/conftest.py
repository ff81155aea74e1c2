"""
Shared fixtures for Schema Dumper tests.
"""

import pytest

from schema_dumper.errors import ExportError, ExportErrorKind
from schema_dumper.exporter import VIEWS_RESULT_NAME, Exporter
from schema_dumper.models import DumpItem, ExportResult


class FakeExporter(Exporter):
    """Records calls and returns canned fragments instead of running mysqldump."""

    def __init__(self, failing=(), raising=(), view_fragment=b""):
        self.failing = set(failing)
        self.raising = set(raising)
        self.view_fragment = view_fragment
        self.calls: list[DumpItem] = []
        self.view_calls: list[list[str]] = []

    def export_table(self, item: DumpItem) -> ExportResult:
        self.calls.append(item)
        if item.table_name in self.raising:
            raise ExportError(ExportErrorKind.INVOCATION_FAILED, "cannot spawn", item.table_name)
        if item.table_name in self.failing:
            return ExportResult(
                table_name=item.table_name,
                stderr_text=f"mysqldump: Got error on table {item.table_name}",
                failed=True,
                returncode=2
            )
        return ExportResult(
            table_name=item.table_name,
            stdout_bytes=f"-- {item.table_name} WHERE {item.row_filter}\n".encode(),
            returncode=0
        )

    def export_views(self, views: list[str]) -> ExportResult:
        self.view_calls.append(list(views))
        return ExportResult(table_name=VIEWS_RESULT_NAME, stdout_bytes=self.view_fragment, returncode=0)


@pytest.fixture
def fake_exporter():
    return FakeExporter()
