"""
Sequential, best-effort execution of a dump plan.
"""

import logging
from typing import Iterable, Iterator

from .errors import ExportError
from .exporter import VIEWS_RESULT_NAME, Exporter
from .models import DumpItem, ExportResult


class ExportRunner:
    """Runs each plan item through an exporter, one at a time, in plan order."""

    def __init__(self, exporter: Exporter):
        self.exporter = exporter

    def run(self, plan: Iterable[DumpItem]) -> Iterator[ExportResult]:
        """
        Export every item of the plan.

        Results are yielded as soon as each export finishes so the caller can
        write them out before the next table starts. A failing table is
        reported and never stops the remaining ones.
        """
        for item in plan:
            yield self.run_item(item)

    def run_item(self, item: DumpItem) -> ExportResult:
        """Export a single item, turning export errors into a failed result."""
        logging.info(f"Running mysqldump for {item.table_name}")
        try:
            result = self.exporter.export_table(item)
        except ExportError as e:
            logging.error(f"Export of '{item.table_name}' failed: {e}")
            return ExportResult(table_name=item.table_name, stderr_text=str(e), failed=True)

        if result.stderr_text:
            logging.warning(f"\n{result.stderr_text}")
        if result.failed:
            logging.error(f"mysqldump exited with status {result.returncode} for '{item.table_name}'")
        return result

    def run_views(self, views: list[str]) -> ExportResult:
        """Export the structure of all views as one fragment."""
        if views:
            logging.info(f"Running mysqldump for {len(views)} view(s)")
        try:
            result = self.exporter.export_views(views)
        except ExportError as e:
            logging.error(f"Export of views failed: {e}")
            return ExportResult(table_name=VIEWS_RESULT_NAME, stderr_text=str(e), failed=True)

        if result.stderr_text:
            logging.warning(f"\n{result.stderr_text}")
        if result.failed:
            logging.error(f"mysqldump exited with status {result.returncode} for views")
        return result
