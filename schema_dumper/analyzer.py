"""
Oversized table detection for Schema Dumper.
"""

import logging

from .inspector import SchemaInspector
from .models import DEFAULT_THRESHOLD_MB, SizeFinding
from .utils import format_columns


class SizeAnalyzer:
    """Ranks tables by size and shows the structure of the big ones."""

    DEFAULT_THRESHOLD_MB = DEFAULT_THRESHOLD_MB

    def __init__(self, inspector: SchemaInspector, threshold_mb: float = DEFAULT_THRESHOLD_MB):
        self.inspector = inspector
        self.threshold_mb = threshold_mb

    def analyze(self, database: str) -> list[SizeFinding]:
        """Report every table, largest first. Purely diagnostic."""
        findings = []

        for entry in self.inspector.size_ranking(database):
            if entry.size_mb > self.threshold_mb:
                columns = self.inspector.describe_table(entry.table_name)
                logging.warning(
                    f"{entry.table_name} is {entry.size_mb:.2f} mb! "
                    f"Figure out a way to make it smaller.\n{format_columns(columns)}"
                )
                findings.append(SizeFinding(entry=entry, oversized=True, columns=columns))
            else:
                logging.info(f"{entry.table_name} is only {entry.size_mb:.2f} mb - no problem.")
                findings.append(SizeFinding(entry=entry, oversized=False))

        return findings
