"""
Main dump orchestration for Schema Dumper.
"""

import logging
from pathlib import Path
from typing import Optional

from .assembler import OutputAssembler, open_sink
from .config import ConfigLoader
from .connection import DatabaseConnection
from .exporter import Exporter
from .inspector import SchemaInspector
from .models import DEFAULT_OUTPUT_PATH, ConnectionParams, DumpPlan, DumpStats
from .planner import build_plan
from .runner import ExportRunner
from .utils import print_dry_run_info


class DatabaseDumper:
    """Dumps one schema into a single SQL file."""

    DEFAULT_OUTPUT = Path(DEFAULT_OUTPUT_PATH)

    def __init__(
        self,
        params: ConnectionParams,
        exporter: Exporter,
        output_path: Optional[Path] = None,
        preamble: bool = True
    ):
        self.params = params
        self.exporter = exporter
        self.output_path = Path(output_path) if output_path else self.DEFAULT_OUTPUT
        self.preamble = preamble

    def _collect(self, config: ConfigLoader) -> tuple[DumpPlan, list[str]]:
        """Read the live schema and merge it with the configured overrides."""
        with DatabaseConnection.from_params(self.params) as conn:
            inspector = SchemaInspector(conn)
            tables = inspector.list_tables(self.params.database)
            views = inspector.list_views(self.params.database)

        plan = build_plan(tables, config.get_overrides())
        logging.info(f"Planned {len(plan)} table(s) and {len(views)} view(s) from '{self.params.database}'")
        return plan, views

    def run(self, config: ConfigLoader) -> DumpStats:
        """Run the dump.

        Config, metadata and output file errors propagate; a table that fails
        to export is recorded in the returned stats and the run goes on.
        """
        plan, views = self._collect(config)
        runner = ExportRunner(self.exporter)

        with open_sink(self.output_path) as sink:
            assembler = OutputAssembler(sink, self.params.database, preamble=self.preamble)
            stats = assembler.assemble(runner.run(plan))
            assembler.write_views(runner.run_views(views), len(views))

        logging.info(f"Wrote {stats.total_bytes} bytes to {self.output_path}")
        return stats

    def dry_run(self, config: ConfigLoader) -> DumpPlan:
        """Show what would be dumped without running mysqldump."""
        plan, views = self._collect(config)
        print_dry_run_info(self.params.database, plan, views)
        return plan
