"""
Schema Dumper
=============
A MySQL administration helper that:
- Ranks tables by size and describes the oversized ones
- Dumps every base table of a schema with per-table WHERE filters
- Appends per-table mysqldump flags from a YAML file
- Dumps view definitions with DEFINER clauses stripped
- Writes everything into a single restorable SQL file
"""

from .analyzer import SizeAnalyzer
from .assembler import OutputAssembler, open_sink
from .config import ConfigLoader
from .connection import DatabaseConnection
from .database_dumper import DatabaseDumper
from .errors import (
    ConfigError,
    ConfigErrorKind,
    ExportError,
    ExportErrorKind,
    MetadataError,
    MetadataErrorKind,
    SchemaDumperError,
    SinkError,
    SinkErrorKind,
)
from .exporter import Exporter, MysqldumpExporter
from .inspector import SchemaInspector
from .main import main
from .models import (
    ColumnInfo,
    ConnectionParams,
    DumpItem,
    DumpPlan,
    DumpStats,
    ExportResult,
    SchemaTable,
    SizeFinding,
    SizeReportEntry,
    TableKind,
    TableOverride,
    TableStats,
)
from .planner import build_plan
from .runner import ExportRunner
from .utils import format_columns, print_dry_run_info, setup_logging, strip_definer

__version__ = "1.0.0"

__all__ = [
    # Main entry point
    "main",
    # Core classes
    "ConfigLoader",
    "DatabaseConnection",
    "DatabaseDumper",
    "Exporter",
    "ExportRunner",
    "MysqldumpExporter",
    "OutputAssembler",
    "SchemaInspector",
    "SizeAnalyzer",
    "build_plan",
    "open_sink",
    # Errors
    "ConfigError",
    "ConfigErrorKind",
    "ExportError",
    "ExportErrorKind",
    "MetadataError",
    "MetadataErrorKind",
    "SchemaDumperError",
    "SinkError",
    "SinkErrorKind",
    # Models
    "ColumnInfo",
    "ConnectionParams",
    "DumpItem",
    "DumpPlan",
    "DumpStats",
    "ExportResult",
    "SchemaTable",
    "SizeFinding",
    "SizeReportEntry",
    "TableKind",
    "TableOverride",
    "TableStats",
    # Utilities
    "format_columns",
    "print_dry_run_info",
    "setup_logging",
    "strip_definer",
]
