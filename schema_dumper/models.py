"""
Data models and enums for Schema Dumper.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Any


DEFAULT_ROW_FILTER = "1=1"
DEFAULT_EXTRA_FLAGS = ""
DEFAULT_PORT = 3306
DEFAULT_THRESHOLD_MB = 100.0
DEFAULT_OUTPUT_PATH = "./output.sql"


class TableKind(Enum):
    """Kinds of schema objects, as reported by information_schema.TABLES."""
    BASE_TABLE = "BASE TABLE"
    VIEW = "VIEW"


@dataclass(frozen=True)
class TableOverride:
    """Per-table dump settings loaded from the configuration file."""
    table_name: str
    row_filter: str = DEFAULT_ROW_FILTER
    extra_flags: str = DEFAULT_EXTRA_FLAGS


@dataclass(frozen=True)
class SchemaTable:
    """A table or view found in the live schema."""
    table_name: str
    kind: TableKind = TableKind.BASE_TABLE


@dataclass(frozen=True)
class DumpItem:
    """Export instruction for a single base table."""
    table_name: str
    row_filter: str = DEFAULT_ROW_FILTER
    extra_flags: str = DEFAULT_EXTRA_FLAGS


DumpPlan = tuple[DumpItem, ...]


@dataclass
class ExportResult:
    """Captured output of one export invocation."""
    table_name: str
    stdout_bytes: bytes = b""
    stderr_text: str = ""
    failed: bool = False
    returncode: Optional[int] = None


@dataclass(frozen=True)
class SizeReportEntry:
    """Size of a table in megabytes (data + indexes)."""
    table_name: str
    size_mb: float


@dataclass
class ColumnInfo:
    """Database column metadata."""
    name: str
    type: str
    nullable: str
    key: str
    default: Any
    extra: str


@dataclass
class SizeFinding:
    """Analyzer verdict for one table."""
    entry: SizeReportEntry
    oversized: bool
    columns: list[ColumnInfo] = field(default_factory=list)


@dataclass
class ConnectionParams:
    """Connection settings shared by the metadata connection and mysqldump."""
    host: str = "localhost"
    port: int = DEFAULT_PORT
    user: str = "root"
    password: str = ""
    database: str = ""
    ssl_ca: Optional[str] = None


@dataclass
class TableStats:
    """Statistics for a single table export."""
    table: str
    bytes_written: int = 0
    success: bool = False
    error: Optional[str] = None


@dataclass
class DumpStats:
    """Overall dump statistics."""
    tables: list[TableStats] = field(default_factory=list)
    total_tables: int = 0
    total_bytes: int = 0
    views: int = 0
    errors: list[dict[str, Any]] = field(default_factory=list)
