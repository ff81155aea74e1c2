"""
Error types for Schema Dumper.

Every error carries a ``kind`` so callers can tell fatal setup failures
(config, metadata, sink) apart from per-table export failures.
"""

from enum import Enum
from typing import Optional


class ConfigErrorKind(Enum):
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


class MetadataErrorKind(Enum):
    CONNECTION_FAILED = "connection_failed"
    QUERY_FAILED = "query_failed"


class ExportErrorKind(Enum):
    NON_ZERO_EXIT = "non_zero_exit"
    INVOCATION_FAILED = "invocation_failed"
    INVALID_FLAGS = "invalid_flags"


class SinkErrorKind(Enum):
    OPEN_FAILED = "open_failed"
    WRITE_FAILED = "write_failed"


class SchemaDumperError(Exception):
    """Base class for all Schema Dumper errors."""

    def __init__(self, kind: Enum, message: str):
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"[{self.kind.value}] {super().__str__()}"


class ConfigError(SchemaDumperError):
    """The override configuration could not be loaded."""

    def __init__(self, kind: ConfigErrorKind, message: str):
        super().__init__(kind, message)


class MetadataError(SchemaDumperError):
    """Connecting to the server or reading information_schema failed."""

    def __init__(self, kind: MetadataErrorKind, message: str):
        super().__init__(kind, message)


class ExportError(SchemaDumperError):
    """A single export invocation failed."""

    def __init__(self, kind: ExportErrorKind, message: str, table: Optional[str] = None):
        super().__init__(kind, message)
        self.table = table


class SinkError(SchemaDumperError):
    """The output file could not be opened or written."""

    def __init__(self, kind: SinkErrorKind, message: str):
        super().__init__(kind, message)
