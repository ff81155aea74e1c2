"""
Utility functions for Schema Dumper.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any, Iterable

from .models import DEFAULT_ROW_FILTER, ColumnInfo, DumpItem

# Matches up to the next '*' on the same line, like sed working line by line.
DEFINER_PATTERN = re.compile(rb'DEFINER[ ]*=[ ]*[^*\n]*\*')

DESCRIBE_HEADERS = ('Field', 'Type', 'Null', 'Key', 'Default', 'Extra')


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def strip_definer(fragment: bytes) -> bytes:
    """
    Remove DEFINER=... clauses from a view dump.

    Restoring a view whose definer the restoring account may not impersonate
    fails with an access denied error, so the clause is cut out up to the
    closing '*' of the version comment it lives in. Applying this twice gives
    the same result as applying it once.
    """
    return DEFINER_PATTERN.sub(b'*', fragment)


def format_columns(columns: Iterable[ColumnInfo]) -> str:
    """Render DESCRIBE output as a boxed text table."""
    rows = [
        tuple('NULL' if value is None else str(value) for value in (
            col.name, col.type, col.nullable, col.key, col.default, col.extra
        ))
        for col in columns
    ]
    widths = [
        max(len(header), *(len(row[i]) for row in rows)) if rows else len(header)
        for i, header in enumerate(DESCRIBE_HEADERS)
    ]

    border = '+' + '+'.join('-' * (w + 2) for w in widths) + '+'

    def line(values: tuple) -> str:
        return '| ' + ' | '.join(v.ljust(w) for v, w in zip(values, widths)) + ' |'

    lines = [border, line(DESCRIBE_HEADERS), border]
    lines.extend(line(row) for row in rows)
    lines.append(border)
    return '\n'.join(lines)


def format_item_display(item: DumpItem) -> list[str]:
    """Format the non-default settings of a dump item for display."""
    parts = []
    if item.row_filter != DEFAULT_ROW_FILTER:
        parts.append(f"where='{item.row_filter}'")
    if item.extra_flags:
        parts.append(f"flags='{item.extra_flags}'")
    return parts


def print_dry_run_info(database: str, plan: Iterable[DumpItem], views: list[str]) -> None:
    """Print information about what would be dumped in dry-run mode."""
    logging.info(f"Would dump database: {database}")
    for item in plan:
        parts = format_item_display(item)
        if parts:
            logging.info(f"  - {item.table_name} ({', '.join(parts)})")
        else:
            logging.info(f"  - {item.table_name} (all rows)")

    if views:
        logging.info(f"  Views (structure only): {', '.join(views)}")
    else:
        logging.info("  No views")
