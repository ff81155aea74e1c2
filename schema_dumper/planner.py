"""
Dump plan construction for Schema Dumper.
"""

import logging
from typing import Iterable, Mapping

from .models import DumpItem, DumpPlan, SchemaTable, TableKind, TableOverride


def build_plan(
    tables: Iterable[SchemaTable],
    overrides: Mapping[str, TableOverride]
) -> DumpPlan:
    """
    Merge the live table list with the configured overrides.

    One DumpItem is produced per base table, in the order the tables were
    listed. Tables without an override get the default row filter and no
    extra flags. Views are skipped; overrides naming tables that do not
    exist are dropped.
    """
    items = []
    seen = set()

    for table in tables:
        if table.kind != TableKind.BASE_TABLE:
            continue

        override = overrides.get(table.table_name)
        if override is None:
            items.append(DumpItem(table_name=table.table_name))
        else:
            items.append(DumpItem(
                table_name=table.table_name,
                row_filter=override.row_filter,
                extra_flags=override.extra_flags
            ))
        seen.add(table.table_name)

    for name in overrides:
        if name not in seen:
            logging.debug(f"Ignoring override for '{name}': no such base table")

    return tuple(items)
