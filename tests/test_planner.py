"""
Unit tests for planner.py
"""

from schema_dumper.models import DumpItem, SchemaTable, TableKind, TableOverride
from schema_dumper.planner import build_plan


def tables(*names, kind=TableKind.BASE_TABLE):
    return [SchemaTable(name, kind) for name in names]


class TestBuildPlan:
    """Tests for build_plan function."""

    def test_orders_and_customers(self):
        """Test the configured table gets its filter and the other the defaults."""
        overrides = {
            "orders": TableOverride("orders", "created_at > '2020-01-01'")
        }
        plan = build_plan(tables("orders", "customers"), overrides)

        assert plan == (
            DumpItem("orders", "created_at > '2020-01-01'", ""),
            DumpItem("customers", "1=1", ""),
        )

    def test_override_values_copied(self):
        """Test where and flags both come from the override."""
        overrides = {
            "audit_log": TableOverride("audit_log", "1=0", "--no-create-info --skip-triggers")
        }
        plan = build_plan(tables("audit_log"), overrides)

        assert plan[0].row_filter == "1=0"
        assert plan[0].extra_flags == "--no-create-info --skip-triggers"

    def test_defaults_without_overrides(self):
        """Test every table gets the defaults when nothing is configured."""
        plan = build_plan(tables("a", "b", "c"), {})
        assert all(item.row_filter == "1=1" and item.extra_flags == "" for item in plan)

    def test_orphan_overrides_dropped(self):
        """Test overrides for tables that do not exist produce no items."""
        overrides = {
            "ghost": TableOverride("ghost", "id > 1"),
            "users": TableOverride("users", "active = 1"),
        }
        plan = build_plan(tables("users"), overrides)

        assert [item.table_name for item in plan] == ["users"]

    def test_order_preserved(self):
        """Test plan order equals listing order, not alphabetical."""
        names = ["zeta", "alpha", "mike", "bravo"]
        plan = build_plan(tables(*names), {})

        assert [item.table_name for item in plan] == names

    def test_views_excluded(self):
        """Test views never become dump items."""
        listing = [
            SchemaTable("orders"),
            SchemaTable("v_orders", TableKind.VIEW),
            SchemaTable("customers"),
        ]
        overrides = {"v_orders": TableOverride("v_orders", "1=0")}
        plan = build_plan(listing, overrides)

        assert [item.table_name for item in plan] == ["orders", "customers"]

    def test_length_matches_base_tables(self):
        listing = tables("a", "b") + tables("v1", "v2", kind=TableKind.VIEW) + tables("c")
        assert len(build_plan(listing, {})) == 3

    def test_name_match_is_exact(self):
        """Test lookup is case sensitive and not a prefix match."""
        overrides = {"Orders": TableOverride("Orders", "id > 1")}
        plan = build_plan(tables("orders", "orders_archive"), overrides)

        assert plan == (DumpItem("orders"), DumpItem("orders_archive"))

    def test_empty(self):
        assert build_plan([], {"orders": TableOverride("orders")}) == ()

    def test_plan_is_tuple(self):
        assert isinstance(build_plan(tables("a"), {}), tuple)
