"""
Unit tests for assembler.py
"""

import io
import tempfile
from pathlib import Path
from unittest import mock

import pytest

from schema_dumper.assembler import OutputAssembler, open_sink
from schema_dumper.errors import SinkError, SinkErrorKind
from schema_dumper.exporter import VIEWS_RESULT_NAME
from schema_dumper.models import ExportResult


def ok(name, data):
    return ExportResult(name, stdout_bytes=data, returncode=0)


def failed(name, stderr="mysqldump: error"):
    return ExportResult(name, stderr_text=stderr, failed=True, returncode=2)


class TestOpenSink:
    """Tests for open_sink function."""

    def test_creates_parent_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "output.sql"
            with open_sink(path) as sink:
                sink.write(b"x")
            assert path.read_bytes() == b"x"

    def test_open_failure(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            # A directory cannot be opened as a file
            with pytest.raises(SinkError) as exc_info:
                open_sink(Path(tmpdir))
            assert exc_info.value.kind == SinkErrorKind.OPEN_FAILED


class TestAssemble:
    """Tests for assemble method."""

    def test_full_artifact_order(self):
        sink = io.BytesIO()
        assembler = OutputAssembler(sink, "shop")
        stats = assembler.assemble(
            [ok("orders", b"-- orders\n"), ok("customers", b"-- customers\n")],
            ok(VIEWS_RESULT_NAME, b"-- views\n"),
            view_count=1
        )

        assert sink.getvalue() == (
            b"CREATE DATABASE `shop`;\n"
            b"USE `shop`;\n"
            b"-- orders\n"
            b"-- customers\n"
            b"-- views\n"
        )
        assert stats.total_tables == 2
        assert stats.views == 1
        assert stats.errors == []

    def test_without_preamble(self):
        sink = io.BytesIO()
        OutputAssembler(sink, "shop", preamble=False).assemble([ok("orders", b"-- orders\n")])
        assert sink.getvalue() == b"-- orders\n"

    def test_preamble_quotes_name(self):
        sink = io.BytesIO()
        OutputAssembler(sink, "we`ird").write_preamble()
        assert sink.getvalue().startswith(b"CREATE DATABASE `we``ird`;\n")

    def test_failed_table_skipped_others_kept(self):
        sink = io.BytesIO()
        stats = OutputAssembler(sink, "shop", preamble=False).assemble([
            ok("orders", b"-- orders\n"),
            failed("customers", "Got error: 1044"),
            ok("invoices", b"-- invoices\n"),
        ])

        assert sink.getvalue() == b"-- orders\n-- invoices\n"
        assert stats.total_tables == 3
        assert [t.success for t in stats.tables] == [True, False, True]
        assert stats.errors == [{"table": "customers", "error": "Got error: 1044"}]

    def test_failed_without_stderr_uses_status(self):
        stats = OutputAssembler(io.BytesIO(), "shop").assemble([failed("orders", "")])
        assert "status 2" in stats.errors[0]["error"]

    def test_byte_counts(self):
        stats = OutputAssembler(io.BytesIO(), "shop", preamble=False).assemble([
            ok("orders", b"12345"), ok("customers", b"123")
        ])
        assert [t.bytes_written for t in stats.tables] == [5, 3]
        assert stats.total_bytes == 8

    def test_consumes_generator_in_order(self):
        sink = io.BytesIO()
        written_before = []

        def results():
            for name in ("a", "b"):
                written_before.append(sink.getvalue())
                yield ok(name, name.encode())

        OutputAssembler(sink, "shop", preamble=False).assemble(results())
        # Fragment "a" is written before "b" is produced
        assert written_before == [b"", b"a"]

    def test_failed_views_recorded(self):
        sink = io.BytesIO()
        stats = OutputAssembler(sink, "shop", preamble=False).assemble(
            [], failed(VIEWS_RESULT_NAME, "Access denied"), view_count=2
        )
        assert sink.getvalue() == b""
        assert stats.views == 0
        assert stats.errors[0]["table"] == VIEWS_RESULT_NAME

    def test_write_failure_is_fatal(self):
        sink = mock.MagicMock()
        sink.write.side_effect = OSError("No space left on device")

        with pytest.raises(SinkError) as exc_info:
            OutputAssembler(sink, "shop").assemble([ok("orders", b"x")])
        assert exc_info.value.kind == SinkErrorKind.WRITE_FAILED
