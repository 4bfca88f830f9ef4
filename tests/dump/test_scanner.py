"""Tests for the streaming dump scanner."""

import io

import pytest

from mysqltrim.dump.filters import FilterRule
from mysqltrim.dump.scanner import (
    compute_table_row_counts,
    compute_table_sizes,
    extract_split,
    extract_sql,
)


class TestExtractSql:
    """Tests for single-output extraction."""

    def test_include_filters_and_records_all_tables(self, wp_dump):
        """Skipped tables produce no output but are still reported."""
        out = io.BytesIO()
        result = extract_sql(io.BytesIO(wp_dump), out, FilterRule.compile(include="^wp_a$"))

        text = out.getvalue()
        assert b"wp_a" in text
        assert b"wp_b" not in text
        assert result.tables == {"wp_a", "wp_b"}
        assert result.truncated is False

    def test_header_lines_are_kept(self, wp_dump):
        """Lines before the first table go to the single output."""
        out = io.BytesIO()
        extract_sql(io.BytesIO(wp_dump), out, FilterRule.compile(exclude="."))

        assert out.getvalue() == (b"-- MySQL dump 10.13\n/*!40101 SET NAMES utf8mb4 */;\n")

    def test_no_filter_is_identity(self, wp_dump):
        """Without a rule the dump is copied byte for byte."""
        out = io.BytesIO()
        result = extract_sql(io.BytesIO(wp_dump), out)

        assert out.getvalue() == wp_dump
        assert result.lines == wp_dump.count(b"\n")
        assert result.bytes_read == len(wp_dump)

    def test_missing_trailing_newline(self):
        """The last line is copied even without a terminator."""
        dump = b"CREATE TABLE a (\n) ;\nINSERT INTO a VALUES (1);"
        out = io.BytesIO()
        extract_sql(io.BytesIO(dump), out)
        assert out.getvalue() == dump

    def test_unparseable_definition_fails_open(self):
        """A definition line without a name resets the skip flag."""
        dump = (
            b"DROP TABLE IF EXISTS `secret`;\n"
            b"INSERT INTO `secret` VALUES (1);\n"
            b"CREATE TABLE (\n"
            b"INSERT INTO whatever VALUES (2);\n"
        )
        out = io.BytesIO()
        result = extract_sql(io.BytesIO(dump), out, FilterRule.compile(exclude="secret"))

        assert out.getvalue() == b"CREATE TABLE (\nINSERT INTO whatever VALUES (2);\n"
        assert result.tables == {"secret"}

    def test_non_utf8_content_passes_through(self):
        """Bytes are copied without decoding."""
        dump = b"CREATE TABLE t (\nINSERT INTO t VALUES ('\xff\xfe');\n"
        out = io.BytesIO()
        extract_sql(io.BytesIO(dump), out)
        assert out.getvalue() == dump

    def test_read_error_keeps_partial_output(self, wp_dump, failing_reader):
        """A read failure stops the scan and flags the result."""
        out = io.BytesIO()
        result = extract_sql(failing_reader(wp_dump, fail_after=4), out)

        assert result.truncated is True
        assert result.error == "disk went away"
        assert result.lines == 4
        assert out.getvalue() == b"".join(wp_dump.splitlines(keepends=True)[:4])
        assert result.tables == {"wp_a"}

    def test_write_error_propagates(self, wp_dump, failing_writer):
        """Write failures are raised to the caller."""
        with pytest.raises(OSError, match="no space left"):
            extract_sql(io.BytesIO(wp_dump), failing_writer())


class TestExtractSplit:
    """Tests for per-table split extraction."""

    def test_one_file_per_table(self, wp_dump, tmp_path):
        """Each table lands in its own file; header lines are dropped."""
        out_dir = tmp_path / "tables"
        result = extract_split(io.BytesIO(wp_dump), out_dir)

        assert set(result.files) == {"wp_a", "wp_b"}
        assert result.files["wp_a"] == out_dir / "wp_a.sql"
        assert (out_dir / "wp_a.sql").read_bytes() == (
            b"DROP TABLE IF EXISTS `wp_a`;\n"
            b"CREATE TABLE `wp_a` (...);\n"
            b"INSERT INTO `wp_a` VALUES (1);\n"
        )
        assert b"MySQL dump" not in (out_dir / "wp_b.sql").read_bytes()

    def test_skipped_tables_get_no_file(self, wp_dump, tmp_path):
        """Filtered tables are encountered but never written."""
        result = extract_split(
            io.BytesIO(wp_dump), tmp_path, FilterRule.compile(exclude="_b$"), extension=".txt"
        )

        assert result.tables == {"wp_a", "wp_b"}
        assert sorted(p.name for p in tmp_path.iterdir()) == ["wp_a.txt"]

    def test_repeated_table_appends(self, tmp_path):
        """A table defined twice keeps writing to the same file."""
        dump = b"CREATE TABLE a (\nINSERT INTO a VALUES (1);\nCREATE TABLE b (\nCREATE TABLE a (\n"
        extract_split(io.BytesIO(dump), tmp_path)

        assert (tmp_path / "a.sql").read_bytes() == (
            b"CREATE TABLE a (\nINSERT INTO a VALUES (1);\nCREATE TABLE a (\n"
        )

    def test_stale_file_is_truncated(self, tmp_path):
        """A file from an earlier run is overwritten on first open."""
        (tmp_path / "a.sql").write_bytes(b"old contents\n")
        extract_split(io.BytesIO(b"CREATE TABLE a (\n"), tmp_path)

        assert (tmp_path / "a.sql").read_bytes() == b"CREATE TABLE a (\n"

    def test_more_tables_than_open_file_limit(self, tmp_path):
        """Only the current table's file is held open."""
        resource = pytest.importorskip("resource")

        dump = b"".join(
            b"CREATE TABLE t%d (\nINSERT INTO t%d VALUES (%d);\n" % (i, i, i) for i in range(400)
        )
        soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
        resource.setrlimit(resource.RLIMIT_NOFILE, (min(256, hard), hard))
        try:
            result = extract_split(io.BytesIO(dump), tmp_path / "out")
        finally:
            resource.setrlimit(resource.RLIMIT_NOFILE, (soft, hard))

        assert len(result.files) == 400
        assert (tmp_path / "out" / "t399.sql").read_bytes() == (
            b"CREATE TABLE t399 (\nINSERT INTO t399 VALUES (399);\n"
        )


class TestComputeTableSizes:
    """Tests for per-table INSERT size accumulation."""

    def test_sizes_accumulate_for_inserts(self):
        """Only INSERT lines are counted, including their newline."""
        insert_1 = b"INSERT INTO t1 VALUES (1);\n"
        insert_2 = b"INSERT INTO t1 VALUES (2);\n"
        insert_3 = b"INSERT INTO t2 VALUES (3);\n"
        dump = b"CREATE TABLE t1 (...);\n" + insert_1 + insert_2 + b"CREATE TABLE t2 (...);\n"
        dump += insert_3

        result = compute_table_sizes(io.BytesIO(dump))

        assert result.stats["t1"].size == len(insert_1) + len(insert_2)
        assert result.stats["t2"].size == len(insert_3)
        assert [t.name for t in result.sorted_stats()] == ["t1", "t2"]

    def test_skipped_tables_not_accumulated(self, wp_dump):
        """Filtered tables appear in tables but not in stats."""
        result = compute_table_sizes(io.BytesIO(wp_dump), FilterRule.compile(include="^wp_a$"))

        assert set(result.stats) == {"wp_a"}
        assert result.tables == {"wp_a", "wp_b"}
        assert result.skipped == {"wp_b"}

    def test_insert_after_unparseable_definition_ignored(self):
        """INSERTs without a current table are not attributed."""
        dump = (
            b"CREATE TABLE t (\n"
            b"INSERT INTO t VALUES (1);\n"
            b"CREATE TABLE (\n"
            b"INSERT INTO x VALUES (2);\n"
        )
        result = compute_table_sizes(io.BytesIO(dump))
        assert result.stats["t"].size == len(b"INSERT INTO t VALUES (1);\n")

    def test_drop_and_create_share_accumulator(self):
        """DROP then CREATE of the same table keep one running total."""
        dump = (
            b"DROP TABLE IF EXISTS `t`;\n"
            b"INSERT INTO t VALUES (1);\n"
            b"CREATE TABLE `t` (\n"
            b"INSERT INTO t VALUES (2);\n"
        )
        result = compute_table_sizes(io.BytesIO(dump))
        assert result.stats["t"].size == 2 * len(b"INSERT INTO t VALUES (1);\n")

    def test_table_without_inserts(self):
        """Accepted tables with no data report zero."""
        result = compute_table_sizes(io.BytesIO(b"CREATE TABLE empty (\n);\n"))
        assert result.stats["empty"].size == 0


class TestComputeTableRowCounts:
    """Tests for per-table row counting."""

    def test_row_counts_multi_values_and_multiline(self, rows_dump):
        """Single-line and wrapped statements both count correctly."""
        result = compute_table_row_counts(io.BytesIO(rows_dump))

        assert result.stats["t1"].rows == 5
        assert result.stats["t2"].rows == 1

    def test_statement_state_resets_at_terminator(self):
        """Lines after a terminated statement are not counted."""
        dump = (
            b"CREATE TABLE t (\n"
            b"INSERT INTO t VALUES\n"
            b"(1),\n"
            b"(2);\n"
            b"(3),\n"
            b"UNLOCK TABLES;\n"
        )
        result = compute_table_row_counts(io.BytesIO(dump))
        assert result.stats["t"].rows == 2

    def test_statement_state_resets_at_definition(self):
        """A new table definition closes an unterminated statement."""
        dump = (
            b"CREATE TABLE a (\n"
            b"INSERT INTO a VALUES\n"
            b"(1),\n"
            b"CREATE TABLE b (\n"
            b"(2),\n"
            b"INSERT INTO b VALUES (3);\n"
        )
        result = compute_table_row_counts(io.BytesIO(dump))
        assert result.stats["a"].rows == 1
        assert result.stats["b"].rows == 1

    def test_quoted_semicolon_does_not_end_statement(self):
        """A semicolon inside a string keeps the statement open."""
        dump = b"CREATE TABLE t (\nINSERT INTO t VALUES ('a;'),\n('b');\n"
        result = compute_table_row_counts(io.BytesIO(dump))
        assert result.stats["t"].rows == 2

    def test_skipped_tables_not_counted(self, rows_dump):
        """Excluded tables get no row totals."""
        result = compute_table_row_counts(io.BytesIO(rows_dump), FilterRule.compile(exclude="t2"))
        assert set(result.stats) == {"t1"}
        assert result.tables == {"t1", "t2"}
        assert [t.name for t in result.sorted_stats("rows")] == ["t1"]
