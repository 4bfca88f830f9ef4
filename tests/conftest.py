"""Shared pytest fixtures for all tests."""

import io

import pytest

from mysqltrim.core.config import get_settings
from mysqltrim.core.logging import configure_logging

WP_DUMP = (
    b"-- MySQL dump 10.13\n"
    b"/*!40101 SET NAMES utf8mb4 */;\n"
    b"DROP TABLE IF EXISTS `wp_a`;\n"
    b"CREATE TABLE `wp_a` (...);\n"
    b"INSERT INTO `wp_a` VALUES (1);\n"
    b"DROP TABLE IF EXISTS `wp_b`;\n"
    b"CREATE TABLE `wp_b` (...);\n"
    b"INSERT INTO `wp_b` VALUES (2);\n"
)

ROWS_DUMP = (
    b"CREATE TABLE t1 (...);\n"
    b"INSERT INTO t1 VALUES (1, '(paren)'), (2), ('x, y');\n"
    b"INSERT INTO t1 VALUES\n"
    b"(3),\n"
    b"(4);\n"
    b"CREATE TABLE t2 (...);\n"
    b"INSERT INTO t2 VALUES ('(only)');\n"
)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Point structlog at the current stderr and clear cached settings."""
    configure_logging(log_level="DEBUG", show_timestamps=False, color=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def wp_dump() -> bytes:
    """Two WordPress-style tables with one insert each."""
    return WP_DUMP


@pytest.fixture
def rows_dump() -> bytes:
    """Tables with single-line, multi-line and quoted-paren inserts."""
    return ROWS_DUMP


@pytest.fixture
def wp_dump_file(tmp_path, wp_dump):
    """The WordPress dump written to disk."""
    path = tmp_path / "backup.sql"
    path.write_bytes(wp_dump)
    return path


@pytest.fixture
def rows_dump_file(tmp_path, rows_dump):
    """The row-count dump written to disk."""
    path = tmp_path / "rows.sql"
    path.write_bytes(rows_dump)
    return path


class FailingReader(io.BytesIO):
    """Byte stream that raises after a number of lines."""

    def __init__(self, data: bytes, fail_after: int):
        super().__init__(data)
        self.fail_after = fail_after
        self.calls = 0

    def readline(self, size: int | None = -1) -> bytes:  # type: ignore[override]
        if self.calls >= self.fail_after:
            raise OSError("disk went away")
        self.calls += 1
        return super().readline(size)


class FailingWriter(io.BytesIO):
    """Byte stream that rejects every write."""

    def write(self, data) -> int:  # type: ignore[override]
        raise OSError("no space left on device")


@pytest.fixture
def failing_reader() -> type[FailingReader]:
    """Factory for readers that fail mid-stream."""
    return FailingReader


@pytest.fixture
def failing_writer() -> type[FailingWriter]:
    """Factory for writers that fail on the first write."""
    return FailingWriter
