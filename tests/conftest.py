import sqlite3

import pytest

from pg_bulk_import.io.kv_store import SqliteIndexSink
from pg_bulk_import.io.sinks import NetworkxGraphSink


@pytest.fixture
def write_lines(tmp_path):
    """Write a list of lines to a file under tmp_path and return its path."""

    def _write(name, lines):
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def sink():
    return NetworkxGraphSink()


@pytest.fixture
def index_sink():
    s = SqliteIndexSink(":memory:")
    yield s
    s.shutdown()


@pytest.fixture
def conn():
    c = sqlite3.connect(":memory:")
    yield c
    c.close()


@pytest.fixture
def update(conn):
    """Run one SQL statement against the in-memory database."""

    def _update(sql):
        conn.execute(sql)
        conn.commit()

    return _update
