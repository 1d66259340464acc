import logging

import pytest

from pg_bulk_import.errors import DuplicateHeaderDeclaration
from pg_bulk_import.io.kv_store import SqliteIndexSink
from pg_bulk_import.io.sinks import IndexSink
from pg_bulk_import.pipeline.indexing import IndexBuilder
from pg_bulk_import.schema.header import parse_property_keys
from pg_bulk_import.schema.models import IndexGroup
from pg_bulk_import.utils.progress import ProgressReporter


class RecordingIndexSink(IndexSink):
    def __init__(self):
        self.entries = []

    def add_to_index(self, index_name, entity_id, properties):
        self.entries.append((index_name, entity_id, dict(properties)))


def test_groups_by_index_name():
    builder = IndexBuilder(RecordingIndexSink())
    groups = builder.configure(parse_property_keys(["people|name", "people|age@int", "places|city", "note"]))

    assert set(groups) == {"people", "places"}
    assert groups["people"].members == {"name", "age"}
    assert groups["places"].members == {"city"}


def test_record_node_forwards_group_subsets():
    index_sink = RecordingIndexSink()
    builder = IndexBuilder(index_sink)
    builder.configure(parse_property_keys(["people|name", "people|age@int", "note"]))

    builder.record_node(1, {"name": "ada", "age": 36, "note": "x"})
    builder.record_node(2, {"note": "y"})

    assert index_sink.entries == [
        ("people", 1, {"name": "ada", "age": 36}),
        ("people", 2, {}),
    ]


def test_no_indexed_keys_records_nothing():
    index_sink = RecordingIndexSink()
    builder = IndexBuilder(index_sink)
    assert builder.configure(parse_property_keys(["name", "age@long"])) == {}

    builder.record_node(1, {"name": "ada"})
    assert index_sink.entries == []


def test_configure_twice_fails():
    builder = IndexBuilder(RecordingIndexSink())
    builder.configure([])
    with pytest.raises(DuplicateHeaderDeclaration):
        builder.configure([])


def test_groups_without_sink_are_dropped(caplog):
    builder = IndexBuilder()
    with caplog.at_level(logging.WARNING):
        assert builder.configure(parse_property_keys(["people|name"])) == {}
    assert "no index sink" in caplog.text

    builder.record_node(1, {"name": "ada"})


def test_index_group_subset():
    group = IndexGroup("people", {"name", "age"})
    assert group.subset({"name": "ada", "city": "london"}) == {"name": "ada"}


def test_sqlite_index_sink_batches(tmp_path):
    index_sink = SqliteIndexSink(str(tmp_path / "idx" / "index.sqlite"), batch_size=2)
    index_sink.add_to_index("people", 2, {"name": "bob"})
    index_sink.add_to_index("people", 1, {"name": "bob", "age": 30})
    index_sink.add_to_index("people", 3, {"name": "cy"})

    assert index_sink.lookup("people", "name", "bob") == [1, 2]
    assert index_sink.lookup("people", "age", 30) == [1]
    assert index_sink.lookup("other", "name", "bob") == []
    index_sink.shutdown()
    index_sink.shutdown()


def test_progress_reporter_logs_every_n(caplog):
    progress = ProgressReporter("nodes", every=2)
    with caplog.at_level(logging.INFO, logger="pg_bulk_import"):
        for _ in range(5):
            progress.tick()
        assert progress.done() == 5

    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["Created 2 nodes.", "Created 4 nodes.", "Finished nodes: 5 created."]


def test_progress_reporter_quiet(caplog):
    progress = ProgressReporter("nodes", every=1, verbose=False)
    with caplog.at_level(logging.INFO, logger="pg_bulk_import"):
        progress.tick()
        progress.done()
    assert caplog.records == []
