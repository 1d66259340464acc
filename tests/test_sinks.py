import pytest

from pg_bulk_import.io.sinks import REL_TYPE_ATTR


def test_duplicate_node_fails(sink):
    sink.create_node(1, {})
    with pytest.raises(ValueError):
        sink.create_node(1, {"name": "again"})


def test_relationship_ids_are_sequential(sink):
    sink.create_node(1, {})
    sink.create_node(2, {})
    assert sink.create_relationship(1, 2, "KNOWS", {}) == 0
    assert sink.create_relationship(2, 1, "KNOWS", {}) == 1
    assert sink.create_relationship(1, 2, "LIKES", {}) == 2
    assert [r[0] for r in sink.relationships(1)] == [0, 2]


def test_unknown_endpoint_fails(sink):
    sink.create_node(1, {})
    with pytest.raises(KeyError):
        sink.create_relationship(1, 2, "KNOWS", {})


def test_keyword_named_properties_are_stored(sink):
    sink.create_node(1, {"node_for_adding": "a"})
    sink.create_node(2, {})
    sink.create_relationship(1, 2, "KNOWS", {"key": 7, "u_for_edge": "x", "v_for_edge": "y"})

    assert sink.node_properties(1) == {"node_for_adding": "a"}
    ((_, end, rel_type, props),) = sink.relationships(1)
    assert (end, rel_type) == (2, "KNOWS")
    assert props == {"key": 7, "u_for_edge": "x", "v_for_edge": "y"}


def test_type_attribute_collision_fails(sink):
    sink.create_node(1, {})
    sink.create_node(2, {})
    with pytest.raises(ValueError):
        sink.create_relationship(1, 2, "KNOWS", {REL_TYPE_ATTR: "other"})
    assert sink.graph.number_of_edges() == 0


def test_shutdown_without_output_writes_nothing(sink, tmp_path):
    sink.create_node(1, {})
    sink.shutdown()
    assert list(tmp_path.iterdir()) == []
