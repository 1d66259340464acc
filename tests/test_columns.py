import pytest

from pg_bulk_import.schema.columns import ColumnClassifier, classify_columns, resolve_column


def test_reserved_columns_are_excluded_case_insensitively():
    assert classify_columns(["ID", "Name", "age"], reserved=["id"]) == ["Name", "age"]


def test_relationship_reserved_columns():
    columns = ["src", "dest", "TYPE", "since"]
    assert classify_columns(columns, reserved=["src", "dest", "type"]) == ["since"]


def test_no_reserved_columns_keeps_everything():
    assert classify_columns(["a", "b"]) == ["a", "b"]


def test_allow_list_overrides_reserved():
    # age is not reserved but is not allowed either
    assert classify_columns(["id", "name", "age"], reserved=["id"], allow_list=["name"]) == ["name"]


def test_allow_list_ignores_reserved_names():
    assert classify_columns(["id", "name"], reserved=["id"], allow_list=["ID", "name"]) == ["id", "name"]


def test_empty_allow_list_selects_nothing():
    assert classify_columns(["id", "name"], allow_list=[]) == []


@pytest.mark.parametrize(
    "columns",
    [
        ["id", "Name", "age", "SRC"],
        ["SRC", "age", "Name", "id"],
        ["age", "id", "SRC", "Name"],
    ],
)
def test_classification_independent_of_order(columns):
    assert set(classify_columns(columns, reserved=["ID", "src"])) == {"Name", "age"}


def test_classifier_membership():
    classifier = ColumnClassifier(reserved=["Id"])
    assert not classifier.is_property_column("iD")
    assert classifier.is_property_column("name")


def test_resolve_column():
    assert resolve_column(["ID", "name"], "id") == "ID"
    assert resolve_column(["id", "ID"], "ID") == "ID"
    assert resolve_column(["name"], "id") is None
