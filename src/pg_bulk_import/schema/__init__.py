"""
Schema-level building blocks for bulk graph imports.

This package holds everything that describes *what* a property is, as
opposed to where rows come from or where entities go:
- the closed set of scalar types and their conversion functions
- property keys, index groups and the per-row entity records
- column classification (reserved-exclusion and allow-list modes)
- parsing of `[index|]name[@type]` header declarations
"""

from pg_bulk_import.schema.types import (
    ScalarType,
    convert,
    converter_for,
    parse_native_type,
    parse_type_tag,
)
from pg_bulk_import.schema.models import (
    ColumnDescriptor,
    ImportSummary,
    IndexGroup,
    NodeRecord,
    PropertyKey,
    PropertyMap,
    RelationshipRecord,
)
from pg_bulk_import.schema.columns import ColumnClassifier, classify_columns, resolve_column
from pg_bulk_import.schema.header import parse_property_key, parse_property_keys

__all__ = [
    "ScalarType",
    "convert",
    "converter_for",
    "parse_native_type",
    "parse_type_tag",
    "ColumnDescriptor",
    "ImportSummary",
    "IndexGroup",
    "NodeRecord",
    "PropertyKey",
    "PropertyMap",
    "RelationshipRecord",
    "ColumnClassifier",
    "classify_columns",
    "resolve_column",
    "parse_property_key",
    "parse_property_keys",
]
