"""
Property extraction for bulk graph imports.

This package turns source rows into typed property maps:
- `ColumnPropertyStrategy` reads typed cursor rows using column metadata
- `HeaderPropertyStrategy` reads delimited text records using the
  `[index|]name[@type]` declarations of a header record
- `EntityStream` splits a text stream into its one-time header and data
  rows, emitting node/relationship records
"""

from pg_bulk_import.properties.strategy import (
    ColumnAccessor,
    ColumnPropertyStrategy,
    HeaderPropertyStrategy,
    PropertyStrategy,
)
from pg_bulk_import.properties.stream import EntityKind, EntityRecord, EntityStream, StreamState

__all__ = [
    "ColumnAccessor",
    "ColumnPropertyStrategy",
    "HeaderPropertyStrategy",
    "PropertyStrategy",
    "EntityKind",
    "EntityRecord",
    "EntityStream",
    "StreamState",
]
