"""
I/O layer for bulk graph imports.

This package provides the row sources and entity targets the import
pipeline runs against, and exposes a stable public API for:
- Streaming delimited text files as field lists
- Reading typed rows from SQLite tables and pandas DataFrames
- Writing nodes/relationships into a NetworkX graph (GraphML on shutdown)
- Writing exact-match secondary indices into SQLite

Notes:
- The pipeline only depends on the `RowCursor`, `GraphSink` and
  `IndexSink` contracts; the concrete classes here are the reference
  implementations.
"""

from pg_bulk_import.io.csv_tools import iter_records, read_records, split_record
from pg_bulk_import.io.cursor import DataFrameCursor, RowCursor, SqliteTableCursor, native_type_for_dtype
from pg_bulk_import.io.sinks import REL_TYPE_ATTR, GraphSink, IndexSink, NetworkxGraphSink
from pg_bulk_import.io.kv_store import SqliteIndexSink

__all__ = [
    "iter_records",
    "read_records",
    "split_record",
    "DataFrameCursor",
    "RowCursor",
    "SqliteTableCursor",
    "native_type_for_dtype",
    "REL_TYPE_ATTR",
    "GraphSink",
    "IndexSink",
    "NetworkxGraphSink",
    "SqliteIndexSink",
]
