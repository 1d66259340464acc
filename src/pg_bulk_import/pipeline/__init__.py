"""
Import orchestration for bulk graph loading.

This package groups the two import pipelines and the index builder:
- `csv_import`: node/relationship text files -> graph sink (+ indices)
- `cursor_import`: typed row cursors (SQLite, pandas) -> graph sink
- `indexing`: header-declared index groups -> index sink

Pipelines are intentionally not imported at package level to avoid
loading pandas and networkx by default. Import each one explicitly from
its module.
"""


__all__ = []
