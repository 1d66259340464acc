from __future__ import annotations

import logging
import sqlite3
from typing import Dict, Iterable, Optional, Sequence

from pg_bulk_import.config import ImportConfig
from pg_bulk_import.errors import DataImportError, ImportFailed
from pg_bulk_import.io.cursor import RowCursor, SqliteTableCursor
from pg_bulk_import.io.sinks import GraphSink, NetworkxGraphSink
from pg_bulk_import.properties.strategy import ColumnPropertyStrategy
from pg_bulk_import.schema.columns import resolve_column
from pg_bulk_import.schema.models import ImportSummary
from pg_bulk_import.schema.types import parse_integer
from pg_bulk_import.utils.progress import ProgressReporter

logger = logging.getLogger(__name__)


def _resolve_reserved(cursor: RowCursor, wanted: Sequence[str]) -> Dict[str, str]:
    """
    Map configured structural column names to the cursor's actual names.

    Raises:
        DataImportError: If a structural column is missing.
    """
    columns = [c.name for c in cursor.columns()]
    resolved = {}
    for name in wanted:
        actual = resolve_column(columns, name)
        if actual is None:
            raise DataImportError(f"Column {name!r} not found; available columns: {columns}")
        resolved[name] = actual
    return resolved


class CursorImporter:
    """
    Imports nodes and relationships from two typed row cursors.

    The node cursor needs an id column; the relationship cursor needs
    start, end and type columns. Every other column is a property, unless
    an explicit property allow-list is given for that stream. Column names
    are matched case-insensitively and property names are lower-cased.

    Example:
        importer = CursorImporter(
            SqliteTableCursor(conn, "nodes"),
            SqliteTableCursor(conn, "rels"),
        )
        importer.import_to(NetworkxGraphSink())
    """

    def __init__(
        self,
        nodes: RowCursor,
        rels: Optional[RowCursor] = None,
        *,
        node_id_column: Optional[str] = None,
        rel_columns: Optional[Sequence[str]] = None,
        node_properties: Optional[Iterable[str]] = None,
        rel_properties: Optional[Iterable[str]] = None,
        config: Optional[ImportConfig] = None,
    ):
        self.config = config or ImportConfig()
        self.nodes = nodes
        self.rels = rels
        self.node_id_column = node_id_column or self.config.node_id_column
        self.rel_columns = tuple(rel_columns or self.config.rel_columns)
        if len(self.rel_columns) != 3:
            raise ValueError(f"rel_columns must name <start>,<end>,<type> columns, got {self.rel_columns!r}")
        self.node_properties = None if node_properties is None else list(node_properties)
        self.rel_properties = None if rel_properties is None else list(rel_properties)

    def _strategy(self, allow_list: Optional[Sequence[str]]) -> ColumnPropertyStrategy:
        return ColumnPropertyStrategy(allow_list=allow_list)

    def import_to(self, target: GraphSink) -> ImportSummary:
        """
        Run the import: all node rows, then all relationship rows.

        Raises:
            ImportFailed: On any metadata, conversion, cursor or sink error.
        """
        summary = ImportSummary()
        try:
            summary.nodes = self._import_nodes(target)
            if self.rels is not None:
                summary.relationships = self._import_rels(target)
        except ImportFailed:
            raise
        except Exception as e:
            raise ImportFailed(e) from e
        return summary

    def _import_nodes(self, target: GraphSink) -> int:
        columns = _resolve_reserved(self.nodes, [self.node_id_column])
        id_column = columns[self.node_id_column]

        strategy = self._strategy(self.node_properties)
        strategy.initialize(self.nodes, id_column)

        progress = ProgressReporter("nodes", self.config.progress_every, self.config.verbose)
        try:
            for row in self.nodes:
                target.create_node(parse_integer(row[id_column]), strategy.extract_row(row))
                progress.tick()
        finally:
            self.nodes.close()
        return progress.done()

    def _import_rels(self, target: GraphSink) -> int:
        columns = _resolve_reserved(self.rels, self.rel_columns)
        start_col, end_col, type_col = (columns[c] for c in self.rel_columns)

        strategy = self._strategy(self.rel_properties)
        strategy.initialize(self.rels, start_col, end_col, type_col)

        progress = ProgressReporter("relationships", self.config.progress_every, self.config.verbose)
        try:
            for row in self.rels:
                rel_type = row[type_col]
                if rel_type is None:
                    raise DataImportError(f"Relationship row without type: {dict(row)!r}")
                target.create_relationship(
                    parse_integer(row[start_col]),
                    parse_integer(row[end_col]),
                    str(rel_type),
                    strategy.extract_row(row),
                )
                progress.tick()
        finally:
            self.rels.close()
        return progress.done()


def run_sqlite_import(
    db_path: str,
    nodes_table: str,
    rels_table: Optional[str] = None,
    output_path: Optional[str] = None,
    config: Optional[ImportConfig] = None,
    **importer_options,
) -> ImportSummary:
    """
    Import two SQLite tables into a NetworkX graph.

    Args:
        db_path (str): SQLite database file.
        nodes_table (str): Table holding one row per node.
        rels_table (Optional[str]): Table holding one row per relationship.
        output_path (Optional[str]): GraphML file written on success.
        config (Optional[ImportConfig]): Import configuration.
        **importer_options: Passed on to CursorImporter (column names,
            property allow-lists).

    Returns:
        ImportSummary: Entity counts.
    """
    target = NetworkxGraphSink(output_path)
    conn = sqlite3.connect(db_path)
    try:
        importer = CursorImporter(
            SqliteTableCursor(conn, nodes_table),
            SqliteTableCursor(conn, rels_table) if rels_table else None,
            config=config,
            **importer_options,
        )
        summary = importer.import_to(target)
    finally:
        conn.close()
    target.shutdown()
    return summary
