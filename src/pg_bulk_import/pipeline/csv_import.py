from __future__ import annotations

import logging
from typing import List, Optional

from pg_bulk_import.config import ImportConfig
from pg_bulk_import.errors import ImportFailed
from pg_bulk_import.io.csv_tools import read_records
from pg_bulk_import.io.kv_store import SqliteIndexSink
from pg_bulk_import.io.sinks import GraphSink, IndexSink, NetworkxGraphSink
from pg_bulk_import.pipeline.indexing import IndexBuilder
from pg_bulk_import.properties.stream import EntityKind, EntityStream
from pg_bulk_import.schema.models import ImportSummary, PropertyKey
from pg_bulk_import.utils.progress import ProgressReporter

logger = logging.getLogger(__name__)


class CsvImporter:
    """
    Imports a node file and a relationship file into a graph sink.

    Node file:          `<id>,value1,value2,...`
    Relationship file:  `<from>,<to>,<type>,value1,...`

    Each file may start with a header whose trailing fields declare
    `[index|]name[@type]` property keys. Nodes are imported completely
    before relationships, each file in a single forward pass.
    """

    def __init__(self, nodes_path: str, rels_path: Optional[str] = None, config: Optional[ImportConfig] = None):
        self.nodes_path = nodes_path
        self.rels_path = rels_path
        self.config = config or ImportConfig()

    def import_to(self, target: GraphSink, index_sink: Optional[IndexSink] = None) -> ImportSummary:
        """
        Run the import.

        Args:
            target (GraphSink): Receives nodes and relationships.
            index_sink (Optional[IndexSink]): Receives indexed node properties
                when the node header declares index groups.

        Returns:
            ImportSummary: Number of nodes and relationships created.

        Raises:
            ImportFailed: On any parse, declaration, I/O or sink error.
        """
        summary = ImportSummary()
        try:
            summary.nodes = self._import_nodes(target, IndexBuilder(index_sink))
            if self.rels_path is not None:
                summary.relationships = self._import_rels(target)
        except ImportFailed:
            raise
        except Exception as e:
            raise ImportFailed(e) from e
        return summary

    def _records(self, path: str):
        return read_records(path, delimiter=self.config.delimiter, encoding=self.config.encoding)

    def _import_nodes(self, target: GraphSink, indexer: IndexBuilder) -> int:
        logger.info("Importing nodes from %s", self.nodes_path)
        stream = EntityStream(EntityKind.NODE, on_header=indexer.configure)
        progress = ProgressReporter("nodes", self.config.progress_every, self.config.verbose)
        for node in stream.process(self._records(self.nodes_path)):
            target.create_node(node.id, node.properties)
            indexer.record_node(node.id, node.properties)
            progress.tick()
        return progress.done()

    def _import_rels(self, target: GraphSink) -> int:
        logger.info("Importing relationships from %s", self.rels_path)
        stream = EntityStream(EntityKind.RELATIONSHIP, on_header=_warn_rel_indices)
        progress = ProgressReporter("relationships", self.config.progress_every, self.config.verbose)
        for rel in stream.process(self._records(self.rels_path)):
            target.create_relationship(rel.start, rel.end, rel.type, rel.properties)
            progress.tick()
        return progress.done()


def _warn_rel_indices(property_keys: List[PropertyKey]) -> None:
    indexed = [k.name for k in property_keys if k.is_indexed]
    if indexed:
        logger.warning("Relationship properties %s declare indices; only node properties are indexed", indexed)


def run_csv_import(
    nodes_path: str,
    rels_path: Optional[str] = None,
    output_path: Optional[str] = None,
    index_db: Optional[str] = None,
    config: Optional[ImportConfig] = None,
) -> ImportSummary:
    """
    Import CSV files into a NetworkX graph and optional SQLite indices.

    The sinks are created here. The index store is always closed; the
    graph is only written when the import succeeds. After a failure any
    index file written must be discarded.

    Args:
        nodes_path (str): Node file.
        rels_path (Optional[str]): Relationship file; skipped when None.
        output_path (Optional[str]): GraphML file written on shutdown.
        index_db (Optional[str]): SQLite file for secondary indices.
        config (Optional[ImportConfig]): Import configuration.

    Returns:
        ImportSummary: Entity counts.
    """
    config = config or ImportConfig()
    target = NetworkxGraphSink(output_path)
    index_sink = SqliteIndexSink(index_db) if index_db else None
    try:
        summary = CsvImporter(nodes_path, rels_path, config).import_to(target, index_sink)
    finally:
        if index_sink is not None:
            index_sink.shutdown()
    target.shutdown()
    return summary
