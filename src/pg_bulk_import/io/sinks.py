from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

import networkx as nx

from pg_bulk_import.utils.paths import ensure_parent_dir

logger = logging.getLogger(__name__)

REL_TYPE_ATTR = ":TYPE"


class GraphSink:
    """
    Bulk-insertion target for nodes and relationships.

    Callers supply node identifiers; relationship identifiers are assigned
    by the sink. Implementations must fail fast on anything they cannot
    store (duplicate ids, unknown endpoints).
    """

    def create_node(self, node_id: int, properties: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def create_relationship(self, start: int, end: int, rel_type: str, properties: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def shutdown(self) -> None:
        pass


class IndexSink:
    """Target for secondary-index entries of imported entities."""

    def add_to_index(self, index_name: str, entity_id: int, properties: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def shutdown(self) -> None:
        pass


class NetworkxGraphSink(GraphSink):
    """
    In-memory graph target backed by a `networkx.MultiDiGraph`.

    Node ids are the graph's node keys and node properties are node
    attributes. Every relationship becomes an edge keyed by its assigned id,
    with the relationship type stored under the `:TYPE` attribute.

    If `output_path` is set, the graph is written as GraphML on shutdown.
    """

    def __init__(self, output_path: Optional[str] = None):
        self.graph = nx.MultiDiGraph()
        self.output_path = output_path
        self._next_rel_id = 0

    def create_node(self, node_id: int, properties: Mapping[str, Any]) -> None:
        if node_id in self.graph:
            raise ValueError(f"Node {node_id} already exists")
        # property names may shadow add_node keywords
        self.graph.add_nodes_from([(node_id, dict(properties))])

    def create_relationship(self, start: int, end: int, rel_type: str, properties: Mapping[str, Any]) -> int:
        for node_id in (start, end):
            if node_id not in self.graph:
                raise KeyError(f"Node {node_id} does not exist")
        if REL_TYPE_ATTR in properties:
            raise ValueError(f"Property name {REL_TYPE_ATTR!r} is reserved for the relationship type")
        rel_id = self._next_rel_id
        self._next_rel_id += 1
        attrs: Dict[str, Any] = dict(properties)
        attrs[REL_TYPE_ATTR] = rel_type
        self.graph.add_edges_from([(start, end, rel_id, attrs)])
        return rel_id

    # ============================================================
    # Read helpers
    # ============================================================

    def node_properties(self, node_id: int) -> Dict[str, Any]:
        """Return a copy of a node's properties; raises KeyError if absent."""
        if node_id not in self.graph:
            raise KeyError(f"Node {node_id} does not exist")
        return dict(self.graph.nodes[node_id])

    def relationships(self, start: int, rel_type: Optional[str] = None):
        """
        List outgoing relationships of a node as (rel_id, end, type, properties).

        Args:
            start (int): Start node id.
            rel_type (Optional[str]): Only return relationships of this type.
        """
        out = []
        for _, end, rel_id, attrs in self.graph.out_edges(start, keys=True, data=True):
            props = {k: v for k, v in attrs.items() if k != REL_TYPE_ATTR}
            t = attrs.get(REL_TYPE_ATTR)
            if rel_type is None or t == rel_type:
                out.append((rel_id, end, t, props))
        return out

    def shutdown(self) -> None:
        if not self.output_path:
            return
        ensure_parent_dir(self.output_path)
        nx.write_graphml(self.graph, self.output_path)
        logger.info(
            "Wrote %d nodes and %d relationships to %s",
            self.graph.number_of_nodes(),
            self.graph.number_of_edges(),
            os.path.abspath(self.output_path),
        )
