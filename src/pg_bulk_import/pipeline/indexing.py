from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from pg_bulk_import.errors import DuplicateHeaderDeclaration
from pg_bulk_import.io.sinks import IndexSink
from pg_bulk_import.schema.models import IndexGroup, PropertyKey

logger = logging.getLogger(__name__)


class IndexBuilder:
    """
    Mirrors selected node properties into secondary indices.

    `configure` groups the header's indexed property keys by index name;
    `record_node` then forwards, per group, the subset of each node's
    properties that belong to it.
    """

    def __init__(self, index_sink: Optional[IndexSink] = None):
        self.index_sink = index_sink
        self.groups: Dict[str, IndexGroup] = {}
        self.configured = False

    def configure(self, property_keys: Iterable[PropertyKey]) -> Dict[str, IndexGroup]:
        """
        Build index groups from declared property keys.

        Args:
            property_keys (Iterable[PropertyKey]): Keys declared by the header.

        Returns:
            Dict[str, IndexGroup]: Index name -> group of member property names.
        """
        if self.configured:
            raise DuplicateHeaderDeclaration("Indices can only be configured once.")
        self.configured = True

        groups: Dict[str, IndexGroup] = {}
        for key in property_keys:
            if key.is_indexed:
                groups.setdefault(key.index, IndexGroup(index_name=key.index)).members.add(key.name)

        if groups and self.index_sink is None:
            logger.warning("Index groups %s declared but no index sink configured; skipping", sorted(groups))
            groups = {}
        for group in groups.values():
            logger.info("Index %r covers %s", group.index_name, sorted(group.members))

        self.groups = groups
        return groups

    def record_node(self, node_id: int, properties: Mapping[str, Any]) -> None:
        for group in self.groups.values():
            self.index_sink.add_to_index(group.index_name, node_id, group.subset(properties))
