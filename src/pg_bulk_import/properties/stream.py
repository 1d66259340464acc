from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

from pg_bulk_import.errors import DuplicateHeaderDeclaration, MalformedRelationship
from pg_bulk_import.properties.strategy import HeaderPropertyStrategy
from pg_bulk_import.schema.models import NodeRecord, PropertyKey, RelationshipRecord
from pg_bulk_import.schema.types import try_parse_long

logger = logging.getLogger(__name__)

EntityRecord = Union[NodeRecord, RelationshipRecord]
HeaderCallback = Callable[[List[PropertyKey]], None]


class EntityKind(Enum):
    NODE = "node"
    RELATIONSHIP = "relationship"

    @property
    def leading_fields(self) -> int:
        # <id> | <from>,<to>,<type>
        return 1 if self is EntityKind.NODE else 3


class StreamState(Enum):
    AWAITING_HEADER = "awaiting_header"
    STREAMING = "streaming"
    DONE = "done"


class EntityStream:
    """
    Splits one stream of raw records into a header and data rows.

    The first record whose leading identifier field(s) do not parse as
    64-bit integers is the header: its trailing fields declare the property
    keys for the rest of the stream. Every other record is a data row and
    is emitted as a NodeRecord or RelationshipRecord.

    Lifecycle: AWAITING_HEADER -> STREAMING on the first data row, DONE
    when the input is exhausted. A header is only accepted while awaiting
    it; a second one raises DuplicateHeaderDeclaration.

    Args:
        kind (EntityKind): Node or relationship stream.
        strategy (Optional[HeaderPropertyStrategy]): Property extraction for
            trailing fields; a fresh one is created when omitted.
        on_header (Optional[HeaderCallback]): Called once with the declared
            keys, before any data row is emitted.
    """

    def __init__(
        self,
        kind: EntityKind,
        strategy: Optional[HeaderPropertyStrategy] = None,
        on_header: Optional[HeaderCallback] = None,
    ):
        self.kind = kind
        self.strategy = strategy or HeaderPropertyStrategy(kind.leading_fields)
        self.on_header = on_header
        self.state = StreamState.AWAITING_HEADER
        self.header_seen = False

    def _declare(self, record: Sequence[str]) -> None:
        if self.header_seen:
            raise DuplicateHeaderDeclaration(f"Can only set property keys once; second header: {list(record)!r}")
        if self.state is not StreamState.AWAITING_HEADER:
            raise DuplicateHeaderDeclaration(f"Header after data rows: {list(record)!r}")

        self.strategy.initialize(record)
        self.header_seen = True
        if self.on_header is not None:
            self.on_header(self.strategy.property_keys)

    def parse(self, record: Sequence[str]) -> Optional[EntityRecord]:
        """
        Consume one record.

        Returns:
            Optional[EntityRecord]: The data row, or None if the record was
            the header.
        """
        if self.kind is EntityKind.NODE:
            node_id = try_parse_long(record[0])
            if node_id is None:
                self._declare(record)
                return None
            self.state = StreamState.STREAMING
            return NodeRecord(id=node_id, properties=self.strategy.extract_row(record))

        if len(record) < 3:
            raise MalformedRelationship(f"Relationship must have at least <from>,<to>,<type>: {list(record)!r}")
        start = try_parse_long(record[0])
        end = try_parse_long(record[1])
        if start is None or end is None:
            self._declare(record)
            return None
        self.state = StreamState.STREAMING
        return RelationshipRecord(
            start=start,
            end=end,
            type=record[2],
            properties=self.strategy.extract_row(record),
        )

    def process(self, records: Iterable[Sequence[str]]) -> Iterator[EntityRecord]:
        """Yield the data rows of `records` in order, consuming any header."""
        for record in records:
            entity = self.parse(record)
            if entity is not None:
                yield entity
        self.state = StreamState.DONE
        logger.debug("%s stream done", self.kind.value)
