from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Set

from pg_bulk_import.schema.types import ScalarType, converter_for

# property name -> typed value; absent key means "no value for this row"
PropertyMap = Dict[str, Any]


@dataclass(frozen=True)
class PropertyKey:
    """
    Declared property: name, scalar type and optional index assignment.

    The converter for `type` is resolved once here and reused for every
    row bound to this key.
    """

    name: str
    type: ScalarType = ScalarType.STRING
    index: Optional[str] = None
    converter: Callable[[Any], Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "converter", converter_for(self.type))

    @property
    def is_indexed(self) -> bool:
        return self.index is not None

    def convert(self, raw: Any) -> Any:
        return self.converter(raw)


@dataclass(frozen=True)
class ColumnDescriptor:
    """Column name and native type name, as reported by a cursor source."""

    name: str
    native_type: str


@dataclass
class IndexGroup:
    """
    Property names mirrored into one secondary index.
    """

    index_name: str
    members: Set[str] = field(default_factory=set)

    def subset(self, properties: Mapping[str, Any]) -> PropertyMap:
        """
        Restrict a property map to this group's members.

        Members missing from `properties` are absent from the result.

        Args:
            properties (Mapping[str, Any]): Properties of one entity.

        Returns:
            PropertyMap: Indexed properties for that entity.
        """
        return {k: v for k, v in properties.items() if k in self.members}


@dataclass
class NodeRecord:
    id: int
    properties: PropertyMap = field(default_factory=dict)


@dataclass
class RelationshipRecord:
    start: int
    end: int
    type: str
    properties: PropertyMap = field(default_factory=dict)


@dataclass
class ImportSummary:
    """Entity counts of a completed import run."""

    nodes: int = 0
    relationships: int = 0
