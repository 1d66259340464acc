from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence

from pg_bulk_import.errors import DuplicateHeaderDeclaration, PropertyArityMismatch
from pg_bulk_import.io.cursor import Row, RowCursor
from pg_bulk_import.schema.columns import ColumnClassifier
from pg_bulk_import.schema.header import parse_property_keys
from pg_bulk_import.schema.models import PropertyKey, PropertyMap
from pg_bulk_import.schema.types import converter_for, parse_native_type

logger = logging.getLogger(__name__)


class PropertyStrategy:
    """
    Turns one source row into a property map.

    `initialize` declares the property keys from the source's schema
    (cursor metadata or a header record) and may only be called once per
    instance; `extract_row` is then called for every data row.
    """

    def __init__(self):
        self.initialized = False

    def _mark_initialized(self) -> None:
        if self.initialized:
            raise DuplicateHeaderDeclaration("Can only set property keys once.")
        self.initialized = True

    def initialize(self, schema_source, *reserved: str) -> None:
        raise NotImplementedError

    def extract_row(self, row) -> PropertyMap:
        raise NotImplementedError


# ============================================================
# Cursor-driven strategy
# ============================================================

@dataclass(frozen=True)
class ColumnAccessor:
    """Reads and converts one column of the current cursor row."""

    column: str
    key: str
    converter: Callable[[Any], Any]

    def get_value(self, row: Row) -> Any:
        raw = row.get(self.column)
        if raw is None:
            return None
        return self.converter(raw)


class ColumnPropertyStrategy(PropertyStrategy):
    """
    Property extraction driven by a typed cursor's column metadata.

    Without arguments every non-reserved column is a property. Passing
    column names (or an `allow_list`, which may be empty) switches to
    allow-list mode: only those columns are properties and the reserved
    names are ignored.

    Example:
        strategy = ColumnPropertyStrategy()
        strategy.initialize(cursor, "id")
        for row in cursor:
            props = strategy.extract_row(row)
    """

    def __init__(self, *property_columns: str, allow_list: Optional[Iterable[str]] = None):
        super().__init__()
        self.property_columns: Optional[List[str]] = None
        if allow_list is not None:
            self.property_columns = [*property_columns, *allow_list]
        elif property_columns:
            self.property_columns = list(property_columns)
        self.accessors: List[ColumnAccessor] = []

    def initialize(self, cursor: RowCursor, *reserved: str) -> None:
        self._mark_initialized()

        columns = cursor.columns()
        logger.info("Found %d columns", len(columns))
        for c in columns:
            logger.debug("Found column %s (%s)", c.name, c.native_type)

        classifier = ColumnClassifier(reserved=reserved, allow_list=self.property_columns)
        selected = set(classifier.classify([c.name for c in columns]))

        if self.property_columns is not None:
            present = {c.name.lower() for c in columns}
            for name in self.property_columns:
                if name.lower() not in present:
                    logger.warning("Property column %r not found in source", name)

        self.accessors = [
            ColumnAccessor(
                column=c.name,
                key=c.name.lower(),
                converter=converter_for(parse_native_type(c.native_type)),
            )
            for c in columns
            if c.name in selected
        ]

    def extract_row(self, row: Row) -> PropertyMap:
        properties: PropertyMap = {}
        for accessor in self.accessors:
            value = accessor.get_value(row)
            if value is not None:
                properties[accessor.key] = value
        return properties


# ============================================================
# Header-driven strategy (text sources)
# ============================================================

class HeaderPropertyStrategy(PropertyStrategy):
    """
    Property extraction driven by type annotations in a text header.

    The first `leading_fields` fields of every record are structural (node
    id, or from/to/type for relationships) and never become properties.
    The remaining header fields declare `[index|]name[@type]` keys that bind
    positionally to the remaining fields of each data record.
    """

    def __init__(self, leading_fields: int = 1):
        super().__init__()
        self.leading_fields = leading_fields
        self.property_keys: List[PropertyKey] = []

    def initialize(self, header: Sequence[str], *reserved: str) -> None:
        self._mark_initialized()
        self.property_keys = parse_property_keys(header[self.leading_fields:])
        logger.debug("Declared property keys: %s", self.property_keys)

    def extract_row(self, record: Sequence[str]) -> PropertyMap:
        values = record[self.leading_fields:]
        if len(values) > len(self.property_keys):
            raise PropertyArityMismatch(
                f"Record has {len(values)} property values but {len(self.property_keys)} "
                f"property keys are declared: {list(record)!r}"
            )

        properties: PropertyMap = {}
        for key, value in zip(self.property_keys, values):
            if value != "":
                properties[key.name] = key.convert(value)
        return properties
