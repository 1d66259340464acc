from __future__ import annotations

from typing import List, Sequence

from pg_bulk_import.errors import DataImportError
from pg_bulk_import.schema.models import PropertyKey
from pg_bulk_import.schema.types import ScalarType, parse_type_tag

INDEX_SEPARATOR = "|"
TYPE_SEPARATOR = "@"


def parse_property_key(field: str) -> PropertyKey:
    """
    Parse one header field of the form `[indexName|]propertyName[@typeTag]`.

    Property names are case-folded to lower case, like cursor column names;
    index names keep their declared casing.

    Examples:
        `name`            -> name, String, not indexed
        `since@long`      -> since, 64-bit integer
        `people|name@String` -> name, String, indexed in `people`

    Args:
        field (str): Raw header field.

    Returns:
        PropertyKey: Declared key.

    Raises:
        UnknownType: If the type tag is not recognized.
        DataImportError: If the property name is empty.
    """
    declaration, has_type, tag = field.partition(TYPE_SEPARATOR)
    index, has_index, name = declaration.partition(INDEX_SEPARATOR)
    if not has_index:
        index, name = None, declaration

    scalar_type = parse_type_tag(tag) if has_type else ScalarType.STRING
    if not name:
        raise DataImportError(f"Empty property name in header field {field!r}")
    return PropertyKey(name=name.lower(), type=scalar_type, index=index or None)


def parse_property_keys(fields: Sequence[str]) -> List[PropertyKey]:
    """Parse header fields in order; position defines binding for data rows."""
    return [parse_property_key(f) for f in fields]
