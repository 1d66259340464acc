from __future__ import annotations

from typing import Iterable, List, Optional, Sequence


class ColumnClassifier:
    """
    Decides which source columns become graph properties.

    Two modes:
    - allow-list: only columns named in `allow_list` are properties and
      `reserved` is ignored;
    - reserved-exclusion: every column except the reserved ones is a
      property.

    Names are compared case-insensitively; both sets are lower-cased once
    at construction.
    """

    def __init__(self, reserved: Iterable[str] = (), allow_list: Optional[Iterable[str]] = None):
        self.reserved = frozenset(name.lower() for name in reserved)
        self.allow_list = None if allow_list is None else frozenset(name.lower() for name in allow_list)

    def is_property_column(self, column: str) -> bool:
        key = column.lower()
        if self.allow_list is not None:
            return key in self.allow_list
        return key not in self.reserved

    def classify(self, columns: Sequence[str]) -> List[str]:
        """
        Select the property columns from a full column list.

        Args:
            columns (Sequence[str]): All column names, in source order.

        Returns:
            List[str]: Property columns with their original casing, in
            source order.
        """
        return [c for c in columns if self.is_property_column(c)]


def classify_columns(
    columns: Sequence[str],
    reserved: Iterable[str] = (),
    allow_list: Optional[Iterable[str]] = None,
) -> List[str]:
    """Shortcut for `ColumnClassifier(reserved, allow_list).classify(columns)`."""
    return ColumnClassifier(reserved, allow_list).classify(columns)


def resolve_column(columns: Sequence[str], wanted: str) -> Optional[str]:
    """
    Map a configured column name to the source's actual column name.

    Exact matches win over case-insensitive ones.

    Args:
        columns (Sequence[str]): Column names present in the source.
        wanted (str): Configured column name.

    Returns:
        Optional[str]: Matching source column, or None if absent.
    """
    if wanted in columns:
        return wanted
    wanted_l = wanted.lower()
    return next((c for c in columns if c.lower() == wanted_l), None)
