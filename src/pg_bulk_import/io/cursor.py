from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Iterator, List, Mapping, Optional

import pandas as pd

from pg_bulk_import.schema.models import ColumnDescriptor

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


class RowCursor:
    """
    Forward-only typed row source.

    Implementations report their columns once through `columns()` and then
    yield each row as a mapping from column name to native value, with
    `None` for SQL NULL.
    """

    def columns(self) -> List[ColumnDescriptor]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Row]:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class SqliteTableCursor(RowCursor):
    """
    Streams every row of one SQLite table.

    Column types come from the declared types in `PRAGMA table_info`, so a
    table created as `(id BIGINT, name VARCHAR)` reports BIGINT and VARCHAR.
    Rows are fetched lazily from a single `SELECT *` pass.
    """

    def __init__(self, connection: sqlite3.Connection, table: str):
        self.connection = connection
        self.table = table
        self._cursor: Optional[sqlite3.Cursor] = None
        self._columns: Optional[List[ColumnDescriptor]] = None

    def columns(self) -> List[ColumnDescriptor]:
        if self._columns is None:
            info = self.connection.execute(f"PRAGMA table_info({_quote_identifier(self.table)})").fetchall()
            if not info:
                raise sqlite3.OperationalError(f"no such table: {self.table}")
            # (cid, name, type, notnull, dflt_value, pk)
            self._columns = [ColumnDescriptor(name=row[1], native_type=row[2]) for row in info]
        return self._columns

    def __iter__(self) -> Iterator[Row]:
        names = [c.name for c in self.columns()]
        select = ", ".join(_quote_identifier(n) for n in names)
        self._cursor = self.connection.execute(f"SELECT {select} FROM {_quote_identifier(self.table)}")
        try:
            for values in self._cursor:
                yield dict(zip(names, values))
        finally:
            self.close()

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


# pandas dtype name -> SQL-style native type name
_DTYPE_NATIVE_TYPES: Dict[str, str] = {
    "int64": "BIGINT",
    "Int64": "BIGINT",
    "int32": "INTEGER",
    "Int32": "INTEGER",
    "int16": "SMALLINT",
    "Int16": "SMALLINT",
    "int8": "TINYINT",
    "Int8": "TINYINT",
    "float32": "FLOAT",
    "Float32": "FLOAT",
    "float64": "DOUBLE",
    "Float64": "DOUBLE",
    "bool": "BOOLEAN",
    "boolean": "BOOLEAN",
}


def native_type_for_dtype(dtype: Any) -> str:
    """
    Map a pandas dtype to the native type name used for type resolution.

    Anything without an explicit mapping (object, string, category, ...)
    is reported as VARCHAR.
    """
    return _DTYPE_NATIVE_TYPES.get(str(dtype), "VARCHAR")


class DataFrameCursor(RowCursor):
    """
    Row source over an in-memory `pandas.DataFrame`.

    Useful for query results already loaded through pandas (for example
    `pd.read_sql`). Missing values (`NaN`, `None`, `pd.NA`) are reported as
    `None` so they are treated as absent properties.
    """

    def __init__(self, frame: pd.DataFrame):
        self.frame = frame

    def columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(name=str(name), native_type=native_type_for_dtype(dtype))
            for name, dtype in self.frame.dtypes.items()
        ]

    def __iter__(self) -> Iterator[Row]:
        names = [str(c) for c in self.frame.columns]
        for values in self.frame.itertuples(index=False, name=None):
            yield {name: (None if pd.isna(v) else v) for name, v in zip(names, values)}
