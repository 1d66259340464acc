"""
Bulk loading of property graphs from delimited text files and typed row
cursors.
"""

from pg_bulk_import.errors import (
    DataImportError,
    DuplicateHeaderDeclaration,
    ImportFailed,
    MalformedRelationship,
    PropertyArityMismatch,
    UnknownType,
)

__version__ = "0.1.0"

__all__ = [
    "DataImportError",
    "DuplicateHeaderDeclaration",
    "ImportFailed",
    "MalformedRelationship",
    "PropertyArityMismatch",
    "UnknownType",
    "__version__",
]
