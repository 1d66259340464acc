"""
Error taxonomy for bulk graph imports.

Every error is fatal for the run: there is no skip-and-continue mode. The
orchestrators re-raise anything that escapes a stream as `ImportFailed`, so
callers only need to handle that one type and can inspect `.cause` for the
underlying reason.
"""

from __future__ import annotations


class DataImportError(Exception):
    """Base class for all import errors."""


class UnknownType(DataImportError, ValueError):
    """A type tag is not one of the recognized scalar types."""

    def __init__(self, tag: str):
        super().__init__(f"Unknown type: {tag!r}")
        self.tag = tag


class DuplicateHeaderDeclaration(DataImportError):
    """Property keys were declared more than once within one entity stream."""


class MalformedRelationship(DataImportError):
    """A relationship record lacks the <from>,<to>,<type> leading fields."""


class PropertyArityMismatch(DataImportError):
    """A data row carries more property values than declared keys."""


class ImportFailed(DataImportError):
    """
    Uniform failure of a whole import run.

    The target store must be treated as unusable after this is raised.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"Import failed: {cause}")
        self.cause = cause
