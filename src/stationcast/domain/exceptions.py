"""Catalog loading exceptions."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog loading errors."""


class FetchFailure(CatalogError):
    """Raised when the catalog cannot be retrieved (network, timeout, HTTP status)."""


class ParseFailure(CatalogError):
    """Raised when the response body is not a valid JSON document."""


class TranslationFailure(CatalogError):
    """Raised when a well-formed document has an unusable station entry.

    ``position`` is the zero-based index of the offending entry in the
    document's ``data`` list, or ``None`` when the document itself is
    missing the list.
    """

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position
