"""
Boundary Failures: Explainable Exceptions for Outside Data.

The core never raises on a bad deck: the validator reports and the
state machine clamps. Exceptions exist only where data enters the
package from outside the core:

- Catalog files (card and taboo data)
- Persisted deck snapshots

Every such exception is a KnownError: it carries a classification,
a message, optional technical detail and a suggested action.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of boundary failures."""

    # Input failures
    INVALID_INPUT = "invalid_input"
    INVALID_SNAPSHOT = "invalid_snapshot"

    # Resource failures
    NOT_FOUND = "not_found"
    CATALOG_UNAVAILABLE = "catalog_unavailable"


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> dict[str, str | None]:
        """Plain representation for the embedding application."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
        }


class CatalogLoadError(KnownError):
    """Raised when catalog data exists but cannot be parsed."""

    def __init__(self, source: str, detail: str | None = None):
        self.source = source
        super().__init__(
            kind=FailureKind.CATALOG_UNAVAILABLE,
            message=f"Could not load catalog data from {source}",
            detail=detail,
            suggestion="Check that the file holds ArkhamDB-shaped JSON.",
        )


class SnapshotError(KnownError):
    """Raised when a persisted deck snapshot cannot be decoded."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_SNAPSHOT,
            message="Deck snapshot is malformed",
            detail=detail,
            suggestion="Re-save the deck or restore it from an earlier version.",
        )
