"""Domain-level errors raised by the document repository."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, NamedTuple


class Constraint(str, Enum):
    """Name of the field rule a value violated."""

    REQUIRED = "required"
    TYPE = "type"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN = "min"
    MAX = "max"
    ENUM = "enum"
    MIN_ITEMS = "min_items"
    MAX_ITEMS = "max_items"
    UNKNOWN_FIELD = "unknown_field"


class ValidationIssue(NamedTuple):
    field: str
    constraint: Constraint
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class RepositoryError(Exception):
    """Base class for every error a repository operation raises."""


class ValidationFailed(RepositoryError):
    """Raised when a document does not satisfy its schema.

    ``errors`` holds every violated constraint, not only the first one.
    """

    def __init__(self, errors: Iterable[ValidationIssue]) -> None:
        self.errors: tuple[ValidationIssue, ...] = tuple(errors)
        summary = "; ".join(str(issue) for issue in self.errors)
        super().__init__(f"validation failed: {summary}")

    def fields(self) -> set[str]:
        return {issue.field for issue in self.errors}


class StoreUnavailable(RepositoryError):
    """Raised when the store cannot be reached. Callers may retry."""

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(f"document store unavailable: {cause}" if cause else "document store unavailable")


class StoreOperationFailed(RepositoryError):
    """Raised when the store rejects a structurally valid request."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"document store rejected the operation: {cause}")
