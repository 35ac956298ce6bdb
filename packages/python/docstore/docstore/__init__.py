"""Schema-validated document repository on top of MongoDB."""

from .errors import (
    Constraint,
    RepositoryError,
    StoreOperationFailed,
    StoreUnavailable,
    ValidationFailed,
    ValidationIssue,
)
from .fields import ALWAYS, NEVER, DependsOn, FieldKind, FieldRule, Required, required_when, utc_now
from .filters import MatchMode, Pattern, build_query
from .models import StoredDocument
from .repository import DocumentCursor, DocumentRepository
from .schema import Schema, ValidationResult

__all__ = [
    "ALWAYS",
    "NEVER",
    "Constraint",
    "DependsOn",
    "DocumentCursor",
    "DocumentRepository",
    "FieldKind",
    "FieldRule",
    "MatchMode",
    "Pattern",
    "RepositoryError",
    "Required",
    "Schema",
    "StoreOperationFailed",
    "StoreUnavailable",
    "StoredDocument",
    "ValidationFailed",
    "ValidationIssue",
    "ValidationResult",
    "build_query",
    "required_when",
    "utc_now",
]
