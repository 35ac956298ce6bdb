"""Declarative field rules used to build a ``Schema``."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Mapping, Optional

Predicate = Callable[[Mapping[str, Any]], bool]


class FieldKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY_OF_STRING = "array<string>"

    def accepts(self, value: Any) -> bool:
        if self is FieldKind.STRING:
            return isinstance(value, str)
        if self is FieldKind.NUMBER:
            # bool is an int subclass but never a number here.
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                return False
            # NaN and infinities slip past every bound comparison.
            return isinstance(value, int) or math.isfinite(value)
        if self is FieldKind.BOOLEAN:
            return isinstance(value, bool)
        if self is FieldKind.DATE:
            return isinstance(value, datetime)
        return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


# ---------------------------------------------------------------------------
# Required variants
# ---------------------------------------------------------------------------


class Required:
    """Whether a field must be present, given the rest of the document."""

    def applies(self, document: Mapping[str, Any]) -> bool:
        raise NotImplementedError


class _Always(Required):
    def applies(self, document: Mapping[str, Any]) -> bool:
        return True

    def __repr__(self) -> str:
        return "ALWAYS"


class _Never(Required):
    def applies(self, document: Mapping[str, Any]) -> bool:
        return False

    def __repr__(self) -> str:
        return "NEVER"


ALWAYS: Required = _Always()
NEVER: Required = _Never()


@dataclass(frozen=True)
class DependsOn(Required):
    """Required only when ``predicate`` holds for the document."""

    predicate: Predicate
    description: str = "condition"

    def applies(self, document: Mapping[str, Any]) -> bool:
        return bool(self.predicate(document))

    def __repr__(self) -> str:
        return f"DependsOn({self.description})"


def required_when(other: str, value: Any) -> DependsOn:
    """Required only while field ``other`` equals ``value``."""

    return DependsOn(lambda doc: doc.get(other) == value, f"{other} == {value!r}")


def utc_now(_document: Mapping[str, Any] | None = None) -> datetime:
    """Default factory stamping the validation time."""

    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# FieldRule
# ---------------------------------------------------------------------------

_MISSING = object()


@dataclass(frozen=True)
class FieldRule:
    """Constraints on one document field.

    ``default`` may be a plain value, a type such as ``list`` (called with no
    arguments) or a callable receiving a read-only view of the document built
    so far. Callables are evaluated on every validation.
    """

    name: str
    kind: FieldKind
    required: Required | bool = NEVER
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    allowed_values: Optional[frozenset] = None
    default: Any = _MISSING
    trim: bool = False
    lowercase: bool = False
    uppercase: bool = False

    def __post_init__(self) -> None:
        if not self.name or not isinstance(self.name, str):
            raise ValueError("field name must be a non-empty string")
        if self.name == "_id":
            raise ValueError("'_id' is assigned by the store and cannot be declared")
        if isinstance(self.required, bool):
            object.__setattr__(self, "required", ALWAYS if self.required else NEVER)
        elif not isinstance(self.required, Required):
            raise ValueError(f"{self.name}: required must be a bool or Required, got {self.required!r}")
        if self.allowed_values is not None:
            object.__setattr__(self, "allowed_values", frozenset(self.allowed_values))

        string_only = (self.min_length, self.max_length)
        if self.kind is not FieldKind.STRING and (
            any(v is not None for v in string_only) or self.trim or self.lowercase or self.uppercase
        ):
            raise ValueError(f"{self.name}: length and case options only apply to strings")
        if self.kind is not FieldKind.NUMBER and (self.min is not None or self.max is not None):
            raise ValueError(f"{self.name}: min/max only apply to numbers")
        if self.kind is not FieldKind.ARRAY_OF_STRING and (
            self.min_items is not None or self.max_items is not None
        ):
            raise ValueError(f"{self.name}: min_items/max_items only apply to arrays")
        for low, high in (
            (self.min_length, self.max_length),
            (self.min, self.max),
            (self.min_items, self.max_items),
        ):
            if low is not None and high is not None and low > high:
                raise ValueError(f"{self.name}: lower bound {low} exceeds upper bound {high}")
        if self.lowercase and self.uppercase:
            raise ValueError(f"{self.name}: lowercase and uppercase are exclusive")

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING

    def default_for(self, document: Mapping[str, Any]) -> Any:
        if isinstance(self.default, type):
            # Plain factories such as ``list`` or ``dict`` take no arguments.
            return self.default()
        if callable(self.default):
            return self.default(document)
        return copy.deepcopy(self.default)

    def normalize(self, value: Any) -> Any:
        """Apply string normalizations; arrays become lists."""

        if self.kind is FieldKind.STRING:
            if self.trim:
                value = value.strip()
            if self.lowercase:
                value = value.lower()
            elif self.uppercase:
                value = value.upper()
        elif self.kind is FieldKind.ARRAY_OF_STRING:
            value = list(value)
        return value
