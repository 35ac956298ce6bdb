"""Query filters: exact values and string pattern matchers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from bson import ObjectId
from bson.errors import InvalidId

from db_core import MongoFilter


class MatchMode(str, Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Pattern:
    """Match string fields by prefix, suffix or substring.

    The text is matched literally; regex metacharacters are escaped.
    """

    text: str
    mode: MatchMode = MatchMode.CONTAINS
    ignore_case: bool = False

    @classmethod
    def prefix(cls, text: str, *, ignore_case: bool = False) -> "Pattern":
        return cls(text, MatchMode.PREFIX, ignore_case)

    @classmethod
    def suffix(cls, text: str, *, ignore_case: bool = False) -> "Pattern":
        return cls(text, MatchMode.SUFFIX, ignore_case)

    @classmethod
    def contains(cls, text: str, *, ignore_case: bool = False) -> "Pattern":
        return cls(text, MatchMode.CONTAINS, ignore_case)

    @property
    def regex(self) -> str:
        escaped = re.escape(self.text)
        if self.mode is MatchMode.PREFIX:
            return f"^{escaped}"
        if self.mode is MatchMode.SUFFIX:
            return f"{escaped}$"
        return escaped

    def to_query(self) -> dict[str, str]:
        query = {"$regex": self.regex}
        if self.ignore_case:
            query["$options"] = "i"
        return query


def coerce_id(identifier: Any) -> Any:
    """Turn a 24-hex string into an ObjectId; leave anything else untouched."""

    if isinstance(identifier, str):
        try:
            return ObjectId(identifier)
        except (InvalidId, TypeError):
            return identifier
    return identifier


def build_query(filter: Mapping[str, Any] | None) -> MongoFilter:
    """Translate a repository filter into a MongoDB query document."""

    query: MongoFilter = {}
    for field, condition in (filter or {}).items():
        if isinstance(condition, Pattern):
            query[field] = condition.to_query()
        elif isinstance(condition, re.Pattern):
            query[field] = {"$regex": condition.pattern}
            if condition.flags & re.IGNORECASE:
                query[field]["$options"] = "i"
        elif field == "_id":
            query[field] = coerce_id(condition)
        else:
            query[field] = condition
    return query
