"""Shared fixtures: an in-memory stand-in for a Motor collection."""

from __future__ import annotations

import copy
import re
from types import SimpleNamespace
from typing import Any, Mapping

import pytest
from bson import ObjectId
from pymongo import ReturnDocument


def _matches(doc: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    for field, condition in query.items():
        value = doc.get(field)
        if isinstance(condition, dict) and "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, keys):
        for field, direction in reversed(list(keys)):
            self._docs.sort(key=lambda d: d.get(field), reverse=direction < 0)
        return self

    def limit(self, n: int):
        self._docs = self._docs[:n]
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc


class FakeCollection:
    """Implements the Motor collection calls the repository makes.

    Insertion order is the natural order. Set ``fail_with`` to make every call
    raise that exception instead.
    """

    def __init__(self, name: str = "items") -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.calls: list[str] = []
        self.fail_with: BaseException | None = None

    def _enter(self, op: str) -> None:
        self.calls.append(op)
        if self.fail_with is not None:
            raise self.fail_with

    def _first(self, query):
        return next((d for d in self.docs if _matches(d, query)), None)

    async def insert_one(self, doc: dict[str, Any]):
        self._enter("insert_one")
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query=None):
        self._enter("find")
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query=None):
        self._enter("find_one")
        doc = self._first(query or {})
        return copy.deepcopy(doc) if doc else None

    async def count_documents(self, query):
        self._enter("count_documents")
        return sum(1 for d in self.docs if _matches(d, query))

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._enter("find_one_and_update")
        doc = self._first(query)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        doc.update(copy.deepcopy(update["$set"]))
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query):
        self._enter("find_one_and_delete")
        doc = self._first(query)
        if doc is None:
            return None
        self.docs.remove(doc)
        return doc


@pytest.fixture()
def fake_collection() -> FakeCollection:
    return FakeCollection("courses")
