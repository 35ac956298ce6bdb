"""Pydantic model for documents read back from the store."""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from db_core import MongoDocument

from .filters import coerce_id


class StoredDocument(BaseModel):
    """A persisted document: its store identifier plus every other field."""

    model_config = ConfigDict(frozen=True)

    id: str
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_mongo(cls, doc: MongoDocument) -> "StoredDocument":
        data = {key: value for key, value in doc.items() if key != "_id"}
        return cls(id=str(doc["_id"]), data=data)

    @property
    def object_id(self) -> ObjectId | str:
        return coerce_id(self.id)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def to_mongo(self) -> dict[str, Any]:
        return {"_id": self.object_id, **self.data}
