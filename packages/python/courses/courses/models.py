"""Pydantic models describing courses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from docstore import StoredDocument


class Course(BaseModel):
    """Representation of a course entry stored in MongoDB."""

    id: str
    name: str
    author: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    date: datetime
    is_published: bool = False
    price: Optional[float] = None

    @classmethod
    def from_stored(cls, doc: StoredDocument) -> "Course":
        return cls(id=doc.id, **doc.data)


class CourseCreate(BaseModel):
    """Payload for creating a course; the schema does the real validation."""

    name: str
    author: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_published: bool = False
    price: Optional[float] = None
