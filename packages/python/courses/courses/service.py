"""Course operations built on the validated document repository."""

from __future__ import annotations

from typing import Any, List, Optional

from loguru import logger

from docstore import DocumentRepository, Pattern

from .models import Course, CourseCreate


class CourseService:
    def __init__(self, repo: DocumentRepository):
        self.repo = repo

    async def create_course(self, payload: CourseCreate) -> Course:
        # Unset optional fields stay absent so conditional rules see them as missing.
        stored = await self.repo.create(payload.model_dump(exclude_none=True))
        logger.info("Created course {id} ({name})", id=stored.id, name=stored["name"])
        return Course.from_stored(stored)

    async def find_courses_by_author(self, prefix: str, *, ignore_case: bool = False) -> List[Course]:
        cursor = self.repo.find({"author": Pattern.prefix(prefix, ignore_case=ignore_case)})
        return [Course.from_stored(doc) async for doc in cursor]

    async def list_published(self, limit: Optional[int] = None) -> List[Course]:
        cursor = self.repo.find({"is_published": True}, sort=[("name", 1)], limit=limit)
        return [Course.from_stored(doc) async for doc in cursor]

    async def update_course(self, course_id: str, **changes: Any) -> Optional[Course]:
        stored = await self.repo.update_one(course_id, changes)
        if stored is None:
            logger.info("No course {id} to update", id=course_id)
            return None
        return Course.from_stored(stored)

    async def update_author(self, course_id: str, author: str) -> Optional[Course]:
        return await self.update_course(course_id, author=author)

    async def delete_course(self, course_id: str) -> Optional[Course]:
        stored = await self.repo.delete_one(course_id)
        if stored is None:
            logger.info("No course {id} to delete", id=course_id)
            return None
        return Course.from_stored(stored)
