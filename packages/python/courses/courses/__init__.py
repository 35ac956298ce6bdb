"""Course catalogue stored in MongoDB."""

from .models import Course, CourseCreate
from .schema import COLLECTION_NAME, COURSE_NAMES, COURSE_SCHEMA
from .service import CourseService

__all__ = [
    "COLLECTION_NAME",
    "COURSE_NAMES",
    "COURSE_SCHEMA",
    "Course",
    "CourseCreate",
    "CourseService",
]
