"""Command-line playground for the course repository.

    python -m courses create --name React.js --author Mosh --tag frontend --price 15 --published
    python -m courses find Mosh
    python -m courses update 64f0828a514ed4bd09a3e027 --author "Kyle Cook"
    python -m courses delete 64f0828a514ed4bd09a3e027
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from loguru import logger

from db_core import load_settings, setup_logging
from docstore import DocumentRepository, RepositoryError, ValidationFailed

from .models import CourseCreate
from .schema import COLLECTION_NAME, COURSE_SCHEMA
from .service import CourseService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="courses", description="Create, find, update and delete courses.")
    parser.add_argument("--log-level", default=None, help="Loguru level (default: $LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Insert a validated course")
    create.add_argument("--name", required=True)
    create.add_argument("--author")
    create.add_argument("--tag", dest="tags", action="append", default=[], help="Repeat for several tags")
    create.add_argument("--price", type=float)
    create.add_argument("--published", action="store_true")

    find = sub.add_parser("find", help="List courses whose author starts with a prefix")
    find.add_argument("author_prefix")
    find.add_argument("--ignore-case", action="store_true")

    update = sub.add_parser("update", help="Change the author of a course")
    update.add_argument("course_id")
    update.add_argument("--author", required=True)

    delete = sub.add_parser("delete", help="Delete a course and print it")
    delete.add_argument("course_id")
    return parser


async def run(args: argparse.Namespace, service: CourseService) -> int:
    if args.command == "create":
        payload = CourseCreate(
            name=args.name,
            author=args.author,
            tags=args.tags,
            is_published=args.published,
            price=args.price,
        )
        course = await service.create_course(payload)
        print(course.model_dump_json(indent=2))
    elif args.command == "find":
        for course in await service.find_courses_by_author(args.author_prefix, ignore_case=args.ignore_case):
            print(course.model_dump_json())
    elif args.command == "update":
        course = await service.update_author(args.course_id, args.author)
        print(course.model_dump_json(indent=2) if course else "null")
    elif args.command == "delete":
        course = await service.delete_course(args.course_id)
        print(course.model_dump_json(indent=2) if course else "null")
    return 0


async def _main(args: argparse.Namespace) -> int:
    settings = load_settings()
    repo = await DocumentRepository.open(settings, COURSE_SCHEMA, COLLECTION_NAME)
    try:
        return await run(args, CourseService(repo))
    finally:
        repo.collection.database.client.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return asyncio.run(_main(args))
    except ValidationFailed as exc:
        for issue in exc.errors:
            print(f"{issue.field}: {issue.message}", file=sys.stderr)
        return 2
    except RepositoryError as exc:
        logger.error("Course command failed: {error}", error=exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
