import json

import pytest

from courses import COURSE_SCHEMA, CourseService
from courses.cli import build_parser, run
from docstore import DocumentRepository


@pytest.fixture()
def service(fake_collection):
    return CourseService(DocumentRepository(fake_collection, COURSE_SCHEMA))


def test_parser_collects_repeated_tags():
    args = build_parser().parse_args(
        ["create", "--name", "React.js", "--tag", "angular", "--tag", "frontend", "--price", "10", "--published"]
    )
    assert args.command == "create"
    assert args.tags == ["angular", "frontend"]
    assert args.published is True
    assert args.price == 10.0


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


async def test_run_create_then_find(service, capsys):
    parser = build_parser()
    assert await run(parser.parse_args(["create", "--name", "Node.js", "--author", "Mosh", "--tag", "x"]), service) == 0
    created = json.loads(capsys.readouterr().out)
    assert created["author"] == "Mosh"

    await run(parser.parse_args(["find", "mo", "--ignore-case"]), service)
    lines = capsys.readouterr().out.strip().splitlines()
    assert [json.loads(line)["id"] for line in lines] == [created["id"]]


async def test_run_delete_missing_prints_null(service, capsys):
    await run(build_parser().parse_args(["delete", "64f08292f68ddf968a887c08"]), service)
    assert capsys.readouterr().out.strip() == "null"
