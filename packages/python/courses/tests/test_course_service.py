import pytest
from bson import ObjectId

from courses import COURSE_SCHEMA, CourseCreate, CourseService
from docstore import Constraint, DocumentRepository, ValidationFailed


@pytest.fixture()
def service(fake_collection):
    return CourseService(DocumentRepository(fake_collection, COURSE_SCHEMA))


async def test_create_published_course(service):
    course = await service.create_course(
        CourseCreate(name="React.js", author="Mosh", tags=["angular", "frontend"], is_published=True, price=10)
    )
    assert ObjectId.is_valid(course.id)
    assert course.name == "React.js"
    assert course.price == 10
    assert course.date.tzinfo is not None


async def test_published_course_needs_price(service, fake_collection):
    with pytest.raises(ValidationFailed) as excinfo:
        await service.create_course(CourseCreate(name="Node.js", tags=["backend"], is_published=True))
    assert [(i.field, i.constraint) for i in excinfo.value.errors] == [("price", Constraint.REQUIRED)]
    assert fake_collection.docs == []


async def test_course_needs_a_tag(service):
    with pytest.raises(ValidationFailed) as excinfo:
        await service.create_course(CourseCreate(name="Node.js", tags=[]))
    assert excinfo.value.fields() == {"tags"}


async def test_find_update_delete_flow(service):
    mosh = await service.create_course(CourseCreate(name="Node.js", author="Mosh", tags=["backend"]))
    await service.create_course(CourseCreate(name="Angular.js", author="Moshfegh", tags=["frontend"]))
    await service.create_course(CourseCreate(name="React.js", author="Kyle", tags=["frontend"]))

    found = await service.find_courses_by_author("Mosh")
    assert [c.author for c in found] == ["Mosh", "Moshfegh"]

    updated = await service.update_author(mosh.id, "Kyle Cook")
    assert updated.author == "Kyle Cook"
    assert updated.tags == ["backend"]

    deleted = await service.delete_course(mosh.id)
    assert deleted.id == mosh.id
    assert await service.delete_course(mosh.id) is None
    assert await service.update_author(mosh.id, "Mosh") is None


async def test_list_published_sorted_by_name(service):
    await service.create_course(CourseCreate(name="React.js", tags=["a"], is_published=True, price=20))
    await service.create_course(CourseCreate(name="Node.js", tags=["a"]))
    await service.create_course(CourseCreate(name="Angular.js", tags=["a"], is_published=True, price=15))
    assert [c.name for c in await service.list_published()] == ["Angular.js", "React.js"]
