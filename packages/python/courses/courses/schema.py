"""Course document schema."""

from docstore import FieldKind, FieldRule, Schema, required_when, utc_now

COLLECTION_NAME = "courses"
COURSE_NAMES = ("Node.js", "Angular.js", "React.js")

COURSE_SCHEMA = Schema(
    [
        FieldRule(
            "name",
            FieldKind.STRING,
            required=True,
            min_length=5,
            max_length=255,
            allowed_values=frozenset(COURSE_NAMES),
            trim=True,
        ),
        FieldRule("author", FieldKind.STRING, trim=True),
        # A course needs at least one tag.
        FieldRule("tags", FieldKind.ARRAY_OF_STRING, min_items=1),
        FieldRule("date", FieldKind.DATE, default=utc_now),
        FieldRule("is_published", FieldKind.BOOLEAN, default=False),
        FieldRule(
            "price",
            FieldKind.NUMBER,
            required=required_when("is_published", True),
            min=10,
            max=200,
        ),
    ],
    name="course",
)
