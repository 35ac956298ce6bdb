import re

from bson import ObjectId

from docstore import Pattern, build_query
from docstore.filters import coerce_id


def test_pattern_queries_escape_text():
    assert Pattern.prefix("Mosh").to_query() == {"$regex": "^Mosh"}
    assert Pattern.suffix("hamedani").to_query() == {"$regex": "hamedani$"}
    assert Pattern.contains("React.js", ignore_case=True).to_query() == {
        "$regex": r"React\.js",
        "$options": "i",
    }


def test_build_query_mixes_exact_values_and_patterns():
    oid = ObjectId()
    query = build_query(
        {
            "_id": str(oid),
            "author": Pattern.prefix("Mosh"),
            "name": re.compile("js$", re.IGNORECASE),
            "is_published": True,
        }
    )
    assert query == {
        "_id": oid,
        "author": {"$regex": "^Mosh"},
        "name": {"$regex": "js$", "$options": "i"},
        "is_published": True,
    }


def test_build_query_empty():
    assert build_query(None) == {}


def test_coerce_id_leaves_non_object_ids_alone():
    assert coerce_id("not-an-id") == "not-an-id"
    assert coerce_id(7) == 7
    oid = ObjectId()
    assert coerce_id(oid) is oid
