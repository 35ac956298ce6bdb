"""Lightweight typing helpers shared by Mongo-backed repositories."""

from typing import Any, Mapping

MongoDocument = Mapping[str, Any]
"""A document as returned by the driver, ``_id`` included."""

MongoFilter = dict[str, Any]
"""A query document ready to hand to ``find`` / ``find_one_and_*``."""
