"""Configuration helpers for MongoDB connections used by db_core.

Scripts build a ``MongoSettings`` (usually via ``load_settings``) and hand it to
``create_client`` / ``DocumentRepository.open``. Values default to the
environment, with the nearest ``.env`` file loaded first.
"""

import os

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


class MongoSettings(BaseModel):
    """Connection target and repository behaviour for one MongoDB database."""

    uri: str = Field(
        default_factory=lambda: os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017")
    )
    db_name: str = Field(default_factory=lambda: os.getenv("MONGO_DB_NAME", "playground"))
    # Reject undeclared fields instead of silently dropping them.
    strict_schema: bool = Field(
        default_factory=lambda: _env_flag("MONGO_STRICT_SCHEMA", True)
    )
    server_selection_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "2000")),
        gt=0,
    )
    app_name: str | None = Field(default_factory=lambda: os.getenv("MONGO_APP_NAME") or None)


def load_settings(**overrides) -> MongoSettings:
    """Load ``.env`` (searching from the cwd upwards) and build settings."""

    load_dotenv(find_dotenv(usecwd=True))
    settings = MongoSettings(**overrides)
    logger.info(
        "MongoSettings initialized with uri={uri} db_name={db_name} strict_schema={strict}",
        uri=settings.uri,
        db_name=settings.db_name,
        strict=settings.strict_schema,
    )
    return settings
