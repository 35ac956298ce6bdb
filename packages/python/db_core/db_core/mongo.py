"""Async MongoDB helpers built on top of Motor.

Only generic utilities live here; domain repositories receive the client or
collection explicitly and build their own schemas and error handling on top.
"""

from typing import Any

from loguru import logger
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorDatabase,
)

from .settings import MongoSettings


def create_client(settings: MongoSettings) -> AsyncIOMotorClient:
    """Return a new Motor client for ``settings.uri``.

    Motor connects lazily, so this never touches the network; call ``ping`` to
    find out whether the server is reachable.
    """

    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": settings.server_selection_timeout_ms,
        # Dates come back timezone-aware, matching what the validator stamps.
        "tz_aware": True,
    }
    if settings.app_name:
        options["appname"] = settings.app_name
    logger.info("Creating Motor client for {uri}", uri=settings.uri)
    return AsyncIOMotorClient(settings.uri, **options)


def get_db(client: AsyncIOMotorClient, settings: MongoSettings) -> AsyncIOMotorDatabase:
    """Return the database named by ``settings.db_name``."""

    return client[settings.db_name]


async def ping(db: AsyncIOMotorDatabase) -> dict[str, Any]:
    """Run a simple ``ping`` command against the server behind ``db``."""

    await db.command("ping")
    return {"ok": True}
