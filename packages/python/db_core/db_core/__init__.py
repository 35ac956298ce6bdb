"""Minimal MongoDB helpers shared across domain repositories.

Example usage in a domain repository:

    from db_core import create_client, get_db, load_settings

    settings = load_settings()
    client = create_client(settings)

    async def list_items():
        cursor = get_db(client, settings)["courses"].find({"author": "Mosh"})
        return await cursor.to_list(length=100)
"""

from .log import setup_logging
from .mongo import create_client, get_db, ping
from .settings import MongoSettings, load_settings
from .typing import MongoDocument, MongoFilter

__all__ = [
    "MongoSettings",
    "load_settings",
    "create_client",
    "get_db",
    "ping",
    "setup_logging",
    "MongoDocument",
    "MongoFilter",
]
