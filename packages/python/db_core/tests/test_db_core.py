import pytest
from pydantic import ValidationError

from db_core import MongoSettings, create_client, get_db, load_settings, ping


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db.example:27018")
    monkeypatch.setenv("MONGO_DB_NAME", "catalogue")
    monkeypatch.setenv("MONGO_STRICT_SCHEMA", "false")
    monkeypatch.setenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "500")

    settings = MongoSettings()

    assert settings.uri == "mongodb://db.example:27018"
    assert settings.db_name == "catalogue"
    assert settings.strict_schema is False
    assert settings.server_selection_timeout_ms == 500


def test_settings_defaults(monkeypatch):
    for name in ("MONGO_URI", "MONGO_DB_NAME", "MONGO_STRICT_SCHEMA", "MONGO_APP_NAME"):
        monkeypatch.delenv(name, raising=False)
    settings = MongoSettings()
    assert settings.uri == "mongodb://127.0.0.1:27017"
    assert settings.db_name == "playground"
    assert settings.strict_schema is True
    assert settings.app_name is None


def test_settings_reject_non_positive_timeout():
    with pytest.raises(ValidationError):
        MongoSettings(server_selection_timeout_ms=0)


def test_load_settings_prefers_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("MONGO_DB_NAME=from_dotenv\n")
    monkeypatch.delenv("MONGO_DB_NAME", raising=False)

    assert load_settings().db_name == "from_dotenv"
    assert load_settings(db_name="explicit").db_name == "explicit"
    monkeypatch.delenv("MONGO_DB_NAME", raising=False)


async def test_create_client_is_not_cached():
    settings = MongoSettings(uri="mongodb://127.0.0.1:27017", db_name="playground")
    first = create_client(settings)
    second = create_client(settings)
    try:
        assert first is not second
        assert get_db(first, settings).name == "playground"
    finally:
        first.close()
        second.close()


async def test_ping_runs_command():
    class StubDb:
        def __init__(self):
            self.commands = []

        async def command(self, name):
            self.commands.append(name)
            return {"ok": 1.0}

    db = StubDb()
    assert await ping(db) == {"ok": True}
    assert db.commands == ["ping"]
