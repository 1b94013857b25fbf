"""
Tests for status and meta routes.
"""

import json

import pytest
from fastapi.testclient import TestClient

from lector import __version__
from lector.config import config, state
from lector.database import (
    REGISTRY,
    ConnectionFailure,
    DatabaseConnection,
    MigrationRunner,
    Store,
)
from lector.legacy import MIGRATED_KEY
from lector.server import app


class TestStatus:
    def test_status(self, client):
        response = client.get("/status")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "version": __version__,
            "schema_version": REGISTRY.latest_version,
        }

    def test_status_reports_marker_from_file(self, temp_db_path, monkeypatch):
        """An unmigrated file reports version 0, not the newest known version."""
        monkeypatch.setattr(state, "store", Store(DatabaseConnection(temp_db_path)))

        with TestClient(app) as client:
            response = client.get("/status")
        assert response.status_code == 200
        assert response.json()["schema_version"] == 0


class TestMeta:
    def test_set_and_get(self, client):
        response = client.put("/meta/lastSync", json={"value": "42"})
        assert response.status_code == 200
        assert response.json() == {"key": "lastSync", "value": "42"}

        response = client.get("/meta/lastSync")
        assert response.json() == {"key": "lastSync", "value": "42"}

    def test_overwrite(self, client):
        client.put("/meta/lastSync", json={"value": "42"})
        client.put("/meta/lastSync", json={"value": "43"})
        assert client.get("/meta").json() == {"lastSync": "43"}

    def test_missing_key(self, client):
        response = client.get("/meta/nope")
        assert response.status_code == 404


class TestStartup:
    """The app opens and migrates the store before serving."""

    def test_startup_migrates_store(self, temp_db_path, monkeypatch):
        monkeypatch.setattr(config, "DB_PATH", temp_db_path)
        monkeypatch.setattr(config, "LEGACY_EXPORT_PATH", None)
        monkeypatch.setattr(state, "store", None)

        with TestClient(app) as client:
            assert state.store is not None
            assert client.get("/feeds").json() == []
            runner = MigrationRunner()
            assert runner.current_version(DatabaseConnection(temp_db_path)) == REGISTRY.latest_version

    def test_startup_imports_legacy_export(self, temp_db_path, tmp_path, monkeypatch):
        export = tmp_path / "legacy.json"
        export.write_text(json.dumps({
            "rss-feeds": [{"url": "https://a.example/rss", "name": "A"}],
        }))
        monkeypatch.setattr(config, "DB_PATH", temp_db_path)
        monkeypatch.setattr(config, "LEGACY_EXPORT_PATH", export)
        monkeypatch.setattr(state, "store", None)

        with TestClient(app) as client:
            assert [f["url"] for f in client.get("/feeds").json()] == ["https://a.example/rss"]

    def test_startup_survives_bad_legacy_export(self, temp_db_path, tmp_path, monkeypatch):
        export = tmp_path / "legacy.json"
        export.write_text("{not json")
        monkeypatch.setattr(config, "DB_PATH", temp_db_path)
        monkeypatch.setattr(config, "LEGACY_EXPORT_PATH", export)
        monkeypatch.setattr(state, "store", None)

        with TestClient(app) as client:
            assert client.get("/status").status_code == 200
            assert client.get("/feeds").json() == []
            assert state.store.get_meta(MIGRATED_KEY) is None

    def test_startup_aborts_on_bad_database(self, tmp_path, monkeypatch):
        bad = tmp_path / "bad.db"
        bad.write_bytes(b"not a database" * 200)
        monkeypatch.setattr(config, "DB_PATH", bad)
        monkeypatch.setattr(config, "LEGACY_EXPORT_PATH", None)
        monkeypatch.setattr(state, "store", None)

        with pytest.raises(ConnectionFailure):
            with TestClient(app):
                pass
        assert state.store is None
