"""
Shared fixtures.

Storage tests run against the JSON backend in a temporary directory so no
MongoDB server is needed.
"""

import pytest

from modules import storage


@pytest.fixture
def json_storage(tmp_path, monkeypatch):
    """Point the storage layer at an empty JSON file."""
    monkeypatch.setattr(storage, "PERSISTENCE_BACKEND", "json")
    monkeypatch.setattr(storage, "JSON_PATH", tmp_path / "app.json")
    storage.init_db()
    return tmp_path / "app.json"
