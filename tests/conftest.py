from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the docshop package is importable when running tests locally
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from docshop.core import config as core_config  # noqa: E402
from docshop.core.rate_limiter import reset_limits  # noqa: E402
from docshop.repositories import json_storage  # noqa: E402
from docshop.repositories.json_storage import JsonStore  # noqa: E402

ADMIN_PASSWORD = "admin-secret-pw"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point settings at tmp_path and reset cached settings/stores/limits."""
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "data" / "db.json"))
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    core_config.get_settings.cache_clear()
    json_storage.get_store.cache_clear()
    reset_limits()
    yield
    core_config.get_settings.cache_clear()
    json_storage.get_store.cache_clear()
    reset_limits()


@pytest.fixture()
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture()
def store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "data" / "db.json")


@pytest.fixture()
def client(store, tmp_path):
    from fastapi.testclient import TestClient

    from docshop.app import create_app

    app = create_app(store=store, uploads_dir=tmp_path / "uploads")
    with TestClient(app) as test_client:
        yield test_client
