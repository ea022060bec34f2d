# FILE: tests/conftest.py

import os
import sys
import tempfile
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Point settings at a throwaway data dir before anything imports voyage
_data_dir = tempfile.mkdtemp(prefix="voyage-tests-")
os.environ["DATA_DIR"] = _data_dir
os.environ["MEMORY_DIR"] = os.path.join(_data_dir, "memories")
os.environ["AUTH_SECRET"] = "test-secret"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["MONTH_FILTER_MODE"] = "any_year"

import pytest
from fastapi.testclient import TestClient

from voyage.auth import issue_token
from voyage.config import get_settings
from voyage.services.memory_store import MemoryStore, get_memory_store


@pytest.fixture(scope="session")
def settings():
    """Provide settings for tests"""
    return get_settings()


@pytest.fixture
def store(tmp_path):
    """Fresh store per test"""
    return MemoryStore(str(tmp_path / "memories"))


@pytest.fixture
def app(store):
    """App wired to the per-test store"""
    from voyage.app import create_app

    application = create_app()
    application.dependency_overrides[get_memory_store] = lambda: store
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    """Build Authorization headers for an owner id"""
    def _headers(owner_id: str = "alice"):
        return {"Authorization": f"Bearer {issue_token(owner_id)}"}
    return _headers


@pytest.fixture
def sample_memory():
    """Sample memory payload as sent by the mobile client"""
    return {
        "title": "Paris Trip",
        "description": "Eiffel Tower visit",
        "placeName": "Paris",
        "locationLink": "https://maps.google.com/?q=Paris",
        "fromDate": "2025-03-01",
        "toDate": "2025-03-05",
        "photo": "aGVsbG8gd29ybGQ="
    }
