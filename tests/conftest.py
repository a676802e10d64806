"""Pytest fixtures for API and service tests."""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

_DB_DIR = Path(tempfile.mkdtemp(prefix="push-installations-"))
_DB_PATH = _DB_DIR / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"

import pytest
from fastapi.testclient import TestClient

from push_installations.main import create_app


def _remove_database() -> None:
    for suffix in ("", "-wal", "-shm"):
        Path(f"{_DB_PATH}{suffix}").unlink(missing_ok=True)


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    _remove_database()
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    _remove_database()


@pytest.fixture()
def register(client: TestClient):
    """Create an installation through the API and return its JSON."""

    def _register(**fields):
        payload = {
            "appId": "com.example.news",
            "deviceToken": "a1b2c3d4e5f60718293a4b5c6d7e8f90",
            "deviceType": "ios",
        }
        payload.update(fields)
        response = client.post("/api/installations", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


class FakeStore:
    """Records filters passed to ``find`` and replays a canned outcome."""

    def __init__(self, result=None, error: Exception | None = None):
        self.result = result if result is not None else []
        self.error = error
        self.calls: list[dict] = []

    async def find(self, filter_: dict):
        self.calls.append(filter_)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore()
