"""API fixtures: an app wired to a seeded in-memory store."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from nestegg.api.app import create_app
from nestegg.core.config import AppSettings, StoreConfig
from nestegg.persistence import seed_demo_user
from nestegg.persistence.memory_backend import MemoryPolicyStore


@pytest.fixture
def settings():
    return AppSettings(store=StoreConfig(backend="memory", seed_demo_user=False))


@pytest.fixture
def store():
    store = MemoryPolicyStore()
    seed_demo_user(store, "user123")
    return store


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings, store=store), raise_server_exceptions=False)
