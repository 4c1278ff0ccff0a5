"""Pytest configuration shared across the suite."""
from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.config import load_settings
from app.domain.store import TokenStore
from app.main import create_app
from app.service.token_service import get_token_store

# 2024-01-01T00:00:00Z
T0_MS = 1_704_067_200_000


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def store() -> TokenStore:
    return TokenStore()


@pytest.fixture
def client(store: TokenStore) -> Iterator[TestClient]:
    """A TestClient whose routes share the `store` fixture."""
    app = create_app()
    app.dependency_overrides[get_token_store] = lambda: store
    with TestClient(app) as c:
        yield c
