from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _set_test_settings() -> None:
    os.environ["OPENAI_API_KEY"] = "test-key"
    os.environ.pop("OPENAI_MODEL", None)
    os.environ.pop("OPENAI_TIMEOUT_SECONDS", None)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
