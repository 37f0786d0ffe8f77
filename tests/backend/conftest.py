import os
import sys
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from backend.app.dependencies import get_settings, get_store  # noqa: E402
from backend.app.main import create_app  # noqa: E402
from core.cache import RedisStore  # noqa: E402


@pytest.fixture
def test_app_client(fake_redis, settings) -> Iterator[TestClient]:
    app = create_app()

    app.dependency_overrides[get_store] = lambda: RedisStore(fake_redis)
    app.dependency_overrides[get_settings] = lambda: settings

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
