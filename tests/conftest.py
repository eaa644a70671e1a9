"""Root pytest configuration.

Test Structure:
    tests/
    ├── swachh_auth/           # Token and password primitives
    ├── swachh_config/         # Settings parsing
    ├── swachh_identity/       # Identity domain and services
    │   ├── unit/              # Fast, isolated tests (mocked repository)
    │   └── integration/       # Repository and lifecycle tests on SQLite
    └── swachh_api/            # HTTP endpoints through TestClient

Every test runs against explicit settings; the environment only provides
the two required secrets so that ``get_settings()`` never fails.
"""

import os

import pytest

from swachh_config import clear_settings_cache

TEST_ACCESS_SECRET = "test-access-secret-for-testing-only"  # noqa: S105
TEST_REFRESH_SECRET = "test-refresh-secret-for-testing-only"  # noqa: S105

os.environ.setdefault("JWT_ACCESS_SECRET", TEST_ACCESS_SECRET)
os.environ.setdefault("JWT_REFRESH_SECRET", TEST_REFRESH_SECRET)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Ensure settings are re-read for every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def access_secret() -> str:
    return TEST_ACCESS_SECRET


@pytest.fixture
def refresh_secret() -> str:
    return TEST_REFRESH_SECRET
