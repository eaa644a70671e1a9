"""Pytest fixtures for API tests.

Every test gets its own application on a throwaway SQLite file; the
client is entered as a context manager so the lifespan creates the schema.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from swachh_api.app import API_V1_PREFIX, create_app
from swachh_config import Settings

TEST_PASSWORD = "Abc123!@#"  # noqa: S105


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path, access_secret, refresh_secret) -> Settings:
    """Test API settings with cheap bcrypt and a file-backed SQLite store."""
    return Settings(
        jwt_access_secret=SecretStr(access_secret),
        jwt_refresh_secret=SecretStr(refresh_secret),
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path}/test.db",
        bcrypt_rounds=4,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
    )


@pytest.fixture
def test_client(api_settings):
    """Create a test client with the lifespan running."""
    app = create_app(settings=api_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def citizen_payload() -> dict:
    return {
        "email": "alice@example.com",
        "password": TEST_PASSWORD,
        "firstName": "Alice",
        "lastName": "Sharma",
        "phoneNumber": "+91 98765 43210",
        "address": {"city": "Pune", "state": "Maharashtra", "pincode": "411001"},
    }


@pytest.fixture
def employee_payload() -> dict:
    return {
        "email": "carl@example.com",
        "password": TEST_PASSWORD,
        "firstName": "Carl",
        "lastName": "Dsouza",
        "employeeType": "waste_collector",
        "employeeId": "WC-001",
        "department": "Sanitation",
    }


@pytest.fixture
def register(test_client, api_v1_prefix):
    """Register a user and return ``(response, bearer headers)``.

    The cookie jar is cleared afterwards so that every later request is
    authenticated only by what the test passes explicitly.
    """

    def _register(kind: str, payload: dict):
        response = test_client.post(
            f"{api_v1_prefix}/auth/{kind}/register",
            json=payload,
        )
        assert response.status_code == 201, response.text
        test_client.cookies.clear()
        token = response.json()["data"]["accessToken"]
        return response, {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def admin_headers(register) -> dict:
    """Bearer headers of a freshly registered admin employee."""
    _, headers = register(
        "employees",
        {
            "email": "ada@example.com",
            "password": TEST_PASSWORD,
            "firstName": "Ada",
            "lastName": "Kulkarni",
            "employeeType": "admin",
            "employeeId": "ADM-001",
            "department": "Administration",
        },
    )
    return headers
