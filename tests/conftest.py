"""
Pytest configuration and shared fixtures.

- Test database: a throw-away SQLite file (aiosqlite driver), configured
  through environment variables BEFORE the application is imported
- Tables are dropped before every test and recreated by the app's startup hook
- Helpers to register users of each role and build bearer headers
"""

import os
import tempfile
from typing import Callable, Generator

import pytest

# =============================================================================
# CONFIGURE THE APP BEFORE ANY IMPORTS
# =============================================================================
_DB_DIR = tempfile.mkdtemp(prefix="medvault-tests-")
_DB_PATH = os.path.join(_DB_DIR, "test.db")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["DB_MANAGE"] = "create_all"
os.environ["ENV"] = "dev"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum, keeps the suite fast

from fastapi.testclient import TestClient
from sqlalchemy import create_engine

import app.models  # noqa: F401  registers every table
from app.core.base import Base
from app.main import app as fastapi_app


# =============================================================================
# DATABASE / CLIENT FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def clean_db():
    """Drop every table so the startup hook recreates an empty schema."""
    engine = create_engine(f"sqlite:///{_DB_PATH}")
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    yield


@pytest.fixture(scope="function")
def client(clean_db) -> Generator[TestClient, None, None]:
    with TestClient(fastapi_app) as test_client:
        yield test_client


# =============================================================================
# USER FIXTURES
# =============================================================================

def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[[str], dict]:
    return auth


@pytest.fixture
def register(client) -> Callable[..., dict]:
    """Register a user and return the response body ({"user", "token"})."""
    def _register(email: str, role: str, password: str = "secret123", **extra) -> dict:
        body = {
            "email": email,
            "password": password,
            "role": role,
            "first_name": extra.pop("first_name", email.split("@")[0].title()),
            "last_name": extra.pop("last_name", "Tester"),
            **extra,
        }
        if role == "healthcare_provider":
            body.setdefault("facility_name", "Central Clinic")
        resp = client.post("/api/auth/register", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _register


@pytest.fixture
def provider(register) -> dict:
    return register("nurse@example.com", "healthcare_provider")


@pytest.fixture
def alice(register) -> dict:
    return register("alice@example.com", "parent")


@pytest.fixture
def bob(register) -> dict:
    return register("bob@example.com", "parent")


@pytest.fixture
def ncd_user(register) -> dict:
    return register("uma@example.com", "ncd_patient", first_name="Uma", last_name="Okafor")


@pytest.fixture
def baby_payload() -> dict:
    return {"first_name": "Jo", "last_name": "Smith", "date_of_birth": "2024-01-01", "gender": "female"}


@pytest.fixture
def ncd_payload() -> dict:
    return {
        "date_of_birth": "1970-05-20",
        "gender": "female",
        "emergency_contact": {"name": "Ken", "relationship": "spouse", "phone_number": "555-0100"},
        "medical_history": {
            "ncd_types": ["diabetes"],
            "diagnosis_date": "2015-03-01",
            "medications": ["metformin"],
        },
    }
