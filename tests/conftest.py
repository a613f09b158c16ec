"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src import models  # noqa: F401
from src.database import Base, build_engine, get_db
from src.main import app
from src.services.auth import AuthService
from src.services.character_service import CharacterService
from src.services.tokens import TokenService

TEST_SECRET = "test-secret"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/character_sheets", "/character_sheets_test"
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def token_service():
    """Token service with a test-only secret."""
    return TokenService(TEST_SECRET)


@pytest.fixture
def auth_service(db, token_service):
    """Auth service bound to the test session."""
    return AuthService(db, token_service)


@pytest.fixture
def character_service(db):
    """Character service bound to the test session."""
    return CharacterService(db)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _register(client, name: str, email: str, password: str) -> AuthHeaders:
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return _register(client, "Test User", "test@example.com", "testpass123")


@pytest.fixture
def other_auth_headers(client):
    """Create a second, unrelated user."""
    return _register(client, "Other User", "other@example.com", "otherpass123")


@pytest.fixture
def character_payload():
    """Full character creation body."""
    return {
        "name": "Aragorn",
        "race": "Human",
        "class": "Ranger",
        "level": 5,
        "background": "Outlander",
        "strength": 16,
        "dexterity": 14,
        "constitution": 14,
        "intelligence": 10,
        "wisdom": 13,
        "charisma": 12,
    }


@pytest.fixture
def register_user(client):
    """Register a user through the API and return its auth headers."""

    def _register_user(name: str, email: str, password: str) -> AuthHeaders:
        return _register(client, name, email, password)

    return _register_user
