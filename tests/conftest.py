"""Pytest configuration and fixtures."""

import os

# Point the application at the test database before any app module builds its engine
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from accounts_api import models  # noqa: E402, F401
from accounts_api.database import Base, get_db  # noqa: E402
from accounts_api.main import app  # noqa: E402

TEST_PASSWORD = "Secure123!"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and credentials."""

    def __init__(
        self,
        *args,
        user_id: str | None = None,
        email: str | None = None,
        password: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.password = password


connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
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


def register_user(client, name: str, email: str, password: str = TEST_PASSWORD) -> dict:
    """Register a user through the API and return the user payload."""
    response = client.post("/users", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["user"]


def login_headers(client, email: str, password: str = TEST_PASSWORD) -> AuthHeaders:
    """Log in and build Authorization headers from the returned token."""
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
        password=password,
    )


@pytest.fixture
def auth_headers(client):
    """Register an unverified user and return auth headers with user info."""
    register_user(client, "tester", "tester@example.com")
    return login_headers(client, "tester@example.com")


@pytest.fixture
def verified_auth_headers(client, auth_headers):
    """Verify the auth_headers user and return headers carrying a fresh token."""
    response = client.patch(f"/users/{auth_headers.user_id}/verify", headers=auth_headers)
    assert response.status_code == 200
    return login_headers(client, auth_headers.email)
