"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from sample_app.database import Base, get_db, make_engine  # noqa: E402
from sample_app.main import app  # noqa: E402
from sample_app.services.users import create_user  # noqa: E402

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/sample_app", "/sample_app_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = make_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

USER_ATTRS = {
    "name": "Example User",
    "email": "user@example.com",
    "password": "foobar",
    "password_confirmation": "foobar",
}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
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


@pytest.fixture
def attrs():
    """Valid attributes for a new user."""
    return dict(USER_ATTRS)


@pytest.fixture
def user(db, attrs):
    """A persisted user created from the default attributes."""
    return create_user(db, **attrs)


@pytest.fixture
def signed_in_client(client, user, attrs):
    """A client holding a remember token for ``user``."""
    response = client.post(
        "/sessions",
        json={"email": attrs["email"], "password": attrs["password"]},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client
