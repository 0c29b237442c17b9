"""Pytest fixtures and configuration for user directory tests."""

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from userdirectory.auth.jwt import TokenIssuer
from userdirectory.auth.passwords import CredentialHasher
from userdirectory.config import JwtSettings
from userdirectory.database.database import Base
from userdirectory.database.memory_store import InMemoryUserStore
from userdirectory.database.user_repository import UserRepository
from userdirectory.services.auth_service import AuthService
from userdirectory.services.users_service import UsersService


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "Sup3rSecret!"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    from userdirectory.database.models import UserDB  # noqa: F401

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def dropped_users_table(db_session: Session):
    """Drop the users table out from under the session to simulate a broken database."""
    db_session.execute(text("DROP TABLE users"))
    db_session.commit()
    return db_session


@pytest.fixture
def memory_store():
    """Create an empty InMemoryUserStore."""
    return InMemoryUserStore()


@pytest.fixture
def hasher():
    """Credential hasher with the minimum bcrypt cost to keep tests fast."""
    return CredentialHasher(rounds=4)


@pytest.fixture
def jwt_settings():
    return JwtSettings(
        signing_key="test-signing-key-that-is-long-enough-for-hs256",
        issuer="userdirectory-tests",
        audience="userdirectory-clients",
    )


@pytest.fixture
def token_issuer(jwt_settings):
    return TokenIssuer(jwt_settings)


@pytest.fixture
def users_service(user_repository, hasher):
    """UsersService over the SQLite repository."""
    return UsersService(user_repository, hasher)


@pytest.fixture
def auth_service(user_repository, hasher, token_issuer):
    """AuthService over the SQLite repository."""
    return AuthService(user_repository, hasher, token_issuer)


@pytest.fixture
def test_user(users_service):
    """Create a stored test user."""
    outcome = users_service.create("Test User", "test@example.com", 30, TEST_PASSWORD)
    assert outcome.ok
    return outcome.value


@pytest.fixture
def sample_users(users_service):
    """Create 25 users named user-01..user-25 with ages 20..44."""
    created = []
    # Insert out of name order so sorting is actually exercised.
    for i in reversed(range(1, 26)):
        outcome = users_service.create(f"user-{i:02d}", f"user{i:02d}@example.com", 19 + i, TEST_PASSWORD)
        assert outcome.ok
        created.append(outcome.value)
    return created


@pytest.fixture
def app(db_session: Session, jwt_settings, hasher):
    """Application wired to the test database session."""
    from userdirectory.api.app import create_app
    from userdirectory.database.database import get_db

    app = create_app(jwt_settings=jwt_settings, hasher=hasher, init_database=False)

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def test_client(app):
    """Unauthenticated FastAPI test client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(test_user, token_issuer):
    """Bearer header for the stored test user."""
    return {"Authorization": f"Bearer {token_issuer.issue(test_user.email)}"}
