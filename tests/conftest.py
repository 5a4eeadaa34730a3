"""Pytest fixtures and configuration for tasktrack tests."""

import os

# Keep the app's module-level engine off the filesystem.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime, timedelta
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from tasktrack.auth.google_oauth import GoogleIdentityVerifier, IdentityClaim
from tasktrack.auth.jwt import SessionTokenService
from tasktrack.database.database import Base
from tasktrack.database.repository import TaskRepository, QTaskRepository
from tasktrack.database.user_repository import UserRepository


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_JWT_SECRET = "test-jwt-secret-key-with-enough-length-0123456789"


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def other_user_id():
    """A second user who must never see the first user's records."""
    return "other-user-456"


@pytest.fixture(scope="function")
def db_session(test_user_id, other_user_id):
    """Create a database session for testing.
    
    Uses an in-memory SQLite database that is created fresh for each test,
    with two users already present.
    """
    from sqlalchemy import event
    from tasktrack.database.database import enable_sqlite_foreign_keys
    from tasktrack.database.models import UserDB
    
    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    
    Base.metadata.create_all(bind=engine)
    
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    
    now = datetime.utcnow()
    session.add_all([
        UserDB(
            id=test_user_id,
            email="test@example.com",
            name="Test User",
            picture=None,
            created_at=now,
            updated_at=now,
        ),
        UserDB(
            id=other_user_id,
            email="other@example.com",
            name="Other User",
            picture=None,
            created_at=now,
            updated_at=now,
        ),
    ])
    session.commit()
    
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def qtask_repository(db_session: Session):
    """Create a QTaskRepository instance for testing."""
    return QTaskRepository(db_session)


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def session_tokens():
    """Session token service with a fixed test secret."""
    return SessionTokenService(TEST_JWT_SECRET, expires_in=timedelta(hours=24))


@pytest.fixture
def auth_headers(session_tokens, test_user_id):
    """Authorization header for the test user."""
    return {"Authorization": f"Bearer {session_tokens.issue(test_user_id)}"}


@pytest.fixture
def other_auth_headers(session_tokens, other_user_id):
    """Authorization header for the other user."""
    return {"Authorization": f"Bearer {session_tokens.issue(other_user_id)}"}


@pytest.fixture
def identity_claim():
    """Identity a successful Google verification yields."""
    return IdentityClaim(email="a@x.com", name="A", picture="https://example.com/a.png")


@pytest.fixture
def identity_verifier(identity_claim):
    """Stand-in for Google verification (no network)."""
    verifier = MagicMock(spec=GoogleIdentityVerifier)
    verifier.verify.return_value = identity_claim
    return verifier


@pytest.fixture
def test_client(db_session: Session, session_tokens, identity_verifier):
    """Create a FastAPI test client with overridden database, token and identity dependencies."""
    from tasktrack.api.app import app
    from tasktrack.database.database import get_db
    from tasktrack.auth.jwt import get_session_tokens
    from tasktrack.auth.google_oauth import get_identity_verifier
    
    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it
    
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_tokens] = lambda: session_tokens
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    
    with TestClient(app) as client:
        yield client
    
    # Clean up dependency overrides
    app.dependency_overrides.clear()
