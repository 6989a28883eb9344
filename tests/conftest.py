"""
Test configuration and fixtures for Fridge Chef.

- Fresh database per test (in-memory SQLite unless TEST_DATABASE_URL is set)
- TestClient with database and pipeline dependency overrides
- Authenticated client fixtures
- Mock Claude service and mocked Anthropic client
"""

import os
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fridge_chef.api.resources import get_recipe_pipeline
from fridge_chef.database import Base, build_engine, get_db
from fridge_chef.main import app
from fridge_chef.models import User, Session as UserSession
from fridge_chef.services.ai_service import ClaudeService
from fridge_chef.services.pipeline import RecipePipeline
from tests.factories import create_session, create_user, seed_roles
from tests.fixtures.mocks import MockClaudeService


# =============================================================================
# Database Fixtures
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Priority:
    1. TEST_DATABASE_URL environment variable
    2. In-memory SQLite
    """
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture
def test_engine():
    """
    Create a database engine with all tables for one test.

    In-memory SQLite needs a StaticPool so every session (including the
    TestClient's worker thread) shares the same connection.
    """
    database_url = get_test_database_url()
    if database_url.startswith("sqlite"):
        engine = build_engine(database_url, poolclass=StaticPool)
    else:
        engine = build_engine(database_url)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """Provide a database session bound to the per-test engine."""
    TestingSessionLocal = sessionmaker(bind=test_engine)
    session = TestingSessionLocal()

    yield session

    session.rollback()
    session.close()


# =============================================================================
# AI Fixtures
# =============================================================================


@pytest.fixture
def mock_claude_service() -> MockClaudeService:
    """Configurable stand-in for ClaudeService."""
    return MockClaudeService()


@pytest.fixture
def mock_anthropic_client() -> MagicMock:
    """Bare MagicMock in place of anthropic.Anthropic."""
    return MagicMock()


@pytest.fixture
def claude_service(mock_anthropic_client) -> ClaudeService:
    """Real ClaudeService wired to a mocked Anthropic client."""
    return ClaudeService(client=mock_anthropic_client)


# =============================================================================
# TestClient Fixtures
# =============================================================================


def _make_client(db: Session, mock_claude_service: MockClaudeService) -> TestClient:
    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_recipe_pipeline] = lambda: RecipePipeline(
        mock_claude_service
    )

    test_client = TestClient(app)
    # Set default Referer so CSRF Origin middleware allows requests
    test_client.headers["referer"] = "http://testserver/"
    return test_client


@pytest.fixture
def client(
    db: Session, mock_claude_service: MockClaudeService
) -> Generator[TestClient, None, None]:
    """Unauthenticated TestClient with database and pipeline overrides."""
    with _make_client(db, mock_claude_service) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


@pytest.fixture
def roles(db: Session):
    """Seeded (admin_role, user_role)."""
    return seed_roles(db)


@pytest.fixture
def test_user(db: Session, roles) -> User:
    """Create a regular user with the ``user`` role."""
    return create_user(
        db,
        email="testuser@example.com",
        username="testuser",
        password="testpassword123",
        roles=[roles[1]],
    )


@pytest.fixture
def admin_user(db: Session, roles) -> User:
    """Create an admin with both roles."""
    return create_user(
        db,
        email="admin@example.com",
        username="admin",
        password="adminpassword123",
        roles=list(roles),
    )


def _create_session(db: Session, user: User) -> UserSession:
    session = create_session(db, user)
    db.commit()
    return session


@pytest.fixture
def test_session(db: Session, test_user: User) -> UserSession:
    """Create a login session for the test user."""
    return _create_session(db, test_user)


@pytest.fixture
def auth_client(
    db: Session, test_session: UserSession, mock_claude_service: MockClaudeService
) -> Generator[TestClient, None, None]:
    """Authenticated TestClient for the regular test user."""
    from fridge_chef.config import settings

    with _make_client(db, mock_claude_service) as test_client:
        test_client.cookies.set(settings.session_cookie_name, test_session.token)
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(
    db: Session, admin_user: User, mock_claude_service: MockClaudeService
) -> Generator[TestClient, None, None]:
    """Authenticated TestClient for the admin user."""
    from fridge_chef.config import settings

    session = _create_session(db, admin_user)
    with _make_client(db, mock_claude_service) as test_client:
        test_client.cookies.set(settings.session_cookie_name, session.token)
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m not slow')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
