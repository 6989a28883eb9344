"""
Unit tests for LocalAuthProvider and permission checks.

Tests authentication functionality including:
- Password hashing and verification
- Session management
- User creation with roles
- Role-based permission strings
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

from fridge_chef.config import settings
from fridge_chef.models import Session as UserSession
from fridge_chef.services.auth import (
    get_auth_provider,
    local_auth_provider,
    user_has_permission,
    user_has_role,
)
from fridge_chef.services.auth.dependencies import get_current_user, get_optional_user
from fridge_chef.services.auth.local_provider import LocalAuthProvider
from tests.factories import create_session, create_user


def create_mock_request(
    cookies: dict = None,
    user_agent: str = "pytest-test-client",
    client_ip: str = "127.0.0.1",
):
    """Create a mock FastAPI request for testing."""
    request = MagicMock()

    cookies_dict = cookies or {}
    mock_cookies = MagicMock()
    mock_cookies.get = lambda key, default=None: cookies_dict.get(key, default)
    request.cookies = mock_cookies

    mock_headers = MagicMock()
    mock_headers.get = (
        lambda key, default="": user_agent if key.lower() == "user-agent" else default
    )
    request.headers = mock_headers

    request.client = MagicMock()
    request.client.host = client_ip

    return request


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_bcrypt_hash(self):
        provider = LocalAuthProvider()

        hashed = provider._hash_password("test_password")

        assert hashed != "test_password"
        assert hashed.startswith("$2b$")

    def test_hash_password_is_salted(self):
        provider = LocalAuthProvider()

        assert provider._hash_password("same") != provider._hash_password("same")

    def test_verify_password(self):
        provider = LocalAuthProvider()
        hashed = provider._hash_password("correct_password")

        assert provider._verify_password("correct_password", hashed) is True
        assert provider._verify_password("wrong_password", hashed) is False


class TestAuthentication:
    """Tests for user authentication."""

    @pytest.mark.asyncio
    async def test_authenticate_by_email(self, db: Session):
        user = create_user(db, email="cook@example.com", password="password123")

        result = await local_auth_provider.authenticate(db, "cook@example.com", "password123")

        assert result is not None
        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_authenticate_by_username(self, db: Session):
        user = create_user(db, username="cook", password="password123")

        result = await local_auth_provider.authenticate(db, "Cook", "password123")

        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self, db: Session):
        create_user(db, email="cook@example.com", password="password123")

        result = await local_auth_provider.authenticate(db, "cook@example.com", "nope")

        assert result is None

    @pytest.mark.asyncio
    async def test_authenticate_nonexistent_user(self, db: Session):
        result = await local_auth_provider.authenticate(db, "ghost@example.com", "x")

        assert result is None

    @pytest.mark.asyncio
    async def test_authenticate_user_without_password(self, db: Session):
        """Accounts created through an external provider have no password row."""
        create_user(db, email="oauth@example.com", password=None)

        result = await local_auth_provider.authenticate(db, "oauth@example.com", "anything")

        assert result is None


class TestUserCreation:
    """Tests for user creation."""

    @pytest.mark.asyncio
    async def test_create_user_gets_user_role(self, db: Session, roles):
        user = await local_auth_provider.create_user(
            db, "New@Example.com", "NewCook", "password123", name="New Cook"
        )

        assert user.email == "new@example.com"
        assert user.username == "newcook"
        assert user.name == "New Cook"
        assert user.password.hash.startswith("$2b$")
        assert [r.name for r in user.roles] == ["user"]

    @pytest.mark.asyncio
    async def test_create_user_without_seeded_roles(self, db: Session, caplog):
        user = await local_auth_provider.create_user(
            db, "lonely@example.com", "lonely", "password123"
        )

        assert user.roles == []
        assert "Roles not seeded" in caplog.text


class TestSessionManagement:
    """Tests for session management."""

    @pytest.mark.asyncio
    async def test_create_session(self, db: Session):
        user = create_user(db)
        request = create_mock_request(user_agent="TestBrowser/1.0", client_ip="192.168.1.1")

        token = await local_auth_provider.create_session(db, user, request)

        assert len(token) >= 32
        session = db.query(UserSession).filter(UserSession.token == token).first()
        assert session.user_id == user.id
        assert session.user_agent == "TestBrowser/1.0"
        assert session.ip_address == "192.168.1.1"

    @pytest.mark.asyncio
    async def test_create_session_sets_future_expiry(self, db: Session):
        user = create_user(db)

        token = await local_auth_provider.create_session(db, user, create_mock_request())

        now = datetime.now(timezone.utc)
        assert db.query(UserSession).filter(
            UserSession.token == token, UserSession.expires_at > now
        ).count() == 1

    @pytest.mark.asyncio
    async def test_revoke_session(self, db: Session):
        user = create_user(db)
        session = create_session(db, user)

        assert await local_auth_provider.revoke_session(db, session.token) is True
        assert db.query(UserSession).filter(UserSession.token == session.token).count() == 0

    @pytest.mark.asyncio
    async def test_revoke_nonexistent_session(self, db: Session):
        assert await local_auth_provider.revoke_session(db, "nonexistent") is False


class TestGetUserFromRequest:
    """Tests for getting user from request."""

    @pytest.mark.asyncio
    async def test_valid_session(self, db: Session):
        user = create_user(db)
        session = create_session(db, user)
        request = create_mock_request(cookies={settings.session_cookie_name: session.token})

        result = await local_auth_provider.get_user_from_request(db, request)

        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_expired_session(self, db: Session):
        user = create_user(db)
        session = create_session(db, user, expires_in=timedelta(days=-1))
        request = create_mock_request(cookies={settings.session_cookie_name: session.token})

        assert await local_auth_provider.get_user_from_request(db, request) is None

    @pytest.mark.asyncio
    async def test_no_cookie(self, db: Session):
        request = create_mock_request(cookies={})

        assert await local_auth_provider.get_user_from_request(db, request) is None

    @pytest.mark.asyncio
    async def test_invalid_token(self, db: Session):
        request = create_mock_request(cookies={settings.session_cookie_name: "invalid"})

        assert await local_auth_provider.get_user_from_request(db, request) is None


class TestPermissions:
    def test_user_role_grants_own_access(self, test_user):
        assert user_has_role(test_user, "user")
        assert not user_has_role(test_user, "admin")
        assert user_has_permission(test_user, "delete:recipe:own")
        assert not user_has_permission(test_user, "delete:recipe:any")

    def test_admin_role_grants_any_access(self, admin_user):
        assert user_has_permission(admin_user, "delete:recipe:any")
        assert user_has_permission(admin_user, "read:note:any")

    def test_access_part_is_optional(self, test_user):
        assert user_has_permission(test_user, "create:recipe")

    def test_user_without_roles_has_no_permissions(self, db):
        user = create_user(db)

        assert not user_has_permission(user, "read:recipe")

    def test_unknown_entity(self, admin_user):
        assert not user_has_permission(admin_user, "read:scan:any")


def test_get_auth_provider_returns_local():
    assert get_auth_provider() is local_auth_provider


class TestDependencies:
    @pytest.mark.asyncio
    async def test_optional_user_anonymous(self, db: Session):
        assert await get_optional_user(create_mock_request(), db) is None

    @pytest.mark.asyncio
    async def test_optional_user_logged_in(self, db: Session):
        user = create_user(db)
        session = create_session(db, user)
        request = create_mock_request(cookies={settings.session_cookie_name: session.token})

        result = await get_optional_user(request, db)

        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_current_user_anonymous_raises_401(self, db: Session):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(create_mock_request(), db)

        assert exc_info.value.status_code == 401
