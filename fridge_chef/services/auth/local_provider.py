"""Local password-based authentication provider."""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Request
from sqlalchemy import or_
from sqlalchemy.orm import Session as DBSession

from fridge_chef.config import settings
from fridge_chef.models.password import Password
from fridge_chef.models.role import Role
from fridge_chef.models.session import Session
from fridge_chef.models.user import User
from fridge_chef.services.auth.base import AuthProvider

logger = logging.getLogger(__name__)


class LocalAuthProvider(AuthProvider):
    """
    Local authentication provider using password hashing and database sessions.

    Passwords are hashed with bcrypt and kept in the passwords table.
    Sessions are stored in database with secure random tokens.
    """

    def _hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def _verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

    def _generate_session_token(self) -> str:
        """Generate a cryptographically secure session token."""
        return secrets.token_urlsafe(32)

    async def authenticate(
        self, db: DBSession, username_or_email: str, password: str
    ) -> Optional[User]:
        """Authenticate user with username or email and password."""
        identifier = username_or_email.strip().lower()
        user = db.query(User).filter(
            or_(User.email == identifier, User.username == identifier)
        ).first()
        if not user or not user.password:
            return None
        if not self._verify_password(password, user.password.hash):
            return None
        return user

    async def create_user(
        self,
        db: DBSession,
        email: str,
        username: str,
        password: str,
        name: Optional[str] = None,
        roles: tuple[str, ...] = ("user",),
    ) -> User:
        """Create a new user with hashed password and the named roles."""
        user = User(
            email=email.strip().lower(),
            username=username.strip().lower(),
            name=name,
        )
        user.password = Password(hash=self._hash_password(password))
        role_rows = db.query(Role).filter(Role.name.in_(roles)).all()
        missing = set(roles) - {role.name for role in role_rows}
        if missing:
            logger.warning("Roles not seeded, skipping: %s", sorted(missing))
        user.roles = role_rows
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    async def get_user_from_request(self, db: DBSession, request: Request) -> Optional[User]:
        """Extract user from session cookie."""
        token = request.cookies.get(settings.session_cookie_name)
        if not token:
            return None

        # Find valid session
        now = datetime.now(timezone.utc)
        session = db.query(Session).filter(
            Session.token == token,
            Session.expires_at > now
        ).first()

        if not session:
            return None

        return session.user

    async def create_session(self, db: DBSession, user: User, request: Request) -> str:
        """Create a new session for the user."""
        token = self._generate_session_token()
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=settings.session_max_age)

        # Extract request metadata
        user_agent = request.headers.get("user-agent", "")[:512]
        client_ip = request.client.host if request.client else None

        session = Session(
            user_id=user.id,
            token=token,
            expires_at=expires_at,
            user_agent=user_agent,
            ip_address=client_ip
        )
        db.add(session)
        db.commit()

        return token

    async def revoke_session(self, db: DBSession, token: str) -> bool:
        """Revoke a session by its token."""
        session = db.query(Session).filter(Session.token == token).first()
        if not session:
            return False
        db.delete(session)
        db.commit()
        return True


# Singleton instance
local_auth_provider = LocalAuthProvider()
