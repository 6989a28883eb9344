"""Abstract base class for authentication providers."""
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import Session as DBSession

from fridge_chef.models.user import User


class AuthProvider(ABC):
    """
    Abstract authentication provider interface.

    Route code depends on this interface only, so the credential mechanism
    can change without touching routes.
    """

    @abstractmethod
    async def authenticate(
        self, db: DBSession, username_or_email: str, password: str
    ) -> Optional[User]:
        """
        Authenticate user with username (or email) and password.

        Returns User if credentials are valid, None otherwise.
        """
        pass

    @abstractmethod
    async def create_user(
        self,
        db: DBSession,
        email: str,
        username: str,
        password: str,
        name: Optional[str] = None,
        roles: tuple[str, ...] = ("user",),
    ) -> User:
        """
        Create a new user with the given credentials and roles.

        Returns the created User.
        """
        pass

    @abstractmethod
    async def get_user_from_request(self, db: DBSession, request: Request) -> Optional[User]:
        """
        Extract and validate user from request.

        Returns User if authenticated, None otherwise.
        """
        pass

    @abstractmethod
    async def create_session(self, db: DBSession, user: User, request: Request) -> str:
        """
        Create a new session for the user.

        Returns the session token to be stored in cookie.
        """
        pass

    @abstractmethod
    async def revoke_session(self, db: DBSession, token: str) -> bool:
        """
        Revoke/invalidate a session by its token.

        Returns True if session was revoked, False if not found.
        """
        pass
