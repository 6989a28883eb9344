"""
Authentication service package.

Provides pluggable authentication. Only local password-based auth exists
today; OAuth providers would link accounts through the Connection model.

Usage:
    from fridge_chef.services.auth import get_auth_provider
    from fridge_chef.services.auth.dependencies import get_current_user

    # In routes:
    @router.get("/protected")
    async def protected_route(user: User = Depends(get_current_user)):
        ...
"""
from fridge_chef.services.auth.base import AuthProvider
from fridge_chef.services.auth.local_provider import local_auth_provider
from fridge_chef.services.auth.permissions import user_has_permission, user_has_role


def get_auth_provider() -> AuthProvider:
    """Factory function to get the configured auth provider."""
    return local_auth_provider


__all__ = [
    "AuthProvider",
    "get_auth_provider",
    "local_auth_provider",
    "user_has_permission",
    "user_has_role",
]
