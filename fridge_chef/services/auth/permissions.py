"""Role and permission checks."""
from fridge_chef.models.user import User


def user_has_role(user: User, role_name: str) -> bool:
    return any(role.name == role_name for role in user.roles)


def user_has_permission(user: User, permission: str) -> bool:
    """
    Check a permission string of the form ``action:entity`` or
    ``action:entity:access``.

    Without an access part, either ``own`` or ``any`` satisfies the check.
    """
    action, entity, *rest = permission.split(":")
    accesses = {rest[0]} if rest else {"own", "any"}
    return any(
        p.action == action and p.entity == entity and p.access in accesses
        for role in user.roles
        for p in role.permissions
    )
