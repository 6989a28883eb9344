"""CLI commands for Fridge Chef."""

import argparse
import getpass
import sys
from datetime import datetime, timezone

import bcrypt
from sqlalchemy.orm import Session

from fridge_chef.database import SessionLocal
from fridge_chef.models.password import Password
from fridge_chef.models.role import Permission, Role
from fridge_chef.models.user import User
from fridge_chef.models.verification import Verification

ACTIONS = ("create", "read", "update", "delete")
ENTITIES = ("user", "note", "recipe")
ACCESSES = ("own", "any")


def seed_roles(db: Session | None = None) -> tuple[Role, Role]:
    """
    Create the permission matrix plus the ``admin`` and ``user`` roles.

    Safe to run repeatedly. Admins get every ``any`` permission, users every
    ``own`` permission.
    """
    owns_session = db is None
    db = db or SessionLocal()

    try:
        existing = {p.name: p for p in db.query(Permission).all()}
        permissions = []
        for entity in ENTITIES:
            for action in ACTIONS:
                for access in ACCESSES:
                    name = f"{action}:{entity}:{access}"
                    permission = existing.get(name)
                    if permission is None:
                        permission = Permission(
                            action=action,
                            entity=entity,
                            access=access,
                            description=f"{action.title()} {access} {entity}",
                        )
                        db.add(permission)
                    permissions.append(permission)

        roles = {}
        for role_name, access in (("admin", "any"), ("user", "own")):
            role = db.query(Role).filter(Role.name == role_name).first()
            if role is None:
                role = Role(name=role_name, description=f"Grants {access} access")
                db.add(role)
            role.permissions = [p for p in permissions if p.access == access]
            roles[role_name] = role

        db.commit()
        print(f"Seeded {len(permissions)} permissions and {len(roles)} roles")
        return roles["admin"], roles["user"]

    finally:
        if owns_session:
            db.close()


def create_admin(email: str, username: str, password: str | None = None) -> None:
    """Create an admin user."""
    db: Session = SessionLocal()

    try:
        # Check if email or username already exists
        existing = (
            db.query(User)
            .filter((User.email == email.lower()) | (User.username == username.lower()))
            .first()
        )
        if existing:
            print(f"Error: User with email '{email}' or username '{username}' already exists.")
            sys.exit(1)

        # Get password if not provided
        if not password:
            password = getpass.getpass("Password: ")
            password_confirm = getpass.getpass("Confirm password: ")
            if password != password_confirm:
                print("Error: Passwords do not match.")
                sys.exit(1)

        if len(password) < 8:
            print("Error: Password must be at least 8 characters.")
            sys.exit(1)

        admin_role, user_role = seed_roles(db)

        password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt()
        ).decode("utf-8")
        user = User(email=email.lower(), username=username.lower())
        user.password = Password(hash=password_hash)
        user.roles = [admin_role, user_role]
        db.add(user)
        db.commit()

        print(f"Admin user created successfully: {email}")

    finally:
        db.close()


def purge_verifications(now: datetime | None = None) -> int:
    """Delete verification codes whose expiry has passed. Returns the count."""
    db: Session = SessionLocal()
    now = now or datetime.now(timezone.utc)

    try:
        count = (
            db.query(Verification)
            .filter(Verification.expires_at.is_not(None), Verification.expires_at < now)
            .delete(synchronize_session=False)
        )
        db.commit()
        print(f"Deleted {count} expired verifications")
        return count

    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Fridge Chef CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("seed-roles", help="Create default roles and permissions")

    # create-admin command
    create_admin_parser = subparsers.add_parser(
        "create-admin", help="Create an admin user"
    )
    create_admin_parser.add_argument(
        "--email", required=True, help="Admin email address"
    )
    create_admin_parser.add_argument(
        "--username", required=True, help="Admin username"
    )
    create_admin_parser.add_argument(
        "--password", help="Admin password (will prompt if not provided)"
    )

    subparsers.add_parser(
        "purge-verifications", help="Delete expired verification codes"
    )

    args = parser.parse_args()

    if args.command == "seed-roles":
        seed_roles()
    elif args.command == "create-admin":
        create_admin(args.email, args.username, args.password)
    elif args.command == "purge-verifications":
        purge_verifications()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
