"""
Database models for Fridge Chef.

Import all models here so metadata.create_all() sees every table.
"""

from fridge_chef.database import Base
from fridge_chef.models.role import Role, Permission, role_permissions, user_roles
from fridge_chef.models.user import User
from fridge_chef.models.password import Password
from fridge_chef.models.session import Session
from fridge_chef.models.connection import Connection
from fridge_chef.models.verification import Verification
from fridge_chef.models.note import Note
from fridge_chef.models.image import UserImage, NoteImage, RecipeImage, ScanImage
from fridge_chef.models.scan import Scan
from fridge_chef.models.recipe import Recipe, Difficulty
from fridge_chef.models.recipe_ingredient import RecipeIngredient
from fridge_chef.models.favorite import Favorite

__all__ = [
    "Base",
    "Role",
    "Permission",
    "role_permissions",
    "user_roles",
    "User",
    "Password",
    "Session",
    "Connection",
    "Verification",
    "Note",
    "UserImage",
    "NoteImage",
    "RecipeImage",
    "ScanImage",
    "Scan",
    "Recipe",
    "Difficulty",
    "RecipeIngredient",
    "Favorite",
]
