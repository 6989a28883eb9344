from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from fridge_chef.database import Base
from fridge_chef.models.role import user_roles


class User(Base):
    """User account: owns notes, recipes, scans and favorites."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    username = Column(String(64), unique=True, nullable=False)
    name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    image = relationship(
        "UserImage", back_populates="user", cascade="all, delete-orphan", uselist=False
    )
    password = relationship(
        "Password", back_populates="user", cascade="all, delete-orphan", uselist=False
    )
    notes = relationship("Note", back_populates="owner", cascade="all, delete-orphan")
    recipes = relationship(
        "Recipe", back_populates="user", cascade="all, delete-orphan"
    )
    scans = relationship("Scan", back_populates="user", cascade="all, delete-orphan")
    favorites = relationship(
        "Favorite", back_populates="user", cascade="all, delete-orphan"
    )
    sessions = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan"
    )
    connections = relationship(
        "Connection", back_populates="user", cascade="all, delete-orphan"
    )
    roles = relationship("Role", secondary=user_roles, back_populates="users")
