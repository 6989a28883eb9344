"""
Image blob tables.

Images are stored in the database as raw bytes alongside their content type.
Each table hangs off exactly one parent and is removed with it.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    LargeBinary,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from fridge_chef.database import Base


class ImageMixin:
    id = Column(Integer, primary_key=True)
    alt_text = Column(String(255), nullable=True)
    content_type = Column(String(64), nullable=False)
    blob = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class UserImage(ImageMixin, Base):
    """Profile picture, one per user."""

    __tablename__ = "user_images"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    user = relationship("User", back_populates="image")


class NoteImage(ImageMixin, Base):
    __tablename__ = "note_images"

    note_id = Column(
        Integer, ForeignKey("notes.id", ondelete="CASCADE"), nullable=False, index=True
    )

    note = relationship("Note", back_populates="images")


class RecipeImage(ImageMixin, Base):
    """Cover picture, one per recipe."""

    __tablename__ = "recipe_images"

    recipe_id = Column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    recipe = relationship("Recipe", back_populates="image")


class ScanImage(ImageMixin, Base):
    """Photo captured during a scan."""

    __tablename__ = "scan_images"

    scan_id = Column(
        Integer, ForeignKey("scans.id", ondelete="CASCADE"), nullable=False, index=True
    )

    scan = relationship("Scan", back_populates="images")
