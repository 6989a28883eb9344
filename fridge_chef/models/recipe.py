from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Enum,
    Float,
    Index,
    JSON,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from fridge_chef.database import Base


class Difficulty(str, enum.Enum):
    """Enum for recipe difficulty."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class Recipe(Base):
    """Saved recipe, usually generated from a scan."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    scan_id = Column(
        Integer, ForeignKey("scans.id", ondelete="SET NULL"), nullable=True
    )  # Scan that produced this recipe, if any
    title = Column(String(255), nullable=False)
    cooking_time = Column(Integer, nullable=False)  # Minutes
    difficulty = Column(Enum(Difficulty), nullable=False)
    instructions = Column(JSON, nullable=False)  # Ordered list of steps
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)  # Grams
    carbs = Column(Float, nullable=False, default=0)  # Grams
    fat = Column(Float, nullable=False, default=0)  # Grams
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="recipes")
    scan = relationship("Scan", back_populates="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position",
    )
    image = relationship(
        "RecipeImage", back_populates="recipe", cascade="all, delete-orphan", uselist=False
    )
    favorites = relationship(
        "Favorite", back_populates="recipe", cascade="all, delete-orphan"
    )

    @property
    def instruction_steps(self) -> list[str]:
        return list(self.instructions or [])

    __table_args__ = (
        Index("idx_recipes_user_id", "user_id"),
        Index("idx_recipes_scan_id", "scan_id"),
    )
