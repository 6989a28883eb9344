from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from fridge_chef.database import Base


class RecipeIngredient(Base):
    """One (item, amount) line of a recipe, kept in the order it was suggested."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    item = Column(String(255), nullable=False)
    amount = Column(String(255), nullable=False)  # Free text (e.g., "2 cups", "a pinch")
    position = Column(Integer, nullable=False, default=0)

    recipe = relationship("Recipe", back_populates="ingredients")

    __table_args__ = (Index("idx_recipe_ingredients_recipe_id", "recipe_id"),)
