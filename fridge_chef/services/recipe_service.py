"""Business logic for saved recipes and favorites."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from fridge_chef.models.favorite import Favorite
from fridge_chef.models.image import RecipeImage
from fridge_chef.models.recipe import Recipe, Difficulty
from fridge_chef.models.recipe_ingredient import RecipeIngredient
from fridge_chef.services.ai_schemas import SuggestedRecipeSchema
from fridge_chef.services.file_service import ImageUpload


class RecipeService:
    """Service for recipe-related operations."""

    @staticmethod
    def build_recipe(
        user_id: UUID,
        suggestion: SuggestedRecipeSchema,
        scan_id: Optional[int] = None,
    ) -> Recipe:
        """Build an unsaved Recipe (with ordered ingredients) from a suggestion."""
        nutrition = suggestion.nutritional_info
        recipe = Recipe(
            user_id=user_id,
            scan_id=scan_id,
            title=suggestion.title,
            cooking_time=suggestion.cooking_time,
            difficulty=Difficulty(suggestion.difficulty),
            instructions=list(suggestion.instructions),
            calories=nutrition.calories,
            protein=nutrition.protein,
            carbs=nutrition.carbs,
            fat=nutrition.fat,
        )
        recipe.ingredients = [
            RecipeIngredient(item=ingredient.item, amount=ingredient.amount, position=i)
            for i, ingredient in enumerate(suggestion.ingredients)
        ]
        return recipe

    @staticmethod
    def create_recipe(
        db: Session,
        user_id: UUID,
        suggestion: SuggestedRecipeSchema,
        scan_id: Optional[int] = None,
        image: Optional[ImageUpload] = None,
    ) -> Recipe:
        """
        Save a suggested recipe for a user.

        Args:
            db: Database session
            user_id: Owner
            suggestion: Validated recipe from the generator (or the client)
            scan_id: Scan that produced the recipe, if any
            image: Optional cover image

        Returns:
            Created Recipe object
        """
        recipe = RecipeService.build_recipe(user_id, suggestion, scan_id=scan_id)
        if image is not None:
            recipe.image = RecipeImage(
                content_type=image.content_type,
                blob=image.data,
                alt_text=suggestion.title,
            )
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    @staticmethod
    def get_recipe(db: Session, recipe_id: int) -> Optional[Recipe]:
        return db.query(Recipe).filter(Recipe.id == recipe_id).first()

    @staticmethod
    def get_user_recipes(
        db: Session, user_id: UUID, limit: int = 50, offset: int = 0
    ) -> List[Recipe]:
        """Get a user's recipes, newest first."""
        return (
            db.query(Recipe)
            .filter(Recipe.user_id == user_id)
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    @staticmethod
    def delete_recipe(db: Session, recipe_id: int) -> bool:
        """
        Delete a recipe with its ingredients, image and favorites.

        The scan that produced it is left untouched.

        Returns:
            True if deleted, False if not found
        """
        recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if recipe:
            db.delete(recipe)
            db.commit()
            return True
        return False

    # =========================================================================
    # Favorites
    # =========================================================================

    @staticmethod
    def add_favorite(db: Session, user_id: UUID, recipe_id: int) -> Favorite:
        """
        Favorite a recipe.

        Raises:
            IntegrityError: The user already favorited this recipe
        """
        favorite = Favorite(user_id=user_id, recipe_id=recipe_id)
        db.add(favorite)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise
        db.refresh(favorite)
        return favorite

    @staticmethod
    def remove_favorite(db: Session, user_id: UUID, recipe_id: int) -> bool:
        """Returns True if a favorite was removed."""
        favorite = (
            db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.recipe_id == recipe_id)
            .first()
        )
        if favorite:
            db.delete(favorite)
            db.commit()
            return True
        return False

    @staticmethod
    def is_favorite(db: Session, user_id: UUID, recipe_id: int) -> bool:
        return (
            db.query(Favorite.id)
            .filter(Favorite.user_id == user_id, Favorite.recipe_id == recipe_id)
            .first()
            is not None
        )

    @staticmethod
    def get_favorite_recipes(db: Session, user_id: UUID) -> List[Recipe]:
        """Recipes the user has favorited, most recently favorited first."""
        return (
            db.query(Recipe)
            .join(Favorite, Favorite.recipe_id == Recipe.id)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
            .all()
        )

    # =========================================================================
    # Serialization
    # =========================================================================

    @staticmethod
    def to_response(recipe: Recipe, is_favorite: bool = False) -> dict:
        """Recipe as JSON, using the same keys as the generator's output."""
        return {
            "id": recipe.id,
            "scanId": recipe.scan_id,
            "title": recipe.title,
            "cookingTime": recipe.cooking_time,
            "difficulty": recipe.difficulty.value,
            "ingredients": [
                {"item": ingredient.item, "amount": ingredient.amount}
                for ingredient in recipe.ingredients
            ],
            "instructions": recipe.instruction_steps,
            "nutritionalInfo": {
                "calories": recipe.calories,
                "protein": recipe.protein,
                "carbs": recipe.carbs,
                "fat": recipe.fat,
            },
            "hasImage": recipe.image is not None,
            "isFavorite": is_favorite,
        }


# Singleton instance
recipe_service = RecipeService()
