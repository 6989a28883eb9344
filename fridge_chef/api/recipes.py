"""API endpoints for saved recipes and favorites."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fridge_chef.database import get_db
from fridge_chef.models.recipe import Recipe
from fridge_chef.models.user import User
from fridge_chef.services.ai_schemas import SuggestedRecipeSchema
from fridge_chef.services.auth import user_has_permission
from fridge_chef.services.auth.dependencies import get_current_user
from fridge_chef.services.recipe_service import recipe_service

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _get_recipe_or_404(db: Session, recipe_id: int) -> Recipe:
    recipe = recipe_service.get_recipe(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


def _check_access(user: User, recipe: Recipe, action: str) -> None:
    """Owners need ``<action>:recipe:own``; everyone else ``<action>:recipe:any``."""
    access = "own" if recipe.user_id == user.id else "any"
    if not user_has_permission(user, f"{action}:recipe:{access}"):
        raise HTTPException(status_code=403, detail="Access denied")


@router.get("")
async def list_recipes(
    limit: int = 50,
    offset: int = 0,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's recipes, newest first."""
    recipes = recipe_service.get_user_recipes(db, user.id, limit=limit, offset=offset)
    favorite_ids = {favorite.recipe_id for favorite in user.favorites}
    return [
        recipe_service.to_response(recipe, is_favorite=recipe.id in favorite_ids)
        for recipe in recipes
    ]


@router.post("", status_code=201)
async def create_recipe(
    suggestion: SuggestedRecipeSchema,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Save one suggested recipe (same JSON shape the generator returns)."""
    if not user_has_permission(user, "create:recipe"):
        raise HTTPException(status_code=403, detail="Access denied")
    recipe = recipe_service.create_recipe(db, user.id, suggestion)
    return recipe_service.to_response(recipe)


@router.get("/favorites")
async def list_favorites(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Recipes the current user has favorited."""
    return [
        recipe_service.to_response(recipe, is_favorite=True)
        for recipe in recipe_service.get_favorite_recipes(db, user.id)
    ]


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    recipe = _get_recipe_or_404(db, recipe_id)
    _check_access(user, recipe, "read")
    return recipe_service.to_response(
        recipe, is_favorite=recipe_service.is_favorite(db, user.id, recipe.id)
    )


@router.delete("/{recipe_id}", status_code=204)
async def delete_recipe(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a recipe. The scan that produced it is kept."""
    recipe = _get_recipe_or_404(db, recipe_id)
    _check_access(user, recipe, "delete")
    recipe_service.delete_recipe(db, recipe.id)
    return Response(status_code=204)


@router.post("/{recipe_id}/favorite")
async def add_favorite(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    recipe = _get_recipe_or_404(db, recipe_id)
    _check_access(user, recipe, "read")
    try:
        recipe_service.add_favorite(db, user.id, recipe.id)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Recipe is already a favorite")
    return {"favorited": True}


@router.delete("/{recipe_id}/favorite")
async def remove_favorite(
    recipe_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _get_recipe_or_404(db, recipe_id)
    if not recipe_service.remove_favorite(db, user.id, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe is not a favorite")
    return {"favorited": False}
