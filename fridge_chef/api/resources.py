"""
JSON resource endpoints for the photo → ingredients → recipes flow.

The UI calls /resources/analyze-image, then passes the returned ingredient
text to /resources/generate-recipes. /resources/scan does both in one request
and saves the results.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fridge_chef.database import get_db
from fridge_chef.models.user import User
from fridge_chef.services.ai_service import (
    AIServiceError,
    ClaudeService,
    RateLimitError,
    RecipeGenerationError,
    ServiceUnavailableError,
)
from fridge_chef.services.auth.dependencies import get_current_user
from fridge_chef.services.file_service import file_service
from fridge_chef.services.pipeline import (
    NoIngredientsDetectedError,
    PipelineStatus,
    RecipePipeline,
)
from fridge_chef.services.recipe_service import recipe_service
from fridge_chef.services.scan_service import scan_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])


@lru_cache
def get_recipe_pipeline() -> RecipePipeline:
    """Shared pipeline backed by the configured Anthropic client."""
    return RecipePipeline(ClaudeService())


class GenerateRecipesRequest(BaseModel):
    ingredients: str = ""


def _error_status(error: Optional[Exception]) -> int:
    if isinstance(error, RateLimitError):
        return 429
    if isinstance(error, ServiceUnavailableError):
        return 503
    if isinstance(error, RecipeGenerationError):
        return 500
    return 502


@router.post("/analyze-image")
async def analyze_image(
    image: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    pipeline: RecipePipeline = Depends(get_recipe_pipeline),
):
    """
    Identify ingredients in an uploaded photo.

    Returns: {"ingredients": str} or {"message": str} on failure
    """
    if image is None or not image.filename:
        return JSONResponse(status_code=400, content={"message": "An image is required"})

    try:
        upload = await file_service.read_image(image)
    except ValueError as e:
        return JSONResponse(status_code=400, content={"message": str(e)})

    try:
        ingredients = await pipeline.analyze_image(upload.data_url)
    except NoIngredientsDetectedError as e:
        return JSONResponse(status_code=422, content={"message": str(e)})
    except AIServiceError as e:
        logger.error("Image analysis failed for user %s: %s", user.id, e)
        return JSONResponse(status_code=_error_status(e), content={"message": str(e)})

    return {"ingredients": ingredients}


@router.post("/generate-recipes")
async def generate_recipes(
    payload: GenerateRecipesRequest,
    user: User = Depends(get_current_user),
    pipeline: RecipePipeline = Depends(get_recipe_pipeline),
):
    """
    Suggest recipes for an ingredient description.

    Returns: {"detectedIngredients": [...], "suggestedRecipes": [...]}
             or {"error": str} on failure
    """
    if not payload.ingredients.strip():
        return JSONResponse(status_code=400, content={"error": "Ingredients are required"})

    try:
        recipes = await pipeline.generate_recipes(payload.ingredients)
    except AIServiceError as e:
        logger.error("Recipe generation failed for user %s: %s", user.id, e)
        return JSONResponse(status_code=_error_status(e), content={"error": str(e)})

    return recipes.to_response()


@router.post("/scan")
async def scan(
    image: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    pipeline: RecipePipeline = Depends(get_recipe_pipeline),
):
    """
    Run the full pipeline on a photo and save the scan with its recipes.

    Returns: {"scanId", "ingredients", "detectedIngredients", "recipes"}
             or {"message": str, "stage": str} on failure
    """
    if image is None or not image.filename:
        return JSONResponse(status_code=400, content={"message": "An image is required"})

    try:
        upload = await file_service.read_image(image)
    except ValueError as e:
        return JSONResponse(status_code=400, content={"message": str(e)})

    result = await pipeline.run(upload.data_url)

    if result.status is PipelineStatus.NO_INGREDIENTS:
        return JSONResponse(
            status_code=422,
            content={"message": result.message, "stage": result.stage.value},
        )
    if not result.ok:
        return JSONResponse(
            status_code=_error_status(result.error),
            content={"message": result.message, "stage": result.stage.value},
        )

    saved = scan_service.create_scan(
        db,
        user_id=user.id,
        ingredients=result.ingredients,
        images=[upload],
        recipes=result.recipes,
    )
    logger.info(
        "Saved scan %s with %d recipes for user %s",
        saved.id,
        len(saved.recipes),
        user.id,
    )

    return {
        "scanId": saved.id,
        "ingredients": saved.ingredients,
        "detectedIngredients": result.recipes.to_response()["detectedIngredients"],
        "recipes": [
            recipe_service.to_response(recipe)
            for recipe in sorted(saved.recipes, key=lambda r: r.id)
        ],
    }
