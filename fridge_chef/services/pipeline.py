"""
Photo → ingredients → recipes pipeline.

Chains the two ClaudeService calls. The first failure at either stage stops
the pipeline: no partial results, no retry, no fallback stage.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fridge_chef.services.ai_schemas import RecipeResponseSchema
from fridge_chef.services.ai_service import AIServiceError, ClaudeService

logger = logging.getLogger(__name__)

NO_INGREDIENTS_MESSAGE = (
    "No ingredients were detected in the image. "
    "Please try again with a clearer photo of food items"
)


class NoIngredientsDetectedError(Exception):
    """The photo contained nothing the detector could identify as food."""

    def __init__(self, message: str = NO_INGREDIENTS_MESSAGE):
        super().__init__(message)


class PipelineStatus(str, Enum):
    OK = "ok"
    NO_INGREDIENTS = "no_ingredients"
    ERROR = "error"


class PipelineStage(str, Enum):
    DETECT = "detect"
    GENERATE = "generate"


@dataclass
class PipelineResult:
    """Outcome of a full pipeline run. Payload fields are only set when status is OK."""

    status: PipelineStatus
    ingredients: Optional[str] = None
    recipes: Optional[RecipeResponseSchema] = None
    stage: Optional[PipelineStage] = None
    message: Optional[str] = None
    error: Optional[AIServiceError] = None

    @property
    def ok(self) -> bool:
        return self.status is PipelineStatus.OK


class RecipePipeline:
    """Detect ingredients in a photo, then generate recipes from them."""

    def __init__(self, ai_service: ClaudeService):
        self.ai_service = ai_service

    async def analyze_image(self, image_ref: str) -> str:
        """
        Run the detector.

        Raises:
            NoIngredientsDetectedError: Sentinel or empty detector output
            AIServiceError: Transport or provider failure
        """
        ingredients = await self.ai_service.detect_ingredients(image_ref)
        if not ingredients:
            raise NoIngredientsDetectedError()
        return ingredients

    async def generate_recipes(self, ingredients: str) -> RecipeResponseSchema:
        """Run the generator. Raises AIServiceError subclasses on failure."""
        return await self.ai_service.generate_recipes(ingredients)

    async def run(self, image_ref: str) -> PipelineResult:
        """Run both stages and report the outcome without raising."""
        try:
            ingredients = await self.analyze_image(image_ref)
        except NoIngredientsDetectedError as e:
            return PipelineResult(
                status=PipelineStatus.NO_INGREDIENTS,
                stage=PipelineStage.DETECT,
                message=str(e),
            )
        except AIServiceError as e:
            logger.error("Ingredient detection failed: %s", e)
            return PipelineResult(
                status=PipelineStatus.ERROR,
                stage=PipelineStage.DETECT,
                message=str(e),
                error=e,
            )

        try:
            recipes = await self.generate_recipes(ingredients)
        except AIServiceError as e:
            logger.error("Recipe generation failed: %s", e)
            return PipelineResult(
                status=PipelineStatus.ERROR,
                stage=PipelineStage.GENERATE,
                message=str(e),
                error=e,
            )

        return PipelineResult(
            status=PipelineStatus.OK, ingredients=ingredients, recipes=recipes
        )
