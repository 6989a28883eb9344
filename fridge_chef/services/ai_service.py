"""
Claude AI integration for ingredient detection and recipe generation.

Two independent calls, each stateless:
1. Ingredient detection from a photo (vision model)
2. Recipe generation from ingredient text (text model), validated against
   RecipeResponseSchema

Neither call is retried. Provider errors are mapped onto the exceptions at
the bottom of this module.
"""

import json
import re
import base64
import logging
from pathlib import Path
from typing import Optional

from anthropic import Anthropic
import anthropic
import httpx
from pydantic import ValidationError

from fridge_chef.config import settings
from fridge_chef.services.ai_schemas import RecipeResponseSchema
from fridge_chef.services.prompts import (
    NO_INGREDIENTS_SENTINEL,
    INGREDIENT_DETECTION_SYSTEM_PROMPT,
    INGREDIENT_DETECTION_USER_PROMPT,
    RECIPE_GENERATION_SYSTEM_PROMPT,
    build_recipe_generation_message,
)


logger = logging.getLogger(__name__)

RECIPE_GENERATION_FAILED = "Failed to generate recipes"

_LEADING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```$")
_DATA_URL = re.compile(r"^data:(?P<media_type>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)


def _strip_markdown_json(text: str) -> str:
    """Strip markdown fence markers around JSON text. Each marker is optional."""
    text = _LEADING_FENCE.sub("", text.strip(), count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _reject_constant(name: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _response_text(response) -> str:
    """Concatenate the text blocks of a Messages API response."""
    return "".join(
        block.text for block in response.content if hasattr(block, "text")
    )


class ClaudeService:
    """Claude API integration for the detect → generate pipeline."""

    def __init__(self, client: Optional[Anthropic] = None):
        if client is None:
            timeout = httpx.Timeout(
                timeout=settings.anthropic_timeout,
                connect=settings.anthropic_connect_timeout,
            )
            client = Anthropic(api_key=settings.anthropic_api_key, timeout=timeout)
        self.client = client
        self.vision_model = settings.vision_model
        self.recipe_model = settings.recipe_model

    # =========================================================================
    # INGREDIENT DETECTION
    # =========================================================================

    async def detect_ingredients(self, image_ref: str) -> Optional[str]:
        """
        Identify food items in a photo.

        Args:
            image_ref: http(s) URL, base64 data URL, or local file path

        Returns:
            Free-text ingredient list grouped by category, returned verbatim
            (may be empty). None when the model answers with the
            no-ingredients sentinel.

        Raises:
            ServiceUnavailableError: AI service temporarily down
            RateLimitError: Too many requests
            AIServiceError: Any other request failure
        """
        try:
            response = self.client.messages.create(
                model=self.vision_model,
                max_tokens=settings.vision_max_tokens,
                system=INGREDIENT_DETECTION_SYSTEM_PROMPT,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": INGREDIENT_DETECTION_USER_PROMPT},
                            self._build_image_block(image_ref),
                        ],
                    }
                ],
            )
        except anthropic.APIError as e:
            raise _map_api_error(e) from e

        content = _response_text(response)
        if content == NO_INGREDIENTS_SENTINEL:
            logger.info("No ingredients detected in image")
            return None
        return content

    # =========================================================================
    # RECIPE GENERATION
    # =========================================================================

    async def generate_recipes(self, ingredients: str) -> RecipeResponseSchema:
        """
        Suggest recipes for the given ingredients.

        Args:
            ingredients: Free-text ingredient description (usually detector output)

        Returns:
            Validated RecipeResponseSchema

        Raises:
            RecipeGenerationError: Response was not valid JSON or did not match
                the schema. Details are logged, the message is always the same.
            ServiceUnavailableError: AI service temporarily down
            RateLimitError: Too many requests
            AIServiceError: Any other request failure
        """
        try:
            response = self.client.messages.create(
                model=self.recipe_model,
                max_tokens=settings.recipe_max_tokens,
                system=RECIPE_GENERATION_SYSTEM_PROMPT,
                messages=[
                    {
                        "role": "user",
                        "content": build_recipe_generation_message(ingredients),
                    }
                ],
            )
        except anthropic.APIError as e:
            raise _map_api_error(e) from e

        json_str = _strip_markdown_json(_response_text(response))

        try:
            parsed = json.loads(json_str, parse_constant=_reject_constant)
        except ValueError as e:
            logger.warning("Recipe response is not valid JSON: %s", e)
            raise RecipeGenerationError(RECIPE_GENERATION_FAILED) from e

        try:
            return RecipeResponseSchema.model_validate(parsed)
        except ValidationError as e:
            logger.warning("Failed to parse recipe response: %s", e)
            raise RecipeGenerationError(RECIPE_GENERATION_FAILED) from e

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _build_image_block(self, image_ref: str) -> dict:
        """Build a Messages API image block from a URL, data URL or file path."""
        if image_ref.startswith(("http://", "https://")):
            return {"type": "image", "source": {"type": "url", "url": image_ref}}

        match = _DATA_URL.match(image_ref)
        if match:
            media_type, data = match.group("media_type"), match.group("data")
        else:
            media_type = self._get_media_type(image_ref)
            data = self._load_image_base64(image_ref)

        return {
            "type": "image",
            "source": {"type": "base64", "media_type": media_type, "data": data},
        }

    def _load_image_base64(self, image_path: str) -> str:
        """Load image file and encode as base64."""
        with open(image_path, "rb") as f:
            return base64.standard_b64encode(f.read()).decode("utf-8")

    def _get_media_type(self, image_path: str) -> str:
        """Determine media type from file extension."""
        suffix = Path(image_path).suffix.lower()
        media_types = {
            ".jpg": "image/jpeg",
            ".jpeg": "image/jpeg",
            ".png": "image/png",
            ".gif": "image/gif",
            ".webp": "image/webp",
        }
        return media_types.get(suffix, "image/jpeg")


def _map_api_error(e: anthropic.APIError) -> "AIServiceError":
    if isinstance(e, anthropic.APIConnectionError):
        return ServiceUnavailableError("AI service temporarily unavailable")
    if isinstance(e, anthropic.RateLimitError):
        return RateLimitError("Too many requests, please try again in 1 minute")
    if isinstance(e, anthropic.APIStatusError) and e.status_code >= 500:
        return ServiceUnavailableError("AI service error")
    return AIServiceError(e.message or "AI request failed")


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================


class AIServiceError(Exception):
    """AI request failed. The message is safe to show to users."""

    pass


class ServiceUnavailableError(AIServiceError):
    """AI service is temporarily unavailable."""

    pass


class RateLimitError(AIServiceError):
    """Rate limit exceeded."""

    pass


class RecipeGenerationError(AIServiceError):
    """Recipe response could not be parsed or failed schema validation."""

    pass
