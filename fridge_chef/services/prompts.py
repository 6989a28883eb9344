"""
AI prompt templates for ingredient detection and recipe generation.

The recipe prompt spells out the exact JSON shape that
``RecipeResponseSchema`` in ai_schemas.py validates. Keep the two in sync.
"""

# =============================================================================
# INGREDIENT DETECTION (vision model)
# =============================================================================

# Exact reply the model must give when nothing usable is in the photo.
# Compared with ==, so any variation in casing or punctuation is treated
# as ingredient text.
NO_INGREDIENTS_SENTINEL = "NO_INGREDIENTS_FOUND"

INGREDIENT_DETECTION_SYSTEM_PROMPT = f"""You are a kitchen assistant that identifies ingredients in a fridge or pantry.
If the image is empty, unclear, or doesn't contain food items, respond with "{NO_INGREDIENTS_SENTINEL}".
Otherwise, list all visible food items and ingredients, categorized by type (produce, dairy, meat, etc).
Only include items that are clearly visible and identifiable."""

INGREDIENT_DETECTION_USER_PROMPT = (
    "What ingredients can you identify in this image? Group them by category."
)

# =============================================================================
# RECIPE GENERATION (text model)
# =============================================================================

RECIPE_GENERATION_SYSTEM_PROMPT = """You are a cooking assistant that generates recipes. Return a raw JSON response (no markdown formatting) with the following structure:
{
  "detectedIngredients": [
    { "name": string, "category": string, "quantity": string }
  ],
  "suggestedRecipes": [{
    "title": string,
    "cookingTime": number,
    "difficulty": "EASY" | "MEDIUM" | "HARD",
    "ingredients": [
      { "item": string, "amount": string }
    ],
    "instructions": string[],
    "nutritionalInfo": {
      "calories": number,
      "protein": number,
      "carbs": number,
      "fat": number
    }
  }]
}

RULES:
- cookingTime is a whole number of minutes, at least 1
- nutritionalInfo values are per serving and never negative
- "quantity" may be omitted when it cannot be estimated"""


def build_recipe_generation_message(ingredients: str) -> str:
    """User message for the recipe generator."""
    return f"Generate recipes using these ingredients: {ingredients}"
