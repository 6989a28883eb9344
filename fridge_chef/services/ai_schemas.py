"""
Pydantic models for validating the recipe generator's JSON response.

Field names are snake_case in Python and camelCase on the wire
(``cookingTime``, ``nutritionalInfo``, ...). Types are strict: a numeric
string for ``cookingTime`` is a schema error, not a coercion. NaN and
infinite numbers are rejected everywhere.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        allow_inf_nan=False,
    )


# --- Detected ingredients ---


class DetectedIngredientSchema(_CamelModel):
    name: str
    category: str
    quantity: Optional[str] = None


# --- Suggested recipes ---


class RecipeIngredientSchema(_CamelModel):
    item: str
    amount: str


class NutritionalInfoSchema(_CamelModel):
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)


class SuggestedRecipeSchema(_CamelModel):
    title: str
    cooking_time: int = Field(ge=1)  # Minutes
    difficulty: Literal["EASY", "MEDIUM", "HARD"]
    ingredients: list[RecipeIngredientSchema]
    instructions: list[str]
    nutritional_info: NutritionalInfoSchema

    @field_validator("cooking_time", mode="before")
    @classmethod
    def integral_float_to_int(cls, value):
        """Accept 15.0 as 15 minutes. Fractional minutes stay invalid."""
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


# --- Full generator response ---


class RecipeResponseSchema(_CamelModel):
    detected_ingredients: list[DetectedIngredientSchema]
    suggested_recipes: list[SuggestedRecipeSchema]

    def to_response(self) -> dict:
        """Wire-format dict (camelCase keys, optional fields omitted when unset)."""
        return self.model_dump(by_alias=True, exclude_none=True)
