"""Recipe candidate schemas.

A ``Recipe`` is the normalized shape every source adapter returns. The
aggregator stamps source metadata on it during fan-out and fills in
``relevance_score`` during scoring.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from recipe_search.schemas.base import InboundSchema


class NutritionFacts(InboundSchema):
    """Per-serving macro nutrients."""

    calories: float = Field(default=0.0, ge=0.0)
    protein: float = Field(default=0.0, ge=0.0)
    carbs: float = Field(default=0.0, ge=0.0)
    fat: float = Field(default=0.0, ge=0.0)


class Recipe(InboundSchema):
    """A recipe candidate returned by one source for one search call."""

    id: str = Field(
        default="",
        description="Ephemeral identifier, only unique within one search call",
    )
    title: str
    image: str | None = None
    ready_in_minutes: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=0)
    summary: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(
        default_factory=list,
        description="Structured instruction steps",
    )
    nutrition: NutritionFacts | None = None

    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    is_dairy_free: bool = False

    cuisines: list[str] = Field(default_factory=list)
    dish_types: list[str] = Field(default_factory=list)
    source_url: str | None = None

    # Stamped by the fan-out coordinator
    source_name: str = ""
    source_weight: float = Field(default=0.5, ge=0.0)

    # Unset until the scoring stage runs
    relevance_score: float | None = Field(default=None, ge=0.0)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Providers use numeric ids
        if value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("summary", mode="before")
    @classmethod
    def _none_summary(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("ingredients", mode="before")
    @classmethod
    def _ingredient_names(cls, value: Any) -> Any:
        """Accept ingredient objects (``{"name": ...}``) as well as plain names."""
        if not isinstance(value, list):
            return value
        names: list[Any] = []
        for item in value:
            if isinstance(item, Mapping):
                names.append(item.get("name") or item.get("original") or "")
            else:
                names.append(item)
        return names
