"""Recipe factory for generating test candidates.

Uses polyfactory for consistent test data generation.
"""

from __future__ import annotations

from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_search.schemas import NutritionFacts, Recipe


class NutritionFactsFactory(ModelFactory[NutritionFacts]):
    """Factory for per-serving nutrition facts."""

    __model__ = NutritionFacts

    calories = 450.0
    protein = 25.0
    carbs = 40.0
    fat = 15.0


class RecipeFactory(ModelFactory[Recipe]):
    """Factory for generating Recipe candidates.

    Source metadata and score are left unset, the way an adapter returns
    them before the aggregator stamps them.
    """

    __model__ = Recipe

    id = ""
    image = None
    ready_in_minutes = 30
    servings = 4
    summary = ""
    nutrition = None
    cuisines = []  # noqa: RUF012
    dish_types = []  # noqa: RUF012
    source_url = None
    source_name = ""
    source_weight = 0.5
    relevance_score = None
