"""Pydantic schemas for search queries, recipe candidates and search reports."""

from recipe_search.schemas.base import InboundSchema, OutboundSchema
from recipe_search.schemas.enums import Diet, Intolerance, SourceStatus
from recipe_search.schemas.recipe import NutritionFacts, Recipe
from recipe_search.schemas.search import (
    SearchFilters,
    SearchQuery,
    SearchResult,
    SourceOutcome,
)


__all__ = [
    "Diet",
    "InboundSchema",
    "Intolerance",
    "NutritionFacts",
    "OutboundSchema",
    "Recipe",
    "SearchFilters",
    "SearchQuery",
    "SearchResult",
    "SourceOutcome",
    "SourceStatus",
]
