"""Recipe search aggregation across multiple unreliable providers."""

from recipe_search.schemas import Recipe, SearchFilters, SearchQuery, SearchResult
from recipe_search.services.search import (
    RecipeSearchService,
    SearchUnavailableError,
    search,
)
from recipe_search.sources import SourceAdapter, SourceRegistry, StaticSourceAdapter


__version__ = "0.1.0"

__all__ = [
    "Recipe",
    "RecipeSearchService",
    "SearchFilters",
    "SearchQuery",
    "SearchResult",
    "SearchUnavailableError",
    "SourceAdapter",
    "SourceRegistry",
    "StaticSourceAdapter",
    "search",
]
