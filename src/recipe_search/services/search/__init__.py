"""Aggregated recipe search.

This package fans a query out to multiple recipe sources, removes
near-duplicate recipes across them and ranks the rest by relevance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_search.services.search.coordinator import (
    Candidate,
    FanOutCoordinator,
    FanOutResult,
)
from recipe_search.services.search.dedup import deduplicate, normalize_title
from recipe_search.services.search.exceptions import (
    PipelineError,
    RecipeSearchError,
    SearchUnavailableError,
    SourceError,
    SourceTimeoutError,
)
from recipe_search.services.search.ranking import rank
from recipe_search.services.search.scoring import score_candidates
from recipe_search.services.search.service import RecipeSearchService


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from recipe_search.core.config import Settings
    from recipe_search.schemas import Recipe, SearchFilters
    from recipe_search.sources.protocol import SourceAdapter


async def search(
    query: str,
    filters: SearchFilters | Mapping[str, Any] | None = None,
    *,
    sources: Iterable[SourceAdapter],
    settings: Settings | None = None,
) -> list[Recipe]:
    """Search the given sources once and return the ranked recipes."""
    service = RecipeSearchService.from_adapters(sources, settings)
    return await service.search(query, filters)


__all__ = [
    "Candidate",
    "FanOutCoordinator",
    "FanOutResult",
    "PipelineError",
    "RecipeSearchError",
    "RecipeSearchService",
    "SearchUnavailableError",
    "SourceError",
    "SourceTimeoutError",
    "deduplicate",
    "normalize_title",
    "rank",
    "score_candidates",
    "search",
]
