"""Recipe search aggregation service.

Fans a query out to every registered source, collapses near-duplicate
recipes, scores what survives and returns one ranked list. Source failures
degrade the result instead of failing the search; a defect in the pipeline
itself degrades to a single call against the most trusted source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

from recipe_search.core.config import get_settings
from recipe_search.observability.logging import bind_context, get_logger, unbind_context
from recipe_search.observability.tracing import get_tracer
from recipe_search.schemas import SearchFilters, SearchQuery, SearchResult
from recipe_search.services.search.coordinator import FanOutCoordinator, FanOutResult
from recipe_search.services.search.dedup import deduplicate
from recipe_search.services.search.exceptions import (
    PipelineError,
    SearchUnavailableError,
)
from recipe_search.services.search.ranking import log_top_results, rank
from recipe_search.services.search.scoring import score_candidates
from recipe_search.sources.registry import SourceRegistry


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from recipe_search.core.config import Settings
    from recipe_search.schemas import Recipe
    from recipe_search.sources.protocol import SourceAdapter

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class RecipeSearchService:
    """Aggregated recipe search over a registry of sources.

    Example:
        ```python
        service = RecipeSearchService.from_adapters([spoonacular, tasty])
        recipes = await service.search("chicken rice", {"diet": "vegetarian"})
        ```
    """

    def __init__(
        self,
        registry: SourceRegistry,
        settings: Settings | None = None,
        *,
        coordinator: FanOutCoordinator | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            registry: Sources to search, in merge order.
            settings: Settings override. If not provided, uses get_settings().
            coordinator: Fan-out coordinator override.
        """
        self._settings = settings or get_settings()
        self._registry = registry
        self._coordinator = coordinator or FanOutCoordinator(registry)

    @classmethod
    def from_adapters(
        cls,
        adapters: Iterable[SourceAdapter],
        settings: Settings | None = None,
    ) -> RecipeSearchService:
        """Register adapters in order, with weights and timeouts from settings."""
        settings = settings or get_settings()
        registry = SourceRegistry.from_adapters(adapters, settings.sources)
        return cls(registry, settings)

    @property
    def registry(self) -> SourceRegistry:
        """The sources this service searches."""
        return self._registry

    async def search(
        self,
        query: str | SearchQuery,
        filters: SearchFilters | Mapping[str, Any] | None = None,
    ) -> list[Recipe]:
        """Search all sources and return one ranked recipe list.

        An empty list is a valid result, including when every source failed.

        Raises:
            SearchUnavailableError: Only when the pipeline failed and the
                fallback search failed as well.
            pydantic.ValidationError: If the filters are invalid.
        """
        result = await self.search_with_report(query, filters)
        return result.recipes

    async def search_with_report(
        self,
        query: str | SearchQuery,
        filters: SearchFilters | Mapping[str, Any] | None = None,
    ) -> SearchResult:
        """Like ``search``, also reporting how each source behaved."""
        search_query = _build_query(query, filters)
        bind_context(search_id=uuid4().hex[:12])
        try:
            with tracer.start_as_current_span("recipe_search.search") as span:
                span.set_attribute("recipe_search.query", search_query.query)
                span.set_attribute("recipe_search.source_count", len(self._registry))
                result = await self._search(search_query)
                span.set_attribute("recipe_search.result_count", len(result.recipes))
                span.set_attribute("recipe_search.used_fallback", result.used_fallback)
                return result
        finally:
            unbind_context("search_id")

    async def _search(self, search_query: SearchQuery) -> SearchResult:
        logger.info(
            "Starting recipe search",
            query=search_query.query,
            sources=self._registry.names,
        )

        fan_out: FanOutResult | None = None
        try:
            fan_out = await self._coordinator.gather(
                search_query.query, search_query.filters
            )
            recipes = self._rank_candidates(fan_out, search_query)
        except Exception as e:
            logger.opt(exception=e).error(
                "Search pipeline failed, falling back to the most trusted source",
                query=search_query.query,
            )
            recipes = await self._fallback(search_query)
            outcomes = list(fan_out.outcomes) if fan_out is not None else []
            return SearchResult(recipes=recipes, outcomes=outcomes, used_fallback=True)

        if not recipes:
            logger.info("No recipes found", query=search_query.query)
        else:
            logger.info(
                "Recipe search complete",
                query=search_query.query,
                results=len(recipes),
            )
            log_top_results(recipes, self._settings.search.log_top_results)

        return SearchResult(recipes=recipes, outcomes=list(fan_out.outcomes))

    def _rank_candidates(
        self,
        fan_out: FanOutResult,
        search_query: SearchQuery,
    ) -> list[Recipe]:
        """Deduplicate, score and rank the merged candidates."""
        try:
            unique = deduplicate(fan_out.recipes)
            scored = score_candidates(unique, search_query.query, search_query.filters)
            return rank(scored)
        except Exception as e:
            msg = f"Failed to rank {len(fan_out.candidates)} candidates: {e}"
            raise PipelineError(msg) from e

    async def _fallback(self, search_query: SearchQuery) -> list[Recipe]:
        """Search only the highest-weight source, deduplicated but unscored.

        Raises:
            SearchUnavailableError: If fallback is disabled, no source is
                registered, or the source fails.
        """
        if not self._settings.search.fallback_enabled:
            logger.error("Search fallback disabled")
            raise SearchUnavailableError

        registration = self._registry.highest_weight()
        if registration is None:
            logger.error("No recipe source available for fallback search")
            raise SearchUnavailableError

        try:
            recipes = await self._coordinator.fetch(
                registration, search_query.query, search_query.filters
            )
            unique = deduplicate(recipes)
        except Exception as e:
            logger.opt(exception=e).error(
                "Fallback search failed",
                source=registration.name,
            )
            raise SearchUnavailableError from e

        logger.warning(
            "Served fallback search results",
            source=registration.name,
            results=len(unique),
        )
        return unique


def _build_query(
    query: str | SearchQuery,
    filters: SearchFilters | Mapping[str, Any] | None,
) -> SearchQuery:
    if isinstance(query, SearchQuery):
        if filters is None:
            return query
        return SearchQuery(query=query.query, filters=filters)
    return SearchQuery(query=query, filters=filters if filters is not None else {})
