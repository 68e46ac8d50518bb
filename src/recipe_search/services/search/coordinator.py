"""Concurrent fan-out to every registered recipe source.

Each source runs in its own task under its own timeout, and the round joins
on an all-settled barrier: a slow or broken source costs at most its own
timeout and never cancels or blocks the others.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from recipe_search.observability.logging import get_logger
from recipe_search.observability.tracing import get_tracer
from recipe_search.schemas import Recipe, SourceOutcome, SourceStatus
from recipe_search.services.search.exceptions import SourceError, SourceTimeoutError


if TYPE_CHECKING:
    from recipe_search.schemas import SearchFilters
    from recipe_search.sources.registry import SourceRegistration, SourceRegistry

logger = get_logger(__name__)
tracer = get_tracer(__name__)


@dataclass(frozen=True, slots=True)
class Candidate:
    """One recipe with the source it came from and that source's weight."""

    recipe: Recipe
    source_name: str
    source_weight: float


@dataclass(frozen=True, slots=True)
class FanOutResult:
    """Merged candidates plus one outcome per source, both in registration order."""

    candidates: tuple[Candidate, ...] = ()
    outcomes: tuple[SourceOutcome, ...] = ()

    @property
    def recipes(self) -> list[Recipe]:
        """Candidate recipes in merge order."""
        return [c.recipe for c in self.candidates]


class FanOutCoordinator:
    """Dispatches a query to all registered sources concurrently."""

    def __init__(self, registry: SourceRegistry) -> None:
        """Initialize the coordinator.

        Args:
            registry: Sources to query, in merge order.
        """
        self._registry = registry

    async def gather(self, query: str, filters: SearchFilters) -> FanOutResult:
        """Query every source and merge what comes back.

        Candidates are ordered by source registration order, then by each
        source's response order. Sources that fail or time out contribute
        nothing and are reported in ``outcomes``; nothing is raised.

        Raises:
            asyncio.CancelledError: If the caller cancels the search. All
                in-flight source tasks are cancelled and awaited first, and
                their results are discarded.
        """
        registrations = list(self._registry)
        if not registrations:
            logger.warning("No recipe sources registered")
            return FanOutResult()

        with tracer.start_as_current_span("recipe_search.fan_out") as span:
            span.set_attribute("recipe_search.source_count", len(registrations))

            tasks = [
                asyncio.create_task(
                    self._search_source(registration, query, filters),
                    name=f"recipe-source:{registration.name}",
                )
                for registration in registrations
            ]
            try:
                settled = await asyncio.gather(*tasks, return_exceptions=True)
            except asyncio.CancelledError:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                logger.info(
                    "Search cancelled, discarded in-flight source results",
                    sources=len(tasks),
                )
                raise

            candidates: list[Candidate] = []
            outcomes: list[SourceOutcome] = []
            for registration, settled_result in zip(registrations, settled, strict=True):
                if isinstance(settled_result, BaseException):
                    logger.opt(exception=settled_result).error(
                        "Recipe source task failed unexpectedly",
                        source=registration.name,
                    )
                    outcomes.append(
                        SourceOutcome(
                            source=registration.name,
                            status=SourceStatus.ERROR,
                            error=str(settled_result) or type(settled_result).__name__,
                        )
                    )
                    continue
                source_candidates, outcome = settled_result
                candidates.extend(source_candidates)
                outcomes.append(outcome)

            failed = [o.source for o in outcomes if not o.succeeded]
            span.set_attribute("recipe_search.candidate_count", len(candidates))
            span.set_attribute("recipe_search.failed_sources", failed)

        logger.info(
            "Fan-out complete",
            candidates=len(candidates),
            sources=len(outcomes),
            failed_sources=failed,
        )
        return FanOutResult(candidates=tuple(candidates), outcomes=tuple(outcomes))

    async def fetch(
        self,
        registration: SourceRegistration,
        query: str,
        filters: SearchFilters,
    ) -> list[Recipe]:
        """Query a single source under its timeout.

        Returns:
            The source's recipes, each a private copy stamped with the
            source's name and weight.

        Raises:
            SourceTimeoutError: If the source exceeds its timeout.
            SourceError: If the adapter raises, cancels itself or returns
                something other than a list. Malformed items are skipped.
        """
        try:
            raw = await asyncio.wait_for(
                registration.adapter.search(query, filters),
                timeout=registration.timeout,
            )
        except TimeoutError as e:
            raise SourceTimeoutError(registration.name, registration.timeout) from e
        except SourceError:
            raise
        except asyncio.CancelledError as e:
            # Only a cancellation of this task belongs to the caller
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            msg = f"{registration.name} search was cancelled by the adapter"
            raise SourceError(msg, registration.name) from e
        except Exception as e:
            msg = f"{registration.name} search failed: {e}"
            raise SourceError(msg, registration.name) from e

        return _stamp(registration, raw)

    async def _search_source(
        self,
        registration: SourceRegistration,
        query: str,
        filters: SearchFilters,
    ) -> tuple[list[Candidate], SourceOutcome]:
        """Run one source, absorbing its failure into an outcome."""
        started = time.perf_counter()
        with tracer.start_as_current_span("recipe_search.source") as span:
            span.set_attribute("recipe_search.source", registration.name)
            try:
                recipes = await self.fetch(registration, query, filters)
            except SourceError as e:
                status = (
                    SourceStatus.TIMEOUT
                    if isinstance(e, SourceTimeoutError)
                    else SourceStatus.ERROR
                )
                span.set_attribute("recipe_search.source_status", str(status))
                logger.warning(
                    "Recipe source failed, continuing without it",
                    source=registration.name,
                    status=str(status),
                    error=str(e),
                )
                return [], SourceOutcome(
                    source=registration.name,
                    status=status,
                    elapsed_ms=_elapsed_ms(started),
                    error=str(e),
                )

            span.set_attribute("recipe_search.source_status", str(SourceStatus.OK))
            span.set_attribute("recipe_search.candidate_count", len(recipes))

        outcome = SourceOutcome(
            source=registration.name,
            status=SourceStatus.OK,
            candidates=len(recipes),
            elapsed_ms=_elapsed_ms(started),
        )
        logger.debug(
            "Recipe source answered",
            source=registration.name,
            candidates=outcome.candidates,
            elapsed_ms=outcome.elapsed_ms,
        )
        candidates = [
            Candidate(
                recipe=recipe,
                source_name=registration.name,
                source_weight=registration.weight,
            )
            for recipe in recipes
        ]
        return candidates, outcome


def _stamp(registration: SourceRegistration, raw: Any) -> list[Recipe]:
    """Validate an adapter response and stamp source metadata on each recipe.

    Items that fail validation are dropped; their siblings are kept.
    """
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        msg = (
            f"{registration.name} returned {type(raw).__name__} "
            "instead of a list of recipes"
        )
        raise SourceError(msg, registration.name)

    recipes: list[Recipe] = []
    for position, item in enumerate(raw):
        try:
            recipe = (
                item.model_copy(deep=True)
                if isinstance(item, Recipe)
                else Recipe.model_validate(item)
            )
        except ValidationError as e:
            logger.warning(
                "Skipping malformed recipe",
                source=registration.name,
                position=position,
                errors=e.error_count(),
            )
            continue

        update: dict[str, Any] = {
            "source_name": registration.name,
            "source_weight": registration.weight,
            "relevance_score": None,
        }
        if not recipe.id:
            update["id"] = f"{registration.name}-{position}"
        recipes.append(recipe.model_copy(update=update))
    return recipes


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
