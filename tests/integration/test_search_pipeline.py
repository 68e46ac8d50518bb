"""Integration tests for the full search pipeline.

Static catalogues stand in for the providers; everything else (settings,
registry, fan-out, dedup, scoring, ranking, fallback) is real.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import orjson
import pytest

from recipe_search import (
    RecipeSearchService,
    SearchUnavailableError,
    StaticSourceAdapter,
    search,
)
from recipe_search.schemas import SourceStatus
from tests.factories.sources import FakeSource


if TYPE_CHECKING:
    from pathlib import Path

    from recipe_search.core.config import Settings


pytestmark = pytest.mark.integration


SPOONACULAR = [
    {
        "id": 716429,
        "title": "Chicken Rice Bowl",
        "image": "https://img.spoonacular.com/716429.jpg",
        "readyInMinutes": 35,
        "servings": 2,
        "summary": "A quick chicken and rice bowl.",
        "ingredients": [{"name": "chicken"}, {"name": "rice"}, {"name": "soy sauce"}],
        "instructions": ["Cook rice", "Fry chicken", "Assemble"],
        "nutrition": {"calories": 610},
        "isDairyFree": True,
        "cuisines": ["Asian"],
        "dishTypes": ["lunch", "main course"],
    },
    {
        "id": 715538,
        "title": "Slow Braised Short Ribs",
        "readyInMinutes": 240,
        "servings": 6,
        "ingredients": ["beef short ribs", "red wine"],
        "dishTypes": ["main course"],
    },
]

TASTY = [
    {"id": "tasty-88", "title": "chicken rice bowl", "readyInMinutes": 30},
    {
        "id": "tasty-91",
        "title": "Lemon Chicken with Rice",
        "readyInMinutes": 40,
        "ingredients": ["chicken thighs", "rice", "lemon"],
        "dishTypes": ["main course"],
    },
    {"id": "tasty-95", "title": "Beef Tacos", "readyInMinutes": 25},
]


@pytest.fixture
def house_catalogue(tmp_path: Path) -> Path:
    """A house catalogue on disk."""
    path = tmp_path / "house.json"
    path.write_bytes(
        orjson.dumps(
            [
                {"title": "Chicken and Rice Casserole", "readyInMinutes": 50},
                {"title": "Vegetable Curry", "isVegetarian": True, "isVegan": True},
            ]
        )
    )
    return path


def _sources(house_catalogue: Path) -> list:
    # apply_filters=False: every source answers every query
    return [
        StaticSourceAdapter("spoonacular", SPOONACULAR, apply_filters=False),
        StaticSourceAdapter("tasty", TASTY, apply_filters=False),
        StaticSourceAdapter.from_json_file("house", house_catalogue, apply_filters=False),
    ]


class TestSearchPipeline:
    """End-to-end searches over static sources."""

    @pytest.mark.asyncio
    async def test_dedups_scores_and_ranks_across_sources(
        self, app_settings: Settings, house_catalogue: Path
    ) -> None:
        """The trusted source's copy wins and strong title matches rank first."""
        recipes = await search(
            "chicken rice", sources=_sources(house_catalogue), settings=app_settings
        )
        titles = [r.title for r in recipes]

        assert titles[0] == "Chicken Rice Bowl"
        assert recipes[0].source_name == "spoonacular"
        assert recipes[0].id == "716429"
        assert "chicken rice bowl" not in titles
        assert len(recipes) == 6
        assert titles.index("Chicken and Rice Casserole") < titles.index("Beef Tacos")
        scores = [r.relevance_score for r in recipes]
        assert scores == sorted(scores, reverse=True)
        assert all(score is not None and score >= 0 for score in scores)

    @pytest.mark.asyncio
    async def test_filtering_sources_apply_filters(
        self, app_settings: Settings
    ) -> None:
        """Adapters that filter only contribute matching recipes."""
        sources = [
            StaticSourceAdapter("spoonacular", SPOONACULAR),
            StaticSourceAdapter("tasty", TASTY),
        ]

        recipes = await search(
            "chicken",
            {"maxReadyTime": 45},
            sources=sources,
            settings=app_settings,
        )

        assert [r.title for r in recipes] == [
            "Chicken Rice Bowl",
            "Lemon Chicken with Rice",
        ]

    @pytest.mark.asyncio
    async def test_hanging_source_is_cut_off_by_its_timeout(
        self, app_settings: Settings, house_catalogue: Path
    ) -> None:
        """A hanging provider costs its timeout and nothing else."""
        service = RecipeSearchService.from_adapters(
            [*_sources(house_catalogue), FakeSource("hanging", delay=30)],
            app_settings,
        )

        started = time.perf_counter()
        result = await service.search_with_report("chicken rice")
        elapsed = time.perf_counter() - started

        assert elapsed < app_settings.sources.default_timeout + 1.0
        assert len(result.recipes) == 6
        assert result.failed_sources == ["hanging"]
        assert result.outcomes[-1].status == SourceStatus.TIMEOUT

    @pytest.mark.asyncio
    async def test_unavailable_when_every_path_fails(
        self, app_settings: Settings
    ) -> None:
        """Only a failed fallback surfaces an error."""
        service = RecipeSearchService.from_adapters(
            [FakeSource("spoonacular", error=RuntimeError("HTTP 503"))],
            app_settings,
        )

        # All sources failing is an empty result, not an error
        assert await service.search("chicken") == []

        service._coordinator.gather = _broken_gather  # type: ignore[method-assign]
        with pytest.raises(SearchUnavailableError):
            await service.search("chicken")


async def _broken_gather(*_args: object, **_kwargs: object) -> None:
    msg = "merge defect"
    raise RuntimeError(msg)
