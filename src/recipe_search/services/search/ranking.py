"""Final ordering of scored recipes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_search.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_search.schemas import Recipe

logger = get_logger(__name__)


def rank(recipes: Sequence[Recipe]) -> list[Recipe]:
    """Sort by relevance score, highest first.

    The sort is stable, so recipes with equal scores keep their
    deduplicated (and therefore source registration) order.
    """
    return sorted(recipes, key=_relevance, reverse=True)


def log_top_results(recipes: Sequence[Recipe], count: int = 3) -> None:
    """Log the head of a ranked list for debugging relevance."""
    for position, recipe in enumerate(recipes[:count], start=1):
        logger.debug(
            "Top search result",
            position=position,
            title=recipe.title,
            score=round(_relevance(recipe), 2),
            source=recipe.source_name,
        )


def _relevance(recipe: Recipe) -> float:
    return recipe.relevance_score if recipe.relevance_score is not None else 0.0
