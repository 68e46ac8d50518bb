"""In-memory recipe source.

Serves a fixed catalogue, e.g. an offline set of house recipes shipped as
JSON, filtered the way a provider would filter it. Also the simplest
``SourceAdapter`` to wire up in tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from recipe_search.observability.logging import get_logger
from recipe_search.schemas import Diet, Intolerance, Recipe


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from recipe_search.schemas import SearchFilters

logger = get_logger(__name__)


class StaticSourceAdapter:
    """Source adapter over a fixed list of recipes."""

    def __init__(
        self,
        name: str,
        recipes: Iterable[Recipe | Mapping[str, Any]],
        *,
        apply_filters: bool = True,
    ) -> None:
        """Initialize the adapter.

        Args:
            name: Source name.
            recipes: Catalogue, in the order results should be returned.
            apply_filters: When False, every recipe is returned for every
                query (useful for deterministic fixtures).
        """
        self.name = name
        self.apply_filters = apply_filters
        self._recipes: tuple[Recipe, ...] = tuple(
            r if isinstance(r, Recipe) else Recipe.model_validate(r) for r in recipes
        )

    @classmethod
    def from_json_file(
        cls,
        name: str,
        path: str | Path,
        *,
        apply_filters: bool = True,
    ) -> StaticSourceAdapter:
        """Load a catalogue from a JSON array of recipe objects.

        A missing or unreadable file yields an empty catalogue.
        """
        file_path = Path(path)
        if not file_path.exists():
            logger.warning("Recipe catalogue not found", source=name, path=str(path))
            return cls(name, [], apply_filters=apply_filters)

        try:
            data = orjson.loads(file_path.read_bytes())
        except orjson.JSONDecodeError:
            logger.error("Error decoding recipe catalogue", source=name, path=str(path))
            return cls(name, [], apply_filters=apply_filters)

        if not isinstance(data, list):
            logger.error(
                "Recipe catalogue must be a JSON array", source=name, path=str(path)
            )
            return cls(name, [], apply_filters=apply_filters)

        recipes: list[Recipe] = []
        for index, item in enumerate(data):
            try:
                recipes.append(Recipe.model_validate(item))
            except ValidationError:
                logger.warning(
                    "Skipping invalid catalogue entry", source=name, index=index
                )
        logger.info("Loaded recipe catalogue", source=name, recipes=len(recipes))
        return cls(name, recipes, apply_filters=apply_filters)

    async def search(self, query: str, filters: SearchFilters) -> list[Recipe]:
        """Return the catalogue entries matching the query and filters."""
        if not self.apply_filters:
            return list(self._recipes)
        return [r for r in self._recipes if self._matches(r, query, filters)]

    def __len__(self) -> int:
        return len(self._recipes)

    @staticmethod
    def _matches_query(recipe: Recipe, query: str) -> bool:
        query_lower = query.strip().lower()
        if not query_lower or query_lower in recipe.title.lower():
            return True
        # Also check ingredients, cuisines and dish types
        haystacks = (*recipe.ingredients, *recipe.cuisines, *recipe.dish_types)
        return any(query_lower in h.lower() for h in haystacks)

    @classmethod
    def _matches(cls, recipe: Recipe, query: str, filters: SearchFilters) -> bool:
        if not cls._matches_query(recipe, query):
            return False

        if (
            filters.max_calories is not None
            and recipe.nutrition is not None
            and recipe.nutrition.calories > filters.max_calories
        ):
            return False

        if filters.diet == Diet.VEGETARIAN and not recipe.is_vegetarian:
            return False
        if filters.diet == Diet.VEGAN and not recipe.is_vegan:
            return False

        if Intolerance.GLUTEN in filters.intolerances and not recipe.is_gluten_free:
            return False
        if Intolerance.DAIRY in filters.intolerances and not recipe.is_dairy_free:
            return False

        if (
            filters.max_ready_time is not None
            and recipe.ready_in_minutes is not None
            and recipe.ready_in_minutes > filters.max_ready_time
        ):
            return False

        if filters.meal_type and recipe.dish_types:
            meal_type = filters.meal_type.lower()
            if meal_type not in (d.lower() for d in recipe.dish_types):
                return False

        return True
