"""Source adapter protocol definition.

Defines the single capability the aggregation core depends on. Provider
specific work (auth, HTTP, response parsing) lives behind it, one
implementation per provider.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from recipe_search.schemas import Recipe, SearchFilters


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for recipe source implementations.

    Attributes:
        name: Stable provider name, used for logging, the search report and
            settings overrides (``sources.overrides.<name>``).
    """

    name: str

    async def search(
        self,
        query: str,
        filters: SearchFilters,
    ) -> Sequence[Recipe | Mapping[str, Any]]:
        """Search the provider.

        Args:
            query: Free-text query.
            filters: Structured filters; adapters apply what their provider
                supports and ignore the rest.

        Returns:
            Candidates in the provider's response order, either as ``Recipe``
            instances or as mappings in the shared recipe shape.

        Raises:
            Exception: Any failure. The coordinator absorbs it and treats the
                source as empty for the round.
        """
        ...
