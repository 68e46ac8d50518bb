"""Search query and search report schemas."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, NonNegativeInt, field_validator

from recipe_search.schemas.base import InboundSchema, OutboundSchema
from recipe_search.schemas.enums import Diet, Intolerance, SourceStatus
from recipe_search.schemas.recipe import Recipe


def parse_list(v: Any) -> Any:
    """Parse a comma-separated string (or list) into lowercase stripped values."""
    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    if isinstance(v, (list, tuple)):
        return [
            x.strip().lower() if isinstance(x, str) else x
            for x in v
            if not isinstance(x, str) or x.strip()
        ]
    return v


def blank_to_none(v: Any) -> Any:
    """Treat empty strings the same as an absent filter."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


OptionalInt = Annotated[NonNegativeInt | None, BeforeValidator(blank_to_none)]
OptionalStr = Annotated[str | None, BeforeValidator(blank_to_none)]


class SearchFilters(InboundSchema):
    """Structured filters accompanying a free-text query.

    Every filter is optional. String values coming from query strings
    (``"600"``, ``"gluten,dairy"``) are coerced.
    """

    diet: Annotated[Diet | None, BeforeValidator(blank_to_none)] = None
    intolerances: Annotated[list[Intolerance], BeforeValidator(parse_list)] = Field(
        default_factory=list
    )
    max_calories: OptionalInt = None
    max_carbs: OptionalInt = None
    max_sodium: OptionalInt = None
    cuisine: OptionalStr = None
    meal_type: OptionalStr = None
    max_ready_time: OptionalInt = None

    @field_validator("diet", mode="before")
    @classmethod
    def _lower_diet(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class SearchQuery(InboundSchema):
    """A free-text query plus structured filters."""

    query: str = ""
    filters: SearchFilters = Field(default_factory=SearchFilters)

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class SourceOutcome(OutboundSchema):
    """What one source contributed to one fan-out round."""

    source: str
    status: SourceStatus
    candidates: int = Field(default=0, ge=0)
    elapsed_ms: float = Field(default=0.0, ge=0.0)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """True when the source answered within its budget."""
        return self.status == SourceStatus.OK


class SearchResult(OutboundSchema):
    """Ranked recipes plus the per-source report for one search call."""

    recipes: list[Recipe] = Field(default_factory=list)
    outcomes: list[SourceOutcome] = Field(default_factory=list)
    used_fallback: bool = False

    @property
    def failed_sources(self) -> list[str]:
        """Names of the sources that timed out or errored."""
        return [o.source for o in self.outcomes if not o.succeeded]
