"""Enumeration types for recipe search schemas."""

from __future__ import annotations

from enum import StrEnum


class Diet(StrEnum):
    """Diets a search can be restricted to."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"


class Intolerance(StrEnum):
    """Intolerances a search can exclude."""

    GLUTEN = "gluten"
    DAIRY = "dairy"


class SourceStatus(StrEnum):
    """How a single source behaved during one fan-out round."""

    OK = "ok"
    TIMEOUT = "timeout"
    ERROR = "error"
