"""Recipe source adapters and their registry.

The aggregation core only talks to ``SourceAdapter``; concrete provider
integrations live outside this package and are registered at start-up.
"""

from recipe_search.sources.protocol import SourceAdapter
from recipe_search.sources.registry import SourceRegistration, SourceRegistry
from recipe_search.sources.static import StaticSourceAdapter


__all__ = [
    "SourceAdapter",
    "SourceRegistration",
    "SourceRegistry",
    "StaticSourceAdapter",
]
