"""Shared test fixtures and configuration for the recipe search tests.

Settings are resolved against ``config/environments/test/``, so APP_ENV is
pinned before anything reads configuration.
"""

from __future__ import annotations

import os


os.environ.setdefault("APP_ENV", "test")

from collections.abc import Iterator  # noqa: E402

import pytest  # noqa: E402

from recipe_search.core.config import (  # noqa: E402
    SearchSettings,
    Settings,
    SourcesSettings,
)
from recipe_search.observability.logging import clear_context  # noqa: E402
from recipe_search.schemas import SearchFilters  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_log_context() -> Iterator[None]:
    """Keep bound logging context from leaking between tests."""
    clear_context()
    yield
    clear_context()


@pytest.fixture
def sources_settings() -> SourcesSettings:
    """Source defaults with a short timeout and no per-source overrides."""
    return SourcesSettings(default_weight=0.5, default_timeout=0.5)


@pytest.fixture
def settings(sources_settings: SourcesSettings) -> Settings:
    """Test settings with fast source timeouts and fallback enabled."""
    return Settings(
        sources=sources_settings,
        search=SearchSettings(fallback_enabled=True, log_top_results=3),
    )


@pytest.fixture
def no_filters() -> SearchFilters:
    """An empty filter set."""
    return SearchFilters()
