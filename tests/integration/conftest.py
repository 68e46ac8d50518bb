"""Integration test configuration.

Integration tests run the whole pipeline against real settings loaded from
``config/environments/test/``.
"""

from __future__ import annotations

import pytest

from recipe_search.core.config import Settings


@pytest.fixture
def app_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings exactly as the test environment configures them."""
    monkeypatch.setenv("APP_ENV", "test")
    return Settings()
