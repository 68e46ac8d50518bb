"""Configuration module with YAML and environment variable support."""

from .settings import (
    SearchSettings,
    Settings,
    SourceOverrideSettings,
    SourcesSettings,
    get_settings,
)


__all__ = [
    "SearchSettings",
    "Settings",
    "SourceOverrideSettings",
    "SourcesSettings",
    "get_settings",
]
