"""Exceptions for the recipe search pipeline.

Source failures are absorbed at the fan-out boundary, pipeline defects are
absorbed by the fallback path; only ``SearchUnavailableError`` reaches the
caller.
"""

from __future__ import annotations


class RecipeSearchError(Exception):
    """Base exception for recipe search errors."""


class SourceError(RecipeSearchError):
    """Raised when a source adapter fails or returns malformed data.

    Never escapes the fan-out coordinator; the source contributes no
    candidates for that round.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        super().__init__(message)


class SourceTimeoutError(SourceError):
    """Raised when a source adapter exceeds its timeout."""

    def __init__(self, source: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"{source} search timed out after {timeout:g}s", source)


class PipelineError(RecipeSearchError):
    """Raised when merge, dedup, scoring or ranking hits an internal defect.

    Triggers the single-source fallback path.
    """


class SearchUnavailableError(RecipeSearchError):
    """Raised when the fallback path fails too.

    The only search error surfaced to callers; safe to retry.
    """

    retryable = True

    def __init__(
        self,
        message: str = "Recipe search is temporarily unavailable, please try again",
    ) -> None:
        super().__init__(message)
