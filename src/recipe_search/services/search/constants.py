"""Constants for the recipe search pipeline.

Contains:
- Deduplication threshold
- Relevance scoring weights and bonuses
- Quality heuristic bounds

The threshold and weights were tuned empirically; ranking tests are derived
from these exact values.
"""

from __future__ import annotations

from typing import Final


# =============================================================================
# Deduplication
# =============================================================================

TITLE_SIMILARITY_THRESHOLD: Final[float] = 0.8


# =============================================================================
# Relevance Weights
# =============================================================================

SOURCE_WEIGHT_MULTIPLIER: Final[float] = 10.0
TITLE_RELEVANCE_WEIGHT: Final[float] = 30.0
SUMMARY_RELEVANCE_WEIGHT: Final[float] = 15.0
INGREDIENT_RELEVANCE_WEIGHT: Final[float] = 10.0

# Text relevance
MIN_QUERY_WORD_LENGTH: Final[int] = 3
WORD_MATCH_SCORE: Final[float] = 1.0
LEADING_WORD_BONUS: Final[float] = 0.5
REPEAT_OCCURRENCE_BONUS: Final[float] = 0.2


# =============================================================================
# Filter-Match Bonuses
# =============================================================================

DIET_MATCH_BONUS: Final[float] = 5.0
INTOLERANCE_MATCH_BONUS: Final[float] = 3.0
READY_TIME_MATCH_BONUS: Final[float] = 3.0
CUISINE_MATCH_BONUS: Final[float] = 4.0


# =============================================================================
# Quality Heuristic
# =============================================================================

PLACEHOLDER_IMAGE_URL: Final[str] = "https://placeholder-image-url.jpg"

IMAGE_BONUS: Final[float] = 2.0
CALORIES_BONUS: Final[float] = 1.0
INSTRUCTIONS_BONUS: Final[float] = 2.0
INGREDIENTS_BONUS: Final[float] = 1.0
SERVINGS_BONUS: Final[float] = 0.5
READY_TIME_BONUS: Final[float] = 0.5

MIN_REASONABLE_SERVINGS: Final[int] = 1
MAX_REASONABLE_SERVINGS: Final[int] = 12
MIN_REASONABLE_READY_MINUTES: Final[int] = 5
MAX_REASONABLE_READY_MINUTES: Final[int] = 180


# =============================================================================
# Long-Cook Penalty
# =============================================================================

LONG_COOK_THRESHOLD_MINUTES: Final[int] = 120
LONG_COOK_PENALTY: Final[float] = 5.0
