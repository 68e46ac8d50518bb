"""Near-duplicate detection across sources.

Two candidates are duplicates when their normalized titles have a normalized
Levenshtein similarity of at least ``TITLE_SIMILARITY_THRESHOLD``. The first
candidate seen in a cluster is its representative and is the one kept, so
the merge order coming out of the fan-out decides which provider's copy
survives.

Every candidate is compared against every representative kept so far
(quadratic in the candidate count, which is tens per search).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from recipe_search.observability.logging import get_logger
from recipe_search.services.search.constants import TITLE_SIMILARITY_THRESHOLD


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_search.schemas import Recipe

logger = get_logger(__name__)

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase, strip punctuation and collapse whitespace.

    >>> normalize_title("  Chicken   Soup!! ")
    'chicken soup'
    """
    lowered = _PUNCTUATION_RE.sub("", title.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    current[j - 1] + 1,  # insertion
                    previous[j] + 1,  # deletion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def title_similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]: ``1 - distance / max(len(a), len(b))``.

    An empty title is similar to nothing, including another empty title.
    """
    if not a or not b:
        return 0.0
    longest = max(len(a), len(b))
    return 1.0 - levenshtein_distance(a, b) / longest


def _could_match(a: str, b: str, threshold: float) -> bool:
    # The length gap is a lower bound on the edit distance
    longest = max(len(a), len(b))
    return 1.0 - abs(len(a) - len(b)) / longest >= threshold


def deduplicate(
    recipes: Sequence[Recipe],
    threshold: float = TITLE_SIMILARITY_THRESHOLD,
) -> list[Recipe]:
    """Drop near-duplicate recipes, keeping the first of each cluster.

    Args:
        recipes: Candidates in merge order.
        threshold: Similarity at or above which two titles are duplicates.

    Returns:
        The surviving recipes, in their original relative order.
    """
    # Ordered list, not a set: the first representative to match wins
    representatives: list[tuple[str, Recipe]] = []
    unique: list[Recipe] = []

    for recipe in recipes:
        normalized = normalize_title(recipe.title)
        if not normalized:
            unique.append(recipe)
            continue

        duplicate_of = next(
            (
                kept
                for kept_title, kept in representatives
                if _could_match(normalized, kept_title, threshold)
                and title_similarity(normalized, kept_title) >= threshold
            ),
            None,
        )
        if duplicate_of is not None:
            logger.debug(
                "Dropping duplicate recipe",
                title=recipe.title,
                source=recipe.source_name,
                kept_title=duplicate_of.title,
                kept_source=duplicate_of.source_name,
            )
            continue

        representatives.append((normalized, recipe))
        unique.append(recipe)

    if len(unique) < len(recipes):
        logger.debug(
            "Deduplicated candidates",
            before=len(recipes),
            after=len(unique),
        )
    return unique
