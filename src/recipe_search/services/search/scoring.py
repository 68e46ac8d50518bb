"""Multi-factor relevance scoring.

score = source trust
      + 30 x title relevance + 15 x summary relevance + 10 x ingredient relevance
      + filter-match bonus + quality heuristic - long-cook penalty

floored at zero. Scoring is a pure function of the recipe, the query and the
filters, so identical inputs always rank identically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_search.schemas import Diet, Intolerance
from recipe_search.services.search.constants import (
    CALORIES_BONUS,
    CUISINE_MATCH_BONUS,
    DIET_MATCH_BONUS,
    IMAGE_BONUS,
    INGREDIENT_RELEVANCE_WEIGHT,
    INGREDIENTS_BONUS,
    INSTRUCTIONS_BONUS,
    INTOLERANCE_MATCH_BONUS,
    LEADING_WORD_BONUS,
    LONG_COOK_PENALTY,
    LONG_COOK_THRESHOLD_MINUTES,
    MAX_REASONABLE_READY_MINUTES,
    MAX_REASONABLE_SERVINGS,
    MIN_QUERY_WORD_LENGTH,
    MIN_REASONABLE_READY_MINUTES,
    MIN_REASONABLE_SERVINGS,
    PLACEHOLDER_IMAGE_URL,
    READY_TIME_BONUS,
    READY_TIME_MATCH_BONUS,
    REPEAT_OCCURRENCE_BONUS,
    SERVINGS_BONUS,
    SOURCE_WEIGHT_MULTIPLIER,
    SUMMARY_RELEVANCE_WEIGHT,
    TITLE_RELEVANCE_WEIGHT,
    WORD_MATCH_SCORE,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_search.schemas import Recipe, SearchFilters


def significant_words(query: str) -> list[str]:
    """Lowercase query words long enough to count toward relevance."""
    return [w for w in query.lower().split() if len(w) >= MIN_QUERY_WORD_LENGTH]


def text_relevance(text: str, query_words: Sequence[str]) -> float:
    """Score how well ``text`` matches the query words.

    Per word found (case-insensitive substring): +1, +0.5 if the text starts
    with it, +0.2 per extra occurrence. The sum is divided by the number of
    query words.
    """
    if not text or not query_words:
        return 0.0

    text_lower = text.lower()
    score = 0.0
    for word in query_words:
        if word not in text_lower:
            continue
        score += WORD_MATCH_SCORE
        if text_lower.startswith(word):
            score += LEADING_WORD_BONUS
        score += (text_lower.count(word) - 1) * REPEAT_OCCURRENCE_BONUS

    return score / len(query_words)


def filter_bonus(recipe: Recipe, filters: SearchFilters) -> float:
    """Reward recipes that satisfy the requested filters."""
    bonus = 0.0

    if filters.diet == Diet.VEGETARIAN and recipe.is_vegetarian:
        bonus += DIET_MATCH_BONUS
    if filters.diet == Diet.VEGAN and recipe.is_vegan:
        bonus += DIET_MATCH_BONUS

    if Intolerance.GLUTEN in filters.intolerances and recipe.is_gluten_free:
        bonus += INTOLERANCE_MATCH_BONUS
    if Intolerance.DAIRY in filters.intolerances and recipe.is_dairy_free:
        bonus += INTOLERANCE_MATCH_BONUS

    if (
        filters.max_ready_time is not None
        and recipe.ready_in_minutes is not None
        and recipe.ready_in_minutes <= filters.max_ready_time
    ):
        bonus += READY_TIME_MATCH_BONUS

    if filters.cuisine:
        wanted = filters.cuisine.lower()
        if any(wanted in cuisine.lower() for cuisine in recipe.cuisines):
            bonus += CUISINE_MATCH_BONUS

    return bonus


def quality_score(recipe: Recipe) -> float:
    """Reward complete, plausible recipe records."""
    score = 0.0

    if recipe.image and recipe.image != PLACEHOLDER_IMAGE_URL:
        score += IMAGE_BONUS
    if recipe.nutrition is not None and recipe.nutrition.calories > 0:
        score += CALORIES_BONUS
    if recipe.instructions:
        score += INSTRUCTIONS_BONUS
    if recipe.ingredients:
        score += INGREDIENTS_BONUS
    if (
        recipe.servings is not None
        and MIN_REASONABLE_SERVINGS <= recipe.servings <= MAX_REASONABLE_SERVINGS
    ):
        score += SERVINGS_BONUS
    if (
        recipe.ready_in_minutes is not None
        and MIN_REASONABLE_READY_MINUTES
        <= recipe.ready_in_minutes
        <= MAX_REASONABLE_READY_MINUTES
    ):
        score += READY_TIME_BONUS

    return score


def long_cook_penalty(recipe: Recipe, filters: SearchFilters) -> float:
    """Penalty for very long recipes when the caller set no time limit."""
    if (
        filters.max_ready_time is None
        and recipe.ready_in_minutes is not None
        and recipe.ready_in_minutes > LONG_COOK_THRESHOLD_MINUTES
    ):
        return LONG_COOK_PENALTY
    return 0.0


def score_recipe(
    recipe: Recipe,
    query_words: Sequence[str],
    filters: SearchFilters,
) -> float:
    """Compute the relevance score of one recipe (never negative)."""
    score = recipe.source_weight * SOURCE_WEIGHT_MULTIPLIER
    score += text_relevance(recipe.title, query_words) * TITLE_RELEVANCE_WEIGHT
    score += text_relevance(recipe.summary, query_words) * SUMMARY_RELEVANCE_WEIGHT
    score += (
        text_relevance(" ".join(recipe.ingredients), query_words)
        * INGREDIENT_RELEVANCE_WEIGHT
    )
    score += filter_bonus(recipe, filters)
    score += quality_score(recipe)
    score -= long_cook_penalty(recipe, filters)
    return max(0.0, score)


def score_candidates(
    recipes: Sequence[Recipe],
    query: str,
    filters: SearchFilters,
) -> list[Recipe]:
    """Set ``relevance_score`` on every recipe and return them in input order."""
    query_words = significant_words(query)
    for recipe in recipes:
        recipe.relevance_score = score_recipe(recipe, query_words, filters)
    return list(recipes)
