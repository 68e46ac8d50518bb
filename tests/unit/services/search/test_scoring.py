"""Unit tests for relevance scoring."""

from __future__ import annotations

import pytest

from recipe_search.schemas import NutritionFacts, Recipe, SearchFilters
from recipe_search.services.search.constants import PLACEHOLDER_IMAGE_URL
from recipe_search.services.search.scoring import (
    filter_bonus,
    long_cook_penalty,
    quality_score,
    score_candidates,
    score_recipe,
    significant_words,
    text_relevance,
)
from tests.factories.recipe import RecipeFactory


pytestmark = pytest.mark.unit


class TestSignificantWords:
    """Tests for query word extraction."""

    def test_drops_short_words_and_lowercases(self) -> None:
        """Words under three characters do not count."""
        assert significant_words("A pan of Rice") == ["pan", "rice"]

    def test_blank_query(self) -> None:
        """A blank query has no words."""
        assert significant_words("   ") == []


class TestTextRelevance:
    """Tests for text_relevance."""

    def test_leading_word_and_repeats(self) -> None:
        """Match, leading bonus and one repeat."""
        assert text_relevance("Chicken chicken soup", ["chicken"]) == pytest.approx(1.7)

    def test_averages_over_query_words(self) -> None:
        """Unmatched words still count in the denominator."""
        assert text_relevance("beef stew", ["stew", "pork"]) == pytest.approx(0.5)

    def test_substring_match(self) -> None:
        """Matching is by substring, not whole word."""
        assert text_relevance("Stir-fried noodles", ["fried"]) == pytest.approx(1.0)

    def test_no_words_or_text(self) -> None:
        """Nothing to match scores zero."""
        assert text_relevance("beef stew", []) == 0.0
        assert text_relevance("", ["beef"]) == 0.0


class TestFilterBonus:
    """Tests for filter_bonus."""

    def test_all_filters_matched(self) -> None:
        """Diet, intolerances, ready time and cuisine all add up."""
        recipe = Recipe(
            title="Risotto",
            is_vegetarian=True,
            is_gluten_free=True,
            is_dairy_free=True,
            ready_in_minutes=20,
            cuisines=["Italian"],
        )
        filters = SearchFilters(
            diet="vegetarian",
            intolerances="gluten,dairy",
            max_ready_time=30,
            cuisine="ital",
        )

        assert filter_bonus(recipe, filters) == pytest.approx(5 + 3 + 3 + 3 + 4)

    def test_vegan_diet(self) -> None:
        """Vegan recipes match a vegan filter."""
        recipe = Recipe(title="Tofu Bowl", is_vegan=True)

        assert filter_bonus(recipe, SearchFilters(diet="Vegan")) == pytest.approx(5)

    def test_unmatched_filters_add_nothing(self) -> None:
        """Filters the recipe does not satisfy give no bonus."""
        recipe = Recipe(title="Steak", ready_in_minutes=45, cuisines=["American"])
        filters = SearchFilters(
            diet="vegetarian",
            intolerances=["gluten"],
            max_ready_time=30,
            cuisine="thai",
        )

        assert filter_bonus(recipe, filters) == 0.0

    def test_unknown_ready_time_gets_no_bonus(self) -> None:
        """A recipe without a ready time cannot match a time limit."""
        recipe = Recipe(title="Mystery Dish")

        assert filter_bonus(recipe, SearchFilters(max_ready_time=30)) == 0.0


class TestQualityScore:
    """Tests for quality_score."""

    def test_complete_recipe(self) -> None:
        """Every quality signal present."""
        recipe = Recipe(
            title="Lasagna",
            image="https://img.example.com/lasagna.jpg",
            nutrition=NutritionFacts(calories=300),
            instructions=["Layer", "Bake"],
            ingredients=["pasta", "cheese"],
            servings=4,
            ready_in_minutes=30,
        )

        assert quality_score(recipe) == pytest.approx(7.0)

    def test_placeholder_image_does_not_count(self) -> None:
        """The provider placeholder image is not a real image."""
        recipe = Recipe(title="Lasagna", image=PLACEHOLDER_IMAGE_URL)

        assert quality_score(recipe) == 0.0

    def test_implausible_servings_and_time(self) -> None:
        """Out-of-range servings and ready time give nothing."""
        recipe = Recipe(title="Feast", servings=40, ready_in_minutes=2)

        assert quality_score(recipe) == 0.0

    def test_zero_calories_does_not_count(self) -> None:
        """Nutrition without calories is not a signal."""
        recipe = Recipe(title="Water", nutrition=NutritionFacts())

        assert quality_score(recipe) == 0.0


class TestLongCookPenalty:
    """Tests for long_cook_penalty."""

    def test_penalizes_long_recipes_without_time_limit(self) -> None:
        """Over two hours costs five points."""
        recipe = Recipe(title="Brisket", ready_in_minutes=150)

        assert long_cook_penalty(recipe, SearchFilters()) == 5.0

    def test_no_penalty_when_time_limit_set(self) -> None:
        """An explicit time limit is handled by the filter instead."""
        recipe = Recipe(title="Brisket", ready_in_minutes=150)

        assert long_cook_penalty(recipe, SearchFilters(max_ready_time=200)) == 0.0

    def test_threshold_is_exclusive(self) -> None:
        """Exactly two hours is not penalized."""
        recipe = Recipe(title="Roast", ready_in_minutes=120)

        assert long_cook_penalty(recipe, SearchFilters()) == 0.0


class TestScoreRecipe:
    """Tests for score_recipe and score_candidates."""

    def test_source_weight_and_title(self) -> None:
        """Source trust plus weighted title relevance."""
        recipe = Recipe(title="Chicken Rice Bowl", source_weight=1.0)

        score = score_recipe(recipe, ["chicken", "rice"], SearchFilters())

        # 10 x 1.0 + 30 x (1 + 0.5 + 1) / 2
        assert score == pytest.approx(47.5)

    def test_summary_and_ingredients(self) -> None:
        """Summary and ingredients carry their own weights."""
        recipe = Recipe(
            title="Weeknight Bowl",
            summary="Fried rice with egg",
            ingredients=["rice", "egg"],
            source_weight=0.0,
        )

        score = score_recipe(recipe, ["rice"], SearchFilters())

        # summary: 15 x 1; ingredients "rice egg": 10 x 1.5; ingredients bonus: 1
        assert score == pytest.approx(15 + 15 + 1)

    def test_score_is_floored_at_zero(self) -> None:
        """Penalties never push the score below zero."""
        recipe = Recipe(title="Slow Roast", source_weight=0.0, ready_in_minutes=200)

        assert score_recipe(recipe, ["chicken"], SearchFilters()) == 0.0

    def test_score_candidates_sets_scores_in_input_order(self) -> None:
        """Every recipe gets a score and order is preserved."""
        weak = Recipe(title="Beef Stew", source_weight=0.5)
        strong = Recipe(title="Chicken Curry", source_weight=1.0)

        result = score_candidates([weak, strong], "chicken", SearchFilters())

        assert result == [weak, strong]
        assert weak.relevance_score == pytest.approx(5.0)
        assert strong.relevance_score == pytest.approx(10 + 45)

    def test_scoring_is_deterministic(self) -> None:
        """Identical inputs always score identically."""
        recipe = Recipe(title="Chicken Soup", summary="Chicken broth", source_weight=0.7)
        filters = SearchFilters(max_ready_time=60)
        words = significant_words("chicken soup")

        assert score_recipe(recipe, words, filters) == score_recipe(
            recipe, words, filters
        )

    def test_generated_recipes_never_score_negative(self) -> None:
        """Across generated recipes and ready times, scores stay >= 0."""
        recipes = [
            RecipeFactory.build(source_weight=0.0, ready_in_minutes=minutes)
            for minutes in range(0, 600, 15)
        ]
        filters = SearchFilters()

        scored = score_candidates(recipes, "chicken rice", filters)

        assert all(r.relevance_score is not None for r in scored)
        assert all(r.relevance_score >= 0.0 for r in scored)
