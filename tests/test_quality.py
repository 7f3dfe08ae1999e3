"""Tests for outlier detection and ranking."""

import pytest

from food_search.domain.foods import Provider
from food_search.services.quality import (
    detect_outlier,
    is_simple_query,
    rank_results,
    score_result,
)
from tests.conftest import make_result


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("butter", True),
        ("  egg  ", True),
        ("twelvechars1", True),
        ("thirteenchars", False),
        ("peanut butter", False),
        ("", False),
        ("   ", False),
    ],
)
def test_is_simple_query(query: str, expected: bool) -> None:
    assert is_simple_query(query) is expected


def test_dense_small_serving_is_outlier() -> None:
    butter = make_result("Butter", calories=100, serving_grams=14)

    verdict = detect_outlier(butter, "butter")

    assert verdict.is_outlier is True
    assert verdict.reason


def test_outlier_rules() -> None:
    small_serving = make_result("Cookie", calories=300, serving_grams=60)
    dense = make_result("Nuts", calories=200, serving_grams=200, calories_per_100g=600)
    unknown_serving = make_result("Pie", calories=450)
    plain = make_result("Apple", calories=95, serving_grams=182)

    assert detect_outlier(small_serving, "cookie").reason == (
        "High calories for small serving"
    )
    assert detect_outlier(dense, "nuts").reason == "Dense calories per 100g"
    assert detect_outlier(unknown_serving, "pie").reason == (
        "High calories, serving unknown"
    )
    assert detect_outlier(plain, "apple").is_outlier is False


@pytest.mark.parametrize("query", ["peanut butter", "supercalifragilistic"])
def test_non_simple_queries_never_flag_outliers(query: str) -> None:
    results = [
        make_result("Butter", calories=100, serving_grams=14),
        make_result("Lard", calories=900, calories_per_100g=900),
        make_result("Cake", calories=500),
    ]

    ranked = rank_results(results, query, "common")

    assert all(result.is_outlier is False for result in ranked)
    assert all(result.outlier_reason is None for result in ranked)


def test_score_lexical_tiers() -> None:
    assert score_result(make_result("Egg"), "egg", "branded") == 100
    assert score_result(make_result("Egg noodles"), "egg", "branded") == 60
    assert score_result(make_result("Scrambled egg"), "egg", "branded") == 25
    assert score_result(make_result("Omelette"), "egg", "branded") == 0


def test_score_dish_penalty_is_capped() -> None:
    one_term = make_result("Egg salad")
    many_terms = make_result("Egg salad sandwich on brioche")

    assert score_result(one_term, "egg", "branded") == 60 - 30
    assert score_result(many_terms, "egg", "branded") == 60 - 60


def test_score_dish_penalty_only_for_simple_queries() -> None:
    result = make_result("Egg salad sandwich")

    assert score_result(result, "egg salad", "branded") == 60


def test_score_whole_food_bonus_only_in_common_mode() -> None:
    result = make_result("Spinach, raw, fresh")

    assert score_result(result, "spinach", "common") == 60 + 20
    assert score_result(result, "spinach", "branded") == 60


def test_ranking_exact_then_prefix_then_outlier() -> None:
    results = [
        make_result("Chicken Salad Sandwich", calories=420, serving_grams=70),
        make_result("Chicken Breast", calories=165, serving_grams=100),
        make_result("Chicken", calories=143, serving_grams=100),
    ]

    ranked = rank_results(results, "chicken", "common")

    assert [result.name for result in ranked] == [
        "Chicken",
        "Chicken Breast",
        "Chicken Salad Sandwich",
    ]
    assert ranked[-1].is_outlier is True
    assert ranked[-1].outlier_reason == "High calories for small serving"
    assert ranked[0].outlier_reason is None


def test_outliers_sort_last_even_with_higher_scores() -> None:
    results = [
        make_result("Cheese", calories=400, serving_grams=100, calories_per_100g=400),
        make_result("Macaroni and cheese", calories=300, serving_grams=250),
    ]

    ranked = rank_results(results, "cheese", "common")

    assert [result.name for result in ranked] == ["Macaroni and cheese", "Cheese"]


def test_ties_prefer_known_calories_then_name() -> None:
    results = [
        make_result("Oat bar b"),
        make_result("oat bar a"),
        make_result("Oat bar c", calories=120, serving_grams=40),
    ]

    ranked = rank_results(results, "oat", "branded")

    assert [result.name for result in ranked] == ["Oat bar c", "oat bar a", "Oat bar b"]


def test_ranking_is_deterministic() -> None:
    results = [
        make_result("Rice", provider=Provider.OPEN_FOOD_FACTS, result_id="2"),
        make_result("Rice", provider=Provider.USDA, result_id="1"),
        make_result("Rice", provider=Provider.OPEN_FOOD_FACTS, result_id="1"),
        make_result("Rice pudding", calories=150, serving_grams=120),
    ]

    first = rank_results(results, "rice", "common")
    second = rank_results(list(reversed(results)), "rice", "common")

    assert first == second
    assert [(result.provider, result.id) for result in first[:3]] == [
        (Provider.OPEN_FOOD_FACTS, "1"),
        (Provider.OPEN_FOOD_FACTS, "2"),
        (Provider.USDA, "1"),
    ]
