"""Outlier detection and deterministic ranking of normalized results."""

from collections.abc import Iterable
from dataclasses import replace

from food_search.domain.foods import NormalizedFoodResult, OutlierVerdict

SIMPLE_QUERY_MAX_LENGTH = 12

DISH_TERMS = (
    "mayo",
    "salad",
    "brioche",
    "sandwich",
    "burger",
    "wrap",
    "pizza",
    "cake",
    "fried",
    "battered",
    "casserole",
)
WHOLE_FOOD_TERMS = ("raw", "fresh", "whole")

EXACT_MATCH_SCORE = 100
PREFIX_MATCH_SCORE = 60
SUBSTRING_MATCH_SCORE = 25
DISH_TERM_PENALTY = 30
MAX_DISH_PENALTY = 60
WHOLE_FOOD_BONUS = 10
OUTLIER_PENALTY = 80

SMALL_SERVING_MAX_CALORIES = 250
SMALL_SERVING_MAX_GRAMS = 80
MAX_CALORIES_PER_100G = 350
UNKNOWN_SERVING_MAX_CALORIES = 400


def is_simple_query(query: str) -> bool:
    """Return True for a single short token, e.g. ``"butter"``."""
    trimmed = query.strip()
    return 0 < len(trimmed) <= SIMPLE_QUERY_MAX_LENGTH and len(trimmed.split()) == 1


def detect_outlier(result: NormalizedFoodResult, query: str) -> OutlierVerdict:
    """Flag results too calorie-dense to be the plain ingredient searched for.

    Only simple queries are checked; multi-word queries already ask for a dish.
    """
    if not is_simple_query(query):
        return OutlierVerdict(is_outlier=False)

    calories = result.calories
    grams = result.serving_grams
    if (
        calories is not None
        and calories > SMALL_SERVING_MAX_CALORIES
        and grams is not None
        and grams <= SMALL_SERVING_MAX_GRAMS
    ):
        return OutlierVerdict(True, "High calories for small serving")
    if (
        result.calories_per_100g is not None
        and result.calories_per_100g > MAX_CALORIES_PER_100G
    ):
        return OutlierVerdict(True, "Dense calories per 100g")
    if (
        grams is None
        and calories is not None
        and calories > UNKNOWN_SERVING_MAX_CALORIES
    ):
        return OutlierVerdict(True, "High calories, serving unknown")
    return OutlierVerdict(is_outlier=False)


def score_result(result: NormalizedFoodResult, query: str, mode: str) -> int:
    """Score lexical match quality plus query-shape heuristics."""
    name = result.name.lower().strip()
    needle = query.lower().strip()

    score = 0
    if name == needle:
        score += EXACT_MATCH_SCORE
    elif name.startswith(needle):
        score += PREFIX_MATCH_SCORE
    elif needle in name:
        score += SUBSTRING_MATCH_SCORE

    if is_simple_query(query):
        dish_hits = sum(1 for term in DISH_TERMS if term in name)
        score -= min(dish_hits * DISH_TERM_PENALTY, MAX_DISH_PENALTY)

    if mode == "common":
        score += WHOLE_FOOD_BONUS * sum(1 for term in WHOLE_FOOD_TERMS if term in name)

    return score


def rank_results(
    results: Iterable[NormalizedFoodResult], query: str, mode: str
) -> list[NormalizedFoodResult]:
    """Flag outliers and sort results best-first.

    Outliers always sort last. Within the same outlier status results are
    ordered by score, then by whether calories are known, then by name.
    """
    scored: list[tuple[int, NormalizedFoodResult]] = []
    for result in results:
        verdict = detect_outlier(result, query)
        flagged = replace(
            result,
            is_outlier=verdict.is_outlier,
            outlier_reason=verdict.reason if verdict.is_outlier else None,
        )
        score = score_result(flagged, query, mode)
        if verdict.is_outlier:
            score -= OUTLIER_PENALTY
        scored.append((score, flagged))

    scored.sort(
        key=lambda item: (
            item[1].is_outlier,
            -item[0],
            item[1].calories is None,
            item[1].name.casefold(),
            item[1].provider.value,
            item[1].id,
        )
    )
    return [result for _, result in scored]
