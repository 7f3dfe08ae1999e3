"""Tests for Open Food Facts normalization."""

import asyncio

from food_search.domain.foods import MacroSet, Provider
from food_search.services.open_food_facts import (
    UNKNOWN_ITEM_NAME,
    OpenFoodFactsProvider,
    normalize_off_product,
)
from tests.conftest import FakeOpenFoodFactsClient


def test_normalize_scales_per_100g_by_parenthetical_grams() -> None:
    product = {
        "code": "0123456789",
        "product_name": "Whole Wheat Bread",
        "brands": "Bakery Co",
        "serving_size": "1 slice (28 g)",
        "nutriments": {
            "energy-kcal_100g": 250,
            "proteins_100g": 10,
            "carbohydrates_100g": 40,
            "fat_100g": 5,
        },
    }

    result = normalize_off_product(product, "bread")

    assert result.id == "0123456789"
    assert result.provider is Provider.OPEN_FOOD_FACTS
    assert result.brand_name == "Bakery Co"
    assert result.serving_grams == 28
    assert result.per_serving == MacroSet(calories=70, protein=2.8, carbs=11.2, fat=1.4)
    assert result.calories == 70
    assert result.calories_per_100g == 250
    assert result.serving_label == "1 slice (28 g)"
    assert result.outlier_reason is None


def test_normalize_converts_kilojoules() -> None:
    product = {"code": "1", "product_name": "Crackers", "nutriments": {"energy_100g": 1000}}

    result = normalize_off_product(product, "crackers")

    assert result.per_100g is not None
    assert result.per_100g.calories == 239.01
    assert result.calories_per_100g == 239.01


def test_normalize_prefers_kcal_over_kilojoules() -> None:
    product = {
        "code": "1",
        "product_name": "Crackers",
        "nutriments": {"energy-kj_100g": 1800, "energy-kcal_100g": "430 kcal"},
    }

    result = normalize_off_product(product, "crackers")

    assert result.calories_per_100g == 430


def test_normalize_prefers_direct_serving_values() -> None:
    product = {
        "code": "2",
        "product_name": "Yogurt",
        "serving_size": "1 pot (125 g)",
        "nutriments": {
            "energy-kcal_100g": 60,
            "proteins_100g": 4,
            "energy-kcal_serving": 80,
            "proteins_serving": 5.5,
        },
    }

    result = normalize_off_product(product, "yogurt")

    assert result.per_serving == MacroSet(calories=80, protein=5.5, carbs=None, fat=None)
    assert result.serving_grams == 125


def test_normalize_without_grams_leaves_serving_unknown() -> None:
    product = {
        "code": "3",
        "product_name": "Olive Oil",
        "serving_size": "1 tbsp",
        "nutriments": {"energy-kcal_100g": 884, "fat_100g": 100},
    }

    result = normalize_off_product(product, "oil")

    assert result.serving_grams is None
    assert result.per_serving == MacroSet.empty()
    assert result.calories is None
    assert result.per_100g == MacroSet(calories=884, protein=None, carbs=None, fat=100)


def test_normalize_name_and_id_fallbacks() -> None:
    generic = normalize_off_product({"_id": "abc", "generic_name": "Oat flakes"}, "oats")
    from_query = normalize_off_product({}, "  oats ")
    unknown = normalize_off_product({"id": 42}, "")

    assert generic.name == "Oat flakes"
    assert generic.id == "abc"
    assert from_query.name == "oats"
    assert from_query.id == "oats"
    assert unknown.name == UNKNOWN_ITEM_NAME
    assert unknown.id == "42"


def test_provider_normalizes_every_product() -> None:
    client = FakeOpenFoodFactsClient(
        payload={
            "products": [
                {"code": "1", "product_name": "Peanut Butter"},
                {"code": "2"},
            ]
        }
    )
    provider = OpenFoodFactsProvider(client=client)

    results = asyncio.run(provider.search("peanut butter", 25))

    assert [result.name for result in results] == ["Peanut Butter", "peanut butter"]
    assert client.calls == [("peanut butter", 25)]
