"""Open Food Facts provider: search and normalization."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from food_search.adapters.off_client import OpenFoodFactsClient
from food_search.domain.foods import MacroSet, NormalizedFoodResult, Provider
from food_search.domain.numbers import (
    KJ_CONVERSION_PRECISION,
    KJ_PER_KCAL,
    parse_number,
    round_half_up,
)
from food_search.domain.servings import off_serving, scale_per_100g

UNKNOWN_ITEM_NAME = "Unknown item"

_KCAL_100G_KEYS = (
    "energy-kcal_100g",
    "energy-kcal_value",
    "energy-kcal",
    "energy_kcal_100g",
)
_KJ_100G_KEYS = (
    "energy-kj_100g",
    "energy-kj_value",
    "energy_kj_100g",
    "energy_value",
    "energy_100g",
)
_KCAL_SERVING_KEYS = ("energy-kcal_serving", "energy-kcal_value_serving")


@dataclass
class OpenFoodFactsProvider:
    """Branded products from Open Food Facts."""

    client: OpenFoodFactsClient
    name: str = Provider.OPEN_FOOD_FACTS.value

    async def search(self, query: str, limit: int) -> list[NormalizedFoodResult]:
        """Search Open Food Facts and normalize every returned product."""
        payload = await self.client.search_products(query, page_size=limit)
        products = payload.get("products")
        if not isinstance(products, list):
            return []
        return [
            normalize_off_product(product, query)
            for product in products
            if isinstance(product, Mapping)
        ]


def normalize_off_product(
    product: Mapping[str, object], fallback_name: str
) -> NormalizedFoodResult:
    """Convert one Open Food Facts product into a normalized result.

    Products are never dropped: a missing name falls back to the query text,
    then to a placeholder.
    """
    raw_nutriments = product.get("nutriments")
    nutriments = raw_nutriments if isinstance(raw_nutriments, Mapping) else {}

    per_100g = MacroSet.of(
        calories=_calories_per_100g(nutriments),
        protein=_pick_number(nutriments, ("proteins_100g",)),
        carbs=_pick_number(nutriments, ("carbohydrates_100g",)),
        fat=_pick_number(nutriments, ("fat_100g",)),
    )
    label_serving = MacroSet.of(
        calories=_pick_number(nutriments, _KCAL_SERVING_KEYS),
        protein=_pick_number(nutriments, ("proteins_serving",)),
        carbs=_pick_number(nutriments, ("carbohydrates_serving",)),
        fat=_pick_number(nutriments, ("fat_serving",)),
    )
    serving = off_serving(product)

    if label_serving.has_values():
        per_serving = label_serving
    elif serving.grams:
        per_serving = scale_per_100g(per_100g, serving.grams)
    else:
        per_serving = MacroSet.empty()

    return NormalizedFoodResult.build(
        id=_product_id(product, fallback_name),
        provider=Provider.OPEN_FOOD_FACTS,
        name=_product_name(product, fallback_name),
        brand_name=_text(product.get("brands")),
        serving_grams=serving.grams,
        per_serving=per_serving,
        per_100g=per_100g,
        serving_label=serving.label,
    )


def _calories_per_100g(nutriments: Mapping[str, object]) -> float | None:
    """Prefer kcal fields, else convert the kJ value."""
    kcal = _pick_number(nutriments, _KCAL_100G_KEYS)
    if kcal is not None:
        return kcal
    kilojoules = _pick_number(nutriments, _KJ_100G_KEYS)
    if not kilojoules:
        return None
    return round_half_up(kilojoules / KJ_PER_KCAL, KJ_CONVERSION_PRECISION)


def _pick_number(
    nutriments: Mapping[str, object], keys: Sequence[str]
) -> float | None:
    for key in keys:
        value = parse_number(nutriments.get(key))
        if value is not None:
            return value
    return None


def _product_id(product: Mapping[str, object], fallback_name: str) -> str:
    for key in ("code", "_id", "id"):
        value = _text(product.get(key))
        if value:
            return value
    return fallback_name.strip()


def _product_name(product: Mapping[str, object], fallback_name: str) -> str:
    return (
        _text(product.get("product_name"))
        or _text(product.get("generic_name"))
        or fallback_name.strip()
        or UNKNOWN_ITEM_NAME
    )


def _text(value: object) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
