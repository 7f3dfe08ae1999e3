"""FoodData Central provider: search and normalization."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from food_search.adapters.fdc_client import DEFAULT_DATA_TYPES, FdcClient
from food_search.domain.foods import MacroSet, NormalizedFoodResult, Provider
from food_search.domain.numbers import parse_number
from food_search.domain.servings import scale_per_100g, usda_serving_grams


@dataclass(frozen=True)
class _NutrientKey:
    nutrient_id: int
    nutrient_number: str
    name_fragment: str


_NUTRIENTS = {
    "calories": _NutrientKey(1008, "208", "energy"),
    "protein": _NutrientKey(1003, "203", "protein"),
    "carbs": _NutrientKey(1005, "205", "carbohydrate"),
    "fat": _NutrientKey(1004, "204", "fat"),
}

_LABEL_KEYS = {
    "calories": "calories",
    "protein": "protein",
    "carbs": "carbohydrates",
    "fat": "fat",
}


@dataclass
class UsdaFoodProvider:
    """Generic foods from USDA FoodData Central."""

    client: FdcClient
    data_types: Sequence[str] = DEFAULT_DATA_TYPES
    name: str = Provider.USDA.value

    async def search(self, query: str, limit: int) -> list[NormalizedFoodResult]:
        """Search FDC and normalize the returned foods."""
        payload = await self.client.search_foods(
            query, page_size=limit, data_types=self.data_types
        )
        foods = payload.get("foods")
        if not isinstance(foods, list):
            return []
        results = []
        for food in foods:
            if not isinstance(food, Mapping):
                continue
            result = normalize_usda_food(food)
            if result is not None:
                results.append(result)
        return results


def normalize_usda_food(food: Mapping[str, object]) -> NormalizedFoodResult | None:
    """Convert one FDC search hit into a normalized result.

    Returns ``None`` for records without an id or a usable description.
    """
    raw_id = food.get("fdcId")
    if raw_id is None:
        raw_id = food.get("id")
    food_id = str(raw_id).strip() if raw_id is not None else ""
    if not food_id:
        return None

    name = str(food.get("description") or "").strip()
    if not name:
        return None

    label_macros = _label_macros(food.get("labelNutrients"))
    nutrients = food.get("foodNutrients")
    per_100g = _per_100g_macros(nutrients if isinstance(nutrients, list) else [])
    serving_grams = usda_serving_grams(food)
    household = str(food.get("householdServingFullText") or "").strip()

    if label_macros.has_values():
        per_serving = label_macros
    elif per_100g.has_values() and serving_grams:
        per_serving = scale_per_100g(per_100g, serving_grams)
    else:
        per_serving = MacroSet.empty()

    return NormalizedFoodResult.build(
        id=food_id,
        provider=Provider.USDA,
        name=name,
        brand_name=_brand_name(food),
        serving_grams=serving_grams,
        per_serving=per_serving,
        per_100g=per_100g if per_100g.has_values() else None,
        serving_label=household or None,
    )


def _brand_name(food: Mapping[str, object]) -> str | None:
    for key in ("brandOwner", "brandName"):
        value = food.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _label_macros(label_nutrients: object) -> MacroSet:
    """Read the already serving-scaled label block, if any."""
    if not isinstance(label_nutrients, Mapping):
        return MacroSet.empty()
    values: dict[str, float | None] = {}
    for field, key in _LABEL_KEYS.items():
        entry = label_nutrients.get(key)
        values[field] = (
            parse_number(entry.get("value")) if isinstance(entry, Mapping) else None
        )
    return MacroSet.of(**values)


def _per_100g_macros(food_nutrients: list[object]) -> MacroSet:
    """Extract per-100g energy and macros from an FDC nutrient list."""
    entries = [entry for entry in food_nutrients if isinstance(entry, Mapping)]
    values: dict[str, float | None] = {}
    for field, key in _NUTRIENTS.items():
        value = _match_by_code(entries, key)
        if value is None:
            value = _match_by_name(entries, key)
        values[field] = value
    return MacroSet.of(**values)


def _nutrient_value(entry: Mapping[str, object]) -> float | None:
    value = parse_number(entry.get("value"))
    if value is None:
        value = parse_number(entry.get("amount"))
    return value


def _match_by_code(
    entries: list[Mapping[str, object]], key: _NutrientKey
) -> float | None:
    for entry in entries:
        nested = entry.get("nutrient")
        nested = nested if isinstance(nested, Mapping) else {}
        nutrient_id = parse_number(entry.get("nutrientId") or nested.get("id"))
        number = str(entry.get("nutrientNumber") or nested.get("number") or "").strip()
        if nutrient_id == key.nutrient_id or number == key.nutrient_number:
            value = _nutrient_value(entry)
            if value is not None:
                return value
    return None


def _match_by_name(
    entries: list[Mapping[str, object]], key: _NutrientKey
) -> float | None:
    for entry in entries:
        nested = entry.get("nutrient")
        nested = nested if isinstance(nested, Mapping) else {}
        name = str(entry.get("nutrientName") or nested.get("name") or "").lower()
        if key.name_fragment not in name:
            continue
        unit = str(entry.get("unitName") or nested.get("unitName") or "").lower()
        # Energy is also reported in kJ under the same name.
        if key.name_fragment == "energy" and unit == "kj":
            continue
        value = _nutrient_value(entry)
        if value is not None:
            return value
    return None
