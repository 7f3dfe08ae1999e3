"""Serving size discovery and per-100g scaling."""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from food_search.domain.foods import MacroSet
from food_search.domain.numbers import (
    CALORIE_PRECISION,
    MACRO_PRECISION,
    parse_number,
    round_half_up,
)

_GRAMS_PATTERN = re.compile(r"(\d+[.,]?\d*)\s*g\b", re.IGNORECASE)
_PARENTHETICAL_PATTERN = re.compile(r"\([^()]*\)")
_FDC_GRAM_UNITS = frozenset({"g", "grm"})


@dataclass(frozen=True)
class ServingInfo:
    """Serving label text and the gram weight it resolves to, if any."""

    label: str | None
    grams: float | None


def scale_per_100g(per_100g: MacroSet, grams: float | None) -> MacroSet:
    """Scale a per-100g macro set to ``grams``; unknown inputs stay unknown."""
    if grams is None or grams <= 0:
        return MacroSet.empty()
    factor = grams / 100

    def scale(value: float | None, digits: int) -> float | None:
        if value is None:
            return None
        return round_half_up(value * factor, digits)

    return MacroSet.of(
        calories=scale(per_100g.calories, CALORIE_PRECISION),
        protein=scale(per_100g.protein, MACRO_PRECISION),
        carbs=scale(per_100g.carbs, MACRO_PRECISION),
        fat=scale(per_100g.fat, MACRO_PRECISION),
    )


def find_grams(text: str | None) -> float | None:
    """Return the first positive gram quantity written as ``<n> g`` in ``text``."""
    if not text:
        return None
    match = _GRAMS_PATTERN.search(text)
    if match is None:
        return None
    grams = parse_number(match.group(1).replace(",", "."))
    if grams is None or grams <= 0:
        return None
    return grams


def usda_serving_grams(food: Mapping[str, object]) -> float | None:
    """Resolve the serving weight of an FDC record.

    The structured ``servingSize`` wins when its unit is grams (``g``, or
    ``GRM`` as branded records report it); otherwise the household serving
    text is searched for a gram quantity.
    """
    serving_size = parse_number(food.get("servingSize"))
    serving_unit = str(food.get("servingSizeUnit") or "").strip().lower()
    if serving_unit in _FDC_GRAM_UNITS and serving_size and serving_size > 0:
        return serving_size
    household = food.get("householdServingFullText")
    if household:
        return find_grams(str(household))
    return None


def off_serving(product: Mapping[str, object]) -> ServingInfo:
    """Resolve the serving label and gram weight of an Open Food Facts product.

    Branded labels usually read like ``"1 slice (28 g)"``, so parenthetical
    groups are checked first, then the whole label, then the structured
    product and serving quantities.
    """
    raw_serving = product.get("serving_size")
    if isinstance(raw_serving, str):
        label = raw_serving.strip()
    elif isinstance(raw_serving, int | float) and not isinstance(raw_serving, bool):
        label = f"{raw_serving:g} g"
    else:
        label = ""

    grams: float | None = None
    if label:
        for group in _PARENTHETICAL_PATTERN.findall(label):
            grams = find_grams(group)
            if grams is not None:
                break
        if grams is None:
            grams = find_grams(label)

    product_quantity = parse_number(product.get("product_quantity"))
    if grams is None and product_quantity and product_quantity > 0:
        grams = product_quantity

    serving_quantity = parse_number(product.get("serving_quantity"))
    serving_unit = str(product.get("serving_quantity_unit") or "").strip().lower()
    if (
        grams is None
        and serving_quantity
        and serving_quantity > 0
        and serving_unit == "g"
    ):
        grams = serving_quantity

    if not label and serving_quantity:
        label = (
            f"{serving_quantity:g} {serving_unit}"
            if serving_unit
            else f"{serving_quantity:g}"
        )
    elif not label and product_quantity:
        label = f"{product_quantity:g} g"

    return ServingInfo(label=label or None, grams=grams)
