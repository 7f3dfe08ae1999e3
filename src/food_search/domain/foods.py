"""Food search domain models."""

import math
from dataclasses import dataclass
from enum import StrEnum


class Provider(StrEnum):
    """Upstream food databases a result can come from."""

    USDA = "usda"
    OPEN_FOOD_FACTS = "off"


def macro_value(value: float | None) -> float | None:
    """Keep finite non-negative values, map everything else to ``None``."""
    if value is None or not math.isfinite(value) or value < 0:
        return None
    return value


@dataclass(frozen=True)
class MacroSet:
    """Calories and macronutrients; ``None`` means unknown, never zero."""

    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None

    @classmethod
    def of(
        cls,
        calories: float | None = None,
        protein: float | None = None,
        carbs: float | None = None,
        fat: float | None = None,
    ) -> "MacroSet":
        """Build a macro set, dropping negative or non-finite values."""
        return cls(
            calories=macro_value(calories),
            protein=macro_value(protein),
            carbs=macro_value(carbs),
            fat=macro_value(fat),
        )

    @classmethod
    def empty(cls) -> "MacroSet":
        """Return a macro set with every field unknown."""
        return cls(calories=None, protein=None, carbs=None, fat=None)

    def has_values(self) -> bool:
        """Return True when at least one field is known."""
        return any(
            value is not None
            for value in (self.calories, self.protein, self.carbs, self.fat)
        )


@dataclass(frozen=True)
class NormalizedFoodResult:
    """Canonical search result shared by both providers."""

    id: str
    provider: Provider
    name: str
    brand_name: str | None
    serving_grams: float | None
    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None
    calories_per_100g: float | None
    per_serving: MacroSet | None
    per_100g: MacroSet | None
    is_outlier: bool = False
    outlier_reason: str | None = None
    serving_label: str | None = None

    @classmethod
    def build(  # noqa: PLR0913
        cls,
        *,
        id: str,  # noqa: A002
        provider: Provider,
        name: str,
        brand_name: str | None,
        serving_grams: float | None,
        per_serving: MacroSet,
        per_100g: MacroSet | None,
        serving_label: str | None = None,
    ) -> "NormalizedFoodResult":
        """Create a result with flattened macros mirroring ``per_serving``."""
        return cls(
            id=id,
            provider=provider,
            name=name,
            brand_name=brand_name,
            serving_grams=serving_grams,
            calories=per_serving.calories,
            protein=per_serving.protein,
            carbs=per_serving.carbs,
            fat=per_serving.fat,
            calories_per_100g=_calories_per_100g(per_100g, per_serving, serving_grams),
            per_serving=per_serving,
            per_100g=per_100g,
            serving_label=serving_label,
        )


@dataclass(frozen=True)
class OutlierVerdict:
    """Outcome of the prepared-dish check for one result."""

    is_outlier: bool
    reason: str | None = None


def _calories_per_100g(
    per_100g: MacroSet | None,
    per_serving: MacroSet,
    serving_grams: float | None,
) -> float | None:
    """Prefer the provider's per-100g energy, else back-compute from the serving."""
    if per_100g is not None and per_100g.calories is not None:
        return per_100g.calories
    if per_serving.calories is not None and serving_grams:
        return per_serving.calories / serving_grams * 100
    return None
