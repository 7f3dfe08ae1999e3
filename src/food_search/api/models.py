"""Pydantic models for food search responses."""

from pydantic import BaseModel, ConfigDict, Field

from food_search.domain.foods import MacroSet, NormalizedFoodResult


class MacroSetModel(BaseModel):
    """Calories and macronutrients; null means unknown."""

    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None

    @classmethod
    def from_domain(cls, macros: MacroSet | None) -> "MacroSetModel | None":
        """Convert a domain macro set, keeping ``None`` as ``None``."""
        if macros is None:
            return None
        return cls(
            calories=macros.calories,
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
        )


class FoodResultModel(BaseModel):
    """Public shape of one ranked search result."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    provider: str
    name: str
    brand_name: str | None = Field(alias="brandName")
    serving_grams: float | None = Field(alias="servingGrams")
    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None
    calories_per_100g: float | None = Field(alias="caloriesPer100g")
    per_serving: MacroSetModel | None = Field(alias="perServing")
    per_100g: MacroSetModel | None = Field(alias="per100g")
    is_outlier: bool = Field(alias="isOutlier")
    outlier_reason: str | None = Field(alias="outlierReason")
    serving_label: str | None = Field(alias="servingLabel")

    @classmethod
    def from_domain(cls, result: NormalizedFoodResult) -> "FoodResultModel":
        """Convert a normalized domain result."""
        return cls(
            id=result.id,
            provider=result.provider.value,
            name=result.name,
            brand_name=result.brand_name,
            serving_grams=result.serving_grams,
            calories=result.calories,
            protein=result.protein,
            carbs=result.carbs,
            fat=result.fat,
            calories_per_100g=result.calories_per_100g,
            per_serving=MacroSetModel.from_domain(result.per_serving),
            per_100g=MacroSetModel.from_domain(result.per_100g),
            is_outlier=result.is_outlier,
            outlier_reason=result.outlier_reason,
            serving_label=result.serving_label,
        )


class FoodSearchResponse(BaseModel):
    """Successful search response."""

    ok: bool = True
    q: str
    mode: str
    results: list[FoodResultModel]


class ErrorResponse(BaseModel):
    """Failure response; never carries partial results."""

    ok: bool = False
    message: str
