"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from food_search.adapters.fdc_client import FdcClient
from food_search.adapters.off_client import OpenFoodFactsClient
from food_search.config import Settings
from food_search.containers import AppContainer
from food_search.domain.foods import MacroSet, NormalizedFoodResult, Provider
from food_search.services.search import MODE_BRANDED, MODE_COMMON, FoodSearchService


def make_result(  # noqa: PLR0913
    name: str,
    *,
    calories: float | None = None,
    serving_grams: float | None = None,
    calories_per_100g: float | None = None,
    provider: Provider = Provider.USDA,
    result_id: str | None = None,
) -> NormalizedFoodResult:
    """Build a normalized result with only the fields ranking looks at."""
    per_100g = MacroSet.of(calories=calories_per_100g)
    return NormalizedFoodResult.build(
        id=result_id or name.lower().replace(" ", "-"),
        provider=provider,
        name=name,
        brand_name=None,
        serving_grams=serving_grams,
        per_serving=MacroSet.of(calories=calories),
        per_100g=per_100g if per_100g.has_values() else None,
    )


@dataclass
class FakeProvider:
    """Provider returning canned results and recording every call."""

    name: str
    results: list[NormalizedFoodResult] = field(default_factory=list)
    error: Exception | None = None
    calls: list[tuple[str, int]] = field(default_factory=list)

    async def search(self, query: str, limit: int) -> list[NormalizedFoodResult]:
        self.calls.append((query, limit))
        if self.error is not None:
            raise self.error
        return list(self.results)


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with an in-memory search payload."""

    payload: dict[str, object] = field(default_factory=lambda: {"foods": []})
    calls: list[tuple[str, int, tuple[str, ...]]] = field(default_factory=list)

    async def search_foods(
        self, query: str, page_size: int, data_types: Sequence[str]
    ) -> dict[str, object]:
        self.calls.append((query, page_size, tuple(data_types)))
        return self.payload


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client with an in-memory search payload."""

    payload: dict[str, object] = field(default_factory=lambda: {"products": []})
    calls: list[tuple[str, int]] = field(default_factory=list)

    async def search_products(self, query: str, page_size: int) -> dict[str, object]:
        self.calls.append((query, page_size))
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        usda_api_key="usda-key",
        off_user_agent="food-search-tests/1.0 (tests@example.com)",
    )


@pytest.fixture
def usda_provider() -> FakeProvider:
    return FakeProvider(
        name="usda",
        results=[
            make_result("Chicken Salad Sandwich", calories=420, serving_grams=70),
            make_result("Chicken Breast", calories=165, serving_grams=100),
            make_result("Chicken", calories=143, serving_grams=100),
        ],
    )


@pytest.fixture
def off_provider() -> FakeProvider:
    return FakeProvider(
        name="off",
        results=[
            make_result(
                "Chicken Nuggets",
                calories=250,
                serving_grams=100,
                provider=Provider.OPEN_FOOD_FACTS,
                result_id="3017620422003",
            )
        ],
    )


@pytest.fixture
def search_service(
    usda_provider: FakeProvider, off_provider: FakeProvider
) -> FoodSearchService:
    return FoodSearchService(
        providers={MODE_COMMON: usda_provider, MODE_BRANDED: off_provider},
    )


@pytest.fixture
def container(settings: Settings, search_service: FoodSearchService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        search_service=search_service,
        close_resources=close_resources,
    )
