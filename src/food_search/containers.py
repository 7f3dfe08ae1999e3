"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_search.adapters.fdc_client import DEFAULT_DATA_TYPES, HttpxFdcClient
from food_search.adapters.off_client import HttpxOpenFoodFactsClient
from food_search.config import Settings, parse_data_types
from food_search.services.cache import InMemorySearchCache
from food_search.services.open_food_facts import OpenFoodFactsProvider
from food_search.services.search import MODE_BRANDED, MODE_COMMON, FoodSearchService
from food_search.services.usda import UsdaFoodProvider


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    search_service: FoodSearchService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.usda_api_key,
        base_url=resolved_settings.usda_base_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    off_client = HttpxOpenFoodFactsClient.create(
        user_agent=resolved_settings.off_user_agent,
        base_url=resolved_settings.off_base_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    search_service = FoodSearchService(
        providers={
            MODE_COMMON: UsdaFoodProvider(
                client=fdc_client,
                data_types=parse_data_types(resolved_settings.usda_data_types)
                or DEFAULT_DATA_TYPES,
            ),
            MODE_BRANDED: OpenFoodFactsProvider(client=off_client),
        },
        cache=InMemorySearchCache(
            max_entries=resolved_settings.search_cache_max_entries
        ),
        candidate_pool_size=resolved_settings.candidate_pool_size,
        cache_ttl_seconds=resolved_settings.search_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await fdc_client.close()
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        search_service=search_service,
        close_resources=close_resources,
    )
