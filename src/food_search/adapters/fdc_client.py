"""USDA FoodData Central API client."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import httpx

from food_search.adapters.responses import read_json
from food_search.domain.errors import ProviderNotConfiguredError

PROVIDER_NAME = "usda"

DEFAULT_DATA_TYPES = ("Foundation", "SR Legacy", "Survey (FNDDS)")


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(
        self, query: str, page_size: int, data_types: Sequence[str]
    ) -> dict[str, object]:
        """Search foods by query and return raw API data."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, api_key: str | None, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_foods(
        self, query: str, page_size: int, data_types: Sequence[str]
    ) -> dict[str, object]:
        """Search generic foods, restricted to the given data types."""
        if not self.api_key:
            raise ProviderNotConfiguredError(PROVIDER_NAME, "Missing USDA API key")
        url = f"{self.base_url.rstrip('/')}/foods/search"
        return await read_json(
            PROVIDER_NAME,
            self.http_client.post(
                url,
                params={"api_key": self.api_key},
                json={
                    "query": query,
                    "pageSize": page_size,
                    "dataType": list(data_types),
                    "sortBy": "dataType.keyword",
                },
                timeout=self.timeout_seconds,
            ),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
