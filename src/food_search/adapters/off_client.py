"""Open Food Facts search API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from food_search.adapters.responses import read_json
from food_search.domain.errors import ProviderNotConfiguredError

PROVIDER_NAME = "off"


class OpenFoodFactsClient(Protocol):
    """Interface for Open Food Facts product search."""

    async def search_products(self, query: str, page_size: int) -> dict[str, object]:
        """Search products by free text and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed Open Food Facts client."""

    user_agent: str | None
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, user_agent: str | None, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxOpenFoodFactsClient":
        """Create an Open Food Facts client with a managed httpx session."""
        return cls(
            user_agent=user_agent,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_products(self, query: str, page_size: int) -> dict[str, object]:
        """Search branded products using the legacy CGI search endpoint."""
        if not self.user_agent:
            raise ProviderNotConfiguredError(
                PROVIDER_NAME, "Missing Open Food Facts user agent"
            )
        url = f"{self.base_url.rstrip('/')}/cgi/search.pl"
        return await read_json(
            PROVIDER_NAME,
            self.http_client.get(
                url,
                params={
                    "search_terms": query,
                    "search_simple": "1",
                    "action": "process",
                    "json": "1",
                    "page_size": str(page_size),
                },
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.user_agent,
                },
                timeout=self.timeout_seconds,
            ),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
