"""Shared interface for food search providers."""

from typing import Protocol

from food_search.domain.foods import NormalizedFoodResult


class FoodProvider(Protocol):
    """A food database that returns normalized results for a query."""

    name: str

    async def search(self, query: str, limit: int) -> list[NormalizedFoodResult]:
        """Run one upstream search and normalize every usable record."""
