"""Food search orchestration: validate, dispatch, normalize, rank, truncate."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from food_search.domain.errors import InvalidQueryError, ProviderError
from food_search.domain.foods import NormalizedFoodResult
from food_search.domain.numbers import parse_number
from food_search.services.cache import SearchCache, search_cache_key
from food_search.services.providers import FoodProvider
from food_search.services.quality import rank_results

MODE_COMMON = "common"
MODE_BRANDED = "branded"

DEFAULT_LIMIT = 12
MIN_LIMIT = 1
MAX_LIMIT = 25

_logger = logging.getLogger(__name__)


def clamp_limit(raw: object) -> int:
    """Clamp a requested result count to [1, 25], defaulting to 12."""
    value = parse_number(raw)
    if value is None:
        return DEFAULT_LIMIT
    return int(min(MAX_LIMIT, max(MIN_LIMIT, value)))


def normalize_mode(raw: str | None) -> str:
    """Map the requested mode onto ``branded`` or ``common``."""
    if raw is not None and raw.strip().lower() == MODE_BRANDED:
        return MODE_BRANDED
    return MODE_COMMON


@dataclass(frozen=True)
class SearchOutcome:
    """Ranked, truncated results for one query."""

    query: str
    mode: str
    results: list[NormalizedFoodResult]


@dataclass
class FoodSearchService:
    """Runs one provider search per request and ranks the results."""

    providers: Mapping[str, FoodProvider]
    cache: SearchCache | None = None
    candidate_pool_size: int = MAX_LIMIT
    cache_ttl_seconds: int = 300
    debug: bool = False

    async def search(
        self, query: str | None, mode: str | None = None, limit: object = None
    ) -> SearchOutcome:
        """Search the provider selected by ``mode``.

        Raises ``InvalidQueryError`` for an empty query, before any upstream
        call, and lets ``ProviderError`` from the upstream call propagate.
        """
        trimmed = (query or "").strip()
        if not trimmed:
            raise InvalidQueryError("Missing search query")
        resolved_mode = normalize_mode(mode)
        resolved_limit = clamp_limit(limit)

        cache_key = search_cache_key(resolved_mode, trimmed, resolved_limit)
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return SearchOutcome(trimmed, resolved_mode, cached)

        provider = self.providers[resolved_mode]
        page_size = max(resolved_limit, self.candidate_pool_size)
        try:
            candidates = await provider.search(trimmed, page_size)
        except ProviderError as exc:
            _logger.warning(
                "Food search %s failed (status=%s): %s",
                provider.name,
                exc.status_code if exc.status_code is not None else "n/a",
                exc,
            )
            raise

        ranked = rank_results(candidates, trimmed, resolved_mode)[:resolved_limit]
        if self.cache is not None:
            self.cache.set(cache_key, ranked, ttl_seconds=self.cache_ttl_seconds)
        if self.debug:
            _logger.info(
                "Food search %s: query=%s candidates=%s returned=%s",
                provider.name,
                trimmed,
                len(candidates),
                len(ranked),
            )
        return SearchOutcome(trimmed, resolved_mode, ranked)
