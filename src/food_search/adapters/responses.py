"""Shared response handling for upstream HTTP clients."""

from collections.abc import Awaitable

import httpx

from food_search.domain.errors import ProviderError


async def read_json(
    provider: str, request: Awaitable[httpx.Response]
) -> dict[str, object]:
    """Await an upstream request and return its JSON object body.

    Network errors, non-2xx statuses and bodies that are not a JSON object all
    raise ``ProviderError``; the upstream text is kept on the exception for
    server-side logging only.
    """
    try:
        response = await request
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        raise ProviderError(
            provider,
            f"{provider} search failed ({status_code}): {exc.response.text[:200]}",
            status_code=status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise ProviderError(provider, f"{provider} request failed: {exc}") from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise ProviderError(
            provider,
            f"{provider} returned malformed JSON",
            status_code=response.status_code,
        ) from exc
    if not isinstance(payload, dict):
        raise ProviderError(
            provider,
            f"{provider} returned an unexpected payload",
            status_code=response.status_code,
        )
    return payload
