"""CORS headers attached to every food search response."""

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOWED_METHODS = "GET, OPTIONS"
MAX_AGE_SECONDS = "86400"


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    """Return permissive CORS headers for browser-originated fetches."""
    headers = {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Max-Age": MAX_AGE_SECONDS,
    }
    if allow_origin != "*":
        headers["Vary"] = "Origin"
    return headers
