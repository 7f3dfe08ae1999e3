"""Errors raised while serving a food search."""


class FoodSearchError(Exception):
    """Base class for food search failures."""


class InvalidQueryError(FoodSearchError):
    """Raised when the caller sends a query that cannot be searched."""


class ProviderError(FoodSearchError):
    """Raised when an upstream food database fails or returns garbage."""

    def __init__(
        self, provider: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class ProviderNotConfiguredError(ProviderError):
    """Raised when credentials for an upstream food database are missing."""
