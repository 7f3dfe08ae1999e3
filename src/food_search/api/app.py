"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_search.api.cors import cors_headers
from food_search.api.models import ErrorResponse, FoodResultModel, FoodSearchResponse
from food_search.app_logging import configure_logging
from food_search.containers import AppContainer
from food_search.domain.errors import (
    InvalidQueryError,
    ProviderError,
    ProviderNotConfiguredError,
)

_SEARCH_PATH = "/food-search"
_SEARCH_METHODS = ["GET", "OPTIONS", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)
    headers = cors_headers(container.settings.cors_allow_origin)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def failure(message: str, status_code: int) -> JSONResponse:
        return JSONResponse(
            ErrorResponse(message=message).model_dump(),
            status_code=status_code,
            headers=headers,
        )

    # Methods outside _SEARCH_METHODS are rejected by routing, not the handler.
    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        if (
            exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
            and request.url.path == _SEARCH_PATH
        ):
            return failure("Method not allowed", status.HTTP_405_METHOD_NOT_ALLOWED)
        return await http_exception_handler(request, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.api_route(_SEARCH_PATH, methods=_SEARCH_METHODS)
    async def food_search(request: Request) -> Response:
        """Search foods: ``GET /food-search?q=...&mode=common|branded&limit=N``."""
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)
        if request.method != "GET":
            return failure("Method not allowed", status.HTTP_405_METHOD_NOT_ALLOWED)

        state_container: AppContainer = request.app.state.container
        params = request.query_params
        try:
            outcome = await state_container.search_service.search(
                params.get("q"),
                mode=params.get("mode"),
                limit=params.get("limit"),
            )
        except InvalidQueryError as exc:
            return failure(str(exc), status.HTTP_400_BAD_REQUEST)
        except ProviderNotConfiguredError:
            return failure(
                "Food search is not configured",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except ProviderError:
            return failure(
                "Food search provider unavailable", status.HTTP_502_BAD_GATEWAY
            )
        except Exception:
            logger.exception("Food search failed")
            return failure("Search failed", status.HTTP_500_INTERNAL_SERVER_ERROR)

        body = FoodSearchResponse(
            q=outcome.query,
            mode=outcome.mode,
            results=[FoodResultModel.from_domain(item) for item in outcome.results],
        )
        return JSONResponse(
            body.model_dump(by_alias=True),
            status_code=status.HTTP_200_OK,
            headers=headers,
        )

    return app
