"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.suggestions import CalorieSuggestion, SuggestionErrorBody
from calorie_tracker.services.suggestions import SuggestionError

SUGGEST_CALORIES_PATH = "/api/suggest-calories"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(SuggestionError)
    async def suggestion_error_handler(
        request: Request, exc: SuggestionError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=SuggestionErrorBody(error=exc.message).model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def wrong_method_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        if exc.status_code == 405 and request.url.path == SUGGEST_CALORIES_PATH:
            return JSONResponse(
                status_code=405,
                content=SuggestionErrorBody(error="Use POST").model_dump(),
                headers=exc.headers,
            )
        return await http_exception_handler(request, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post(SUGGEST_CALORIES_PATH)
    async def suggest_calories(request: Request) -> CalorieSuggestion:
        """Estimate calories for one ingredient line."""
        state_container: AppContainer = request.app.state.container
        service = state_container.suggestion_service
        if service is None:
            logger.error("Calorie suggestion requested without OPENAI_API_KEY")
            raise SuggestionError(500, "Missing OPENAI_API_KEY")

        payload = await _read_json_body(request)
        return await service.suggest(payload.get("text"))

    return app


async def _read_json_body(request: Request) -> dict[str, object]:
    """Decode a JSON object body; anything else counts as empty."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
