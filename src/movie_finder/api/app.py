"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_finder.api.favorites import router as favorites_router
from movie_finder.api.models import ErrorResponse
from movie_finder.api.movies import router as movies_router
from movie_finder.api.sessions import SessionIdMiddleware
from movie_finder.app_logging import configure_logging
from movie_finder.containers import AppContainer
from movie_finder.domain.errors import (
    BadRequestError,
    MissingSessionError,
    NotFoundError,
    UpstreamError,
)

_HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


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
    app.add_middleware(
        SessionIdMiddleware,
        cookie_name=container.settings.session_cookie_name,
        max_age_seconds=container.settings.favorites_ttl_days * 24 * 60 * 60,
    )

    app.include_router(movies_router)
    app.include_router(favorites_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(BadRequestError)
    async def handle_bad_request(
        request: Request, exc: BadRequestError
    ) -> JSONResponse:
        logger.warning("Bad request: %s", exc)
        return _error_response(status.HTTP_400_BAD_REQUEST, exc, "Bad request")

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _format_validation_errors(exc)
        logger.warning("Bad request: %s", message)
        return _error_response(status.HTTP_400_BAD_REQUEST, message, "Bad request")

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning("Not found: %s", exc)
        return _error_response(status.HTTP_404_NOT_FOUND, exc, "Not found")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning("HTTP %s: %s", exc.status_code, exc.detail)
        return _error_response(exc.status_code, exc.detail, "Request failed")

    @app.exception_handler(UpstreamError)
    async def handle_upstream(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.error("External API error: %s", exc, exc_info=exc)
        return _error_response(
            status.HTTP_502_BAD_GATEWAY,
            exc,
            "External service error",
            code="EXTERNAL_API_ERROR",
        )

    @app.exception_handler(MissingSessionError)
    async def handle_missing_session(
        request: Request, exc: MissingSessionError
    ) -> JSONResponse:
        logger.error("Session error: %s", exc, exc_info=exc)
        return _internal_error_response()

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error: %s", exc, exc_info=exc)
        return _internal_error_response()

    return app


def _error_response(
    status_code: int,
    error: object,
    fallback: str,
    code: str | None = None,
) -> JSONResponse:
    """Build the JSON error body for a failed request."""
    message = str(error).strip() if error is not None else ""
    body = ErrorResponse(
        message=message or fallback,
        code=code or _HTTP_ERROR_CODES.get(status_code, "ERROR"),
        timestamp=datetime.now(tz=UTC),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _internal_error_response() -> JSONResponse:
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "Internal server error",
        code="INTERNAL_SERVER_ERROR",
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Summarize request validation errors in one line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Bad request"
