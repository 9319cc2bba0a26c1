"""HTTP entry point for the categories service.

Run with ``python -m app.API.server`` or
``uvicorn app.API.server:create_app --factory``.
"""
from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.API.categories import router as categories_router
from app.core.config import settings
from app.core.errors import CategoryNotFoundError, CategoryValidationError
from app.core.logging import setup_logging
from app.services.category_store import NOT_FOUND, CategoryStore

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status code and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        logger.info(
            "Request %s: %s %s -> %d in %.3fs",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        response.headers["X-Request-ID"] = request_id
        return response


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    if location:
        return f"Invalid value for {'.'.join(location)}: {first.get('msg')}"
    return f"Invalid request: {first.get('msg')}"


def create_app(store: CategoryStore | None = None) -> FastAPI:
    """Build the categories API around ``store`` (defaults to the configured file)."""

    app = FastAPI(
        title="Categories Service",
        description="File-backed CRUD for survey categories",
        version="1.0.0",
    )
    app.state.category_store = store or CategoryStore(settings.categories_data_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(categories_router, prefix="/api", tags=["Categories"])

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.exception_handler(CategoryValidationError)
    async def _validation_error(request: Request, exc: CategoryValidationError) -> JSONResponse:
        return _failure(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(CategoryNotFoundError)
    async def _not_found(request: Request, exc: CategoryNotFoundError) -> JSONResponse:
        return _failure(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        if any((error.get("loc") or ("",))[0] == "path" for error in exc.errors()):
            return _failure(status.HTTP_404_NOT_FOUND, NOT_FOUND)
        return _failure(status.HTTP_400_BAD_REQUEST, _describe_request_error(exc))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unexpected error handling %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return app


def main() -> None:
    setup_logging(settings.log_level)
    logger.info("Categories API available at http://%s:%d/api/categories", settings.api_host, settings.api_port)
    uvicorn.run(create_app(), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
