"""Global error handling middleware.

This module provides centralized exception handling with
structured JSON responses, request logging and request tracking.
"""

import logging
import time
import traceback
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from realty_api.core.exceptions import AppException
from realty_api.services.resources import describe_errors

logger = logging.getLogger(__name__)


def error_body(request: Request, exc: AppException) -> dict:
    return {
        "error": exc.message,
        "details": exc.details,
        "request_id": getattr(request.state, "request_id", "unknown"),
    }


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and catching stray exceptions.

    Every response carries an ``X-Request-ID`` header. Exceptions that
    escape the route handlers become a 500 response without leaking
    the original message.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Process request and handle any exceptions.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in chain.

        Returns:
            Response from handler or error response.
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        try:
            response = await call_next(request)
        except AppException as exc:
            logger.warning(
                f"Application error: {exc.message}",
                extra={"request_id": request_id, "status_code": exc.status_code},
            )
            response = JSONResponse(status_code=exc.status_code, content=error_body(request, exc))
        except Exception:
            logger.error(
                f"Unhandled exception: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "traceback": traceback.format_exc(),
                },
            )
            response = JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "request_id": request_id,
                },
            )

        duration_ms = (time.time() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f}ms)",
            extra={"request_id": request_id},
        )
        return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers for the FastAPI app.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        """Handle AppException with structured response."""
        if exc.status_code >= 500:
            logger.error(f"{exc.__class__.__name__}: {exc.message}")
        else:
            logger.debug(f"{exc.__class__.__name__}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_body(request, exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report invalid path or query parameters as a 400."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "All fields required!",
                "details": {"errors": describe_errors(exc.errors())},
                "request_id": getattr(request.state, "request_id", "unknown"),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Answer unmatched routes with ``{"message": "404 Not Found"}``."""
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"message": "404 Not Found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )
