"""
FastAPI middleware for request-scoped logging and error handling.

Every request gets a short request id bound into structlog's context
variables, so pipeline events logged while serving it (fallback warnings,
extraction summaries) carry the same request_id as the access log lines.
"""

import time
import uuid
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def setup_logging_middleware(app: FastAPI) -> None:
    """
    Bind a request id and log each request's outcome and duration.

    An incoming X-Request-ID header is reused; otherwise a new id is generated.
    The id is echoed back in the response headers.
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        start_time = time.time()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        finally:
            process_time_ms = round((time.time() - start_time) * 1000, 2)

        logger.info(
            "request_completed",
            status_code=response.status_code,
            process_time_ms=process_time_ms,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = str(process_time_ms / 1000)

        return response


def setup_error_handling_middleware(app: FastAPI) -> None:
    """
    Convert unhandled exceptions into a JSON 500 response.

    Extraction failures never reach this point (the analyzer falls back), so
    anything caught here is a defect in the service itself.
    """

    @app.middleware("http")
    async def handle_errors(request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "unhandled_exception",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "Internal server error",
                    "detail": str(e) if app.debug else "An unexpected error occurred",
                },
            )
