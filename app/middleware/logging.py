"""
Request logging middleware for tracking HTTP requests.
"""
import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from app.utils.logger import get_logger

logger = get_logger("middleware")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    Logs method, path, client IP, status code and duration, and tags every
    response with an X-Request-ID header. Request bodies are never logged,
    since they carry the user's text.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "Request started",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            ip=client_ip,
            content_length=request.headers.get("content-length", "0")
        )

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                duration_ms=f"{(time.perf_counter() - start_time) * 1000:.2f}",
                error=str(e),
                exc_info=True
            )
            raise

        logger.info(
            "Request completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=f"{(time.perf_counter() - start_time) * 1000:.2f}"
        )

        response.headers["X-Request-ID"] = request_id
        return response
