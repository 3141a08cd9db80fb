"""
Middleware configuration for the front-end.
Correlation ID setup plus per-request log context and timing.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind method/path for every log line a flow emits, then log the outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed", duration_ms=_elapsed_ms(started))
            raise

        session = getattr(request.app.state, "session", None)
        user = session.user if session is not None else None
        logger.info(
            "Request handled",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            user_id=user.id if user else None,
        )
        return response


def setup_middleware(app):
    """Setup all middleware for the application."""

    # Added last so it runs first: the request id must exist before anything logs
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
