"""
Request logging middleware for the media gateway.

Each request is logged once on the way out with the endpoint that handled it
and how long the gateway spent on it.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from loguru import logger

from .. import config


def _handler_name(request: Request) -> str:
    # The router records the matched endpoint in the shared scope
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", "unmatched")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log handler, status and duration for every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        # Query strings carry signatures; only the path is logged
        line = (
            f"{request.method} {request.url.path} -> {_handler_name(request)} | "
            f"{response.status_code} in {elapsed_ms:.1f}ms | Client: {client_ip}"
        )
        if response.status_code >= 400:
            logger.warning(line)
        elif config.REQUEST_LOGGING_ENABLED:
            logger.info(f"{line} | User-Agent: {request.headers.get('user-agent', 'unknown')}")

        return response
