"""
Outbound HTTP helpers shared by the backend, object-store and convert clients.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from loguru import logger

from .. import config
from ..utils.errors import UpstreamError


@asynccontextmanager
async def open_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Yield a client scoped to one inbound request; nothing is pooled across requests."""
    async with httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT) as client:
        yield client


async def send(client: httpx.AsyncClient, source: str, method: str, url: str, **kwargs) -> httpx.Response:
    """Issue one request, turning transport failures into UpstreamError."""
    try:
        return await client.request(method, url, **kwargs)
    except httpx.TimeoutException as exc:
        logger.warning(f"{source} timed out: {method} {_redact(url)}")
        raise UpstreamError(504, f"{source} timed out", source=source) from exc
    except httpx.HTTPError as exc:
        logger.warning(f"{source} unreachable: {method} {_redact(url)}: {exc}")
        raise UpstreamError(502, f"{source} unreachable", source=source) from exc


def _redact(url: str) -> str:
    """Drop the query string so signatures and presigned tokens stay out of the logs."""
    return url.split("?", 1)[0]
