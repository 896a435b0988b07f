"""
Client for the storage backend that issues presigned object-store URLs.

Every call carries the shared secret in the Authorization header. The
access grant parameters are forwarded as-is; the backend decides whether
they are valid.
"""

from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from .. import config
from ..models.grant import AccessGrant, MediaObject
from ..models.media import PresignedOperation
from ..utils.errors import UpstreamError
from .http_client import send

STALE_CACHE_STATUS = 209
SOURCE = "backend"


class PresignClient:
    """Mints write operations (init) and resolves read operations for media objects."""

    def __init__(self, client: httpx.AsyncClient, base_url: Optional[str] = None, secret: Optional[str] = None) -> None:
        self._client = client
        self._base_url = (base_url or config.URL).rstrip("/")
        self._secret = secret if secret is not None else config.SEC_KEY

    @property
    def _headers(self) -> dict:
        return {
            "Authorization": self._secret,
            "Content-Type": "application/json",
        }

    async def init_upload(
        self,
        media: MediaObject,
        grant: AccessGrant,
        image_format: Optional[str] = None,
    ) -> PresignedOperation:
        """Ask the backend for a presigned PUT url for ``media``."""
        params = grant.as_query()
        if image_format is not None:
            params["type"] = image_format
        response = await send(
            self._client,
            SOURCE,
            "GET",
            f"{self._base_url}{media.backend_path}/init",
            params=params,
            headers=self._headers,
        )
        return self._parse(response, media)

    async def resolve(self, media: MediaObject) -> PresignedOperation:
        """
        Ask the backend for a presigned GET url for ``media``.

        A 209 answer means the backend served a cached entry whose presigned
        url has already expired; the identical call is retried exactly once.
        """
        response = await self._read(media)
        if response.status_code == STALE_CACHE_STATUS:
            logger.info(f"Stale cache entry for {media.backend_path}; retrying once")
            response = await self._read(media)
        return self._parse(response, media)

    async def _read(self, media: MediaObject) -> httpx.Response:
        return await send(
            self._client,
            SOURCE,
            "GET",
            f"{self._base_url}{media.backend_path}",
            headers=self._headers,
        )

    def _parse(self, response: httpx.Response, media: MediaObject) -> PresignedOperation:
        text = response.text
        if response.status_code != 200:
            logger.warning(f"Backend rejected {media.backend_path}: {response.status_code}")
            logger.debug(f"Backend body for {media.backend_path}: {text[:200]}")
            raise UpstreamError(response.status_code, text, source=SOURCE)
        try:
            return PresignedOperation.model_validate_json(text)
        except ValidationError as exc:
            logger.error(f"Malformed backend response for {media.backend_path}: {exc}")
            raise UpstreamError(502, "Malformed backend response", source=SOURCE) from exc
