"""
Moves bytes to and from the object store through presigned URLs.
"""

import httpx
from loguru import logger

from ..models.media import PresignedOperation
from ..utils.errors import UpstreamError
from .http_client import send

SOURCE = "object store"


class StorageProxy:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def put_object(
        self,
        operation: PresignedOperation,
        data: bytes,
    ) -> None:
        """
        PUT ``data`` to the presigned url.

        Content-Length is the byte count of ``data``. The inbound header
        describes the whole multipart envelope and is not reused.
        """
        headers = {"Content-Length": str(len(data))}
        response = await send(self._client, SOURCE, "PUT", operation.url, content=data, headers=headers)
        if response.status_code != 200:
            logger.warning(f"Object store refused upload: {response.status_code}")
            raise UpstreamError(response.status_code, response.text, source=SOURCE)
        logger.info(f"Stored {len(data)} bytes in object store")

    async def get_object(self, operation: PresignedOperation) -> bytes:
        """GET the raw object bytes from the presigned url."""
        response = await send(self._client, SOURCE, "GET", operation.url)
        if response.status_code != 200:
            logger.warning(f"Object store refused download: {response.status_code}")
            raise UpstreamError(response.status_code, response.text, source=SOURCE)
        return response.content
