"""
Client for the remote image convert service.
"""

import base64
import binascii
from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from .. import config
from ..models.media import ConvertRequest, ConvertResponse, ImageFormat
from ..utils.errors import UpstreamError
from .http_client import send

SOURCE = "convert service"


class ConvertClient:
    def __init__(self, client: httpx.AsyncClient, base_url: Optional[str] = None) -> None:
        self._client = client
        self._base_url = (base_url or config.CONVERT_URL).rstrip("/")

    async def convert(self, data: bytes, target: str) -> bytes:
        """Transcode ``data`` into ``target`` format through the convert service."""
        payload = ConvertRequest(
            file=base64.b64encode(data).decode("ascii"),
            to=ImageFormat(target),
        )
        response = await send(
            self._client,
            SOURCE,
            "POST",
            f"{self._base_url}/convert",
            json=payload.model_dump(by_alias=True, mode="json"),
            headers={"Content-Type": "application/json"},
        )
        if response.status_code != 200:
            logger.warning(f"Convert to {target} failed: {response.status_code}")
            raise UpstreamError(response.status_code, response.text, source=SOURCE)
        try:
            result = ConvertResponse.model_validate_json(response.text)
            return base64.b64decode(result.file, validate=True)
        except (ValidationError, binascii.Error) as exc:
            logger.error(f"Malformed convert response for {target}: {exc}")
            raise UpstreamError(502, "Malformed convert response", source=SOURCE) from exc
