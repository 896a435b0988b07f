"""
Decides how a fetched icon is served: as-is, resized locally, or converted
by the remote convert service.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger

from ..config import FALLBACK_ICON_SIZE
from ..utils.errors import UnsupportedFormatError, UpstreamError
from ..utils.formats import media_type_for_format
from ..utils.imaging import ImageCodec
from ..utils.sniffer import same_format, sniff_image_format
from .convert_client import ConvertClient


@dataclass(slots=True)
class RenderedIcon:
    content: bytes
    media_type: str
    image_format: str


def clamp_dimensions(
    requested: Tuple[int, int],
    source: Tuple[int, int],
    fallback: int = FALLBACK_ICON_SIZE,
) -> Tuple[int, int]:
    """
    Work out the output size for a resize.

    A negative or zero request on either axis means the fallback square.
    The result never exceeds the source on either axis.
    """
    width, height = requested
    if width < 1 or height < 1:
        width = height = fallback
    source_width, source_height = source
    return max(1, min(width, source_width)), max(1, min(height, source_height))


class ImageDispatcher:
    def __init__(self, codec: ImageCodec, converter: Optional[ConvertClient] = None) -> None:
        self._codec = codec
        self._converter = converter

    def resize(self, data: bytes, width: int, height: int) -> bytes:
        """Scale ``data`` down to at most the requested size and encode it as PNG."""
        image = self._codec.decode(data)
        source = self._codec.dimensions(image)
        target = clamp_dimensions((width, height), source)
        if target != (width, height):
            logger.debug(f"Clamped resize {width}x{height} to {target[0]}x{target[1]} (source {source})")
        if target != tuple(source):
            image = self._codec.resize(image, *target)
        return self._codec.encode_png(image)

    async def convert(self, data: bytes, target_format: str) -> RenderedIcon:
        if self._converter is None:
            raise UpstreamError(500, "No convert service configured", source="convert service")
        converted = await self._converter.convert(data, target_format)
        converted_format = sniff_image_format(converted)
        if converted_format is None:
            logger.error(f"Convert service returned unrecognised bytes for {target_format}")
            raise UpstreamError(502, "Convert service returned unrecognised bytes", source="convert service")
        return RenderedIcon(converted, media_type_for_format(converted_format), converted_format)

    async def render(
        self,
        data: bytes,
        requested_format: str,
        resize: Optional[Tuple[int, int]] = None,
    ) -> RenderedIcon:
        """
        Produce the bytes served for an icon request.

        The source format always comes from sniffing ``data``, never from
        what the backend declared.
        """
        source_format = sniff_image_format(data)
        if source_format is None:
            raise UnsupportedFormatError("Unsupported Media Type")

        if resize is not None:
            loop = asyncio.get_running_loop()
            resized = await loop.run_in_executor(None, self.resize, data, *resize)
            return RenderedIcon(resized, "image/png", "png")

        if same_format(source_format, requested_format):
            return RenderedIcon(data, media_type_for_format(requested_format), requested_format)

        logger.info(f"Converting icon from {source_format} to {requested_format}")
        return await self.convert(data, requested_format)
