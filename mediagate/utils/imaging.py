"""
Image codec used by the resize path.

The dispatcher only talks to :class:`ImageCodec`, so the clamping logic can
be exercised without a real decoder. :class:`PillowCodec` is the production
implementation.
"""

from __future__ import annotations

import io
from typing import Any, Protocol, Tuple

from loguru import logger
from PIL import Image, UnidentifiedImageError

from .errors import UnsupportedFormatError

# Reject decompression bombs well before Pillow's own warning threshold
Image.MAX_IMAGE_PIXELS = 50_000_000


class ImageCodec(Protocol):
    def decode(self, data: bytes) -> Any: ...

    def dimensions(self, image: Any) -> Tuple[int, int]: ...

    def resize(self, image: Any, width: int, height: int) -> Any: ...

    def encode_png(self, image: Any) -> bytes: ...


class PillowCodec:
    """Decode, scale and re-encode images with Pillow."""

    def decode(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
            logger.warning(f"Failed to decode image of {len(data)} bytes: {exc}")
            raise UnsupportedFormatError("Unsupported Media Type") from exc
        return image

    def dimensions(self, image: Image.Image) -> Tuple[int, int]:
        return image.size

    def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA")
        return image.resize((width, height), Image.LANCZOS)

    def encode_png(self, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
