"""
Shared constants and image factories for the gateway tests.
"""

import io

from PIL import Image

from mediagate import config

BACKEND = config.URL
CONVERTER = config.CONVERT_URL
STORE = "https://store.example.test"
GRANT_QUERY = "k=K&ex=E&s=S"


def make_image(width: int = 200, height: int = 200, fmt: str = "PNG") -> bytes:
    """Encode a solid-colour image with Pillow."""
    mode = "RGB" if fmt in ("JPEG", "GIF") else "RGBA"
    colour = (200, 40, 40) if mode == "RGB" else (200, 40, 40, 255)
    buffer = io.BytesIO()
    Image.new(mode, (width, height), colour).save(buffer, format=fmt)
    return buffer.getvalue()
