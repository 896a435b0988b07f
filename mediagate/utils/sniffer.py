"""
Magic-number sniffing for the supported image formats.

Only the first four bytes of a buffer are looked at. ``jpg`` and ``jpeg``
share the same signature, so JPEG data is always reported under the first
of the two labels in the table (``jpg``). Callers that compare formats
should go through :func:`same_format`.
"""

from typing import Optional

SNIFF_LENGTH = 4

# Checked in order; first match wins.
MAGIC_NUMBERS = (
    ("png", b"\x89PNG"),
    ("jpg", b"\xff\xd8\xff"),
    ("jpeg", b"\xff\xd8\xff"),
    ("gif", b"GIF8"),
    ("webp", b"RIFF"),
)

_JPEG_LABELS = {"jpg", "jpeg"}


def sniff_image_format(data: bytes) -> Optional[str]:
    """Return the image format name for ``data`` or None when nothing matches."""
    if not data or len(data) < SNIFF_LENGTH:
        return None
    head = bytes(data[:SNIFF_LENGTH])
    for name, prefix in MAGIC_NUMBERS:
        if head.startswith(prefix):
            return name
    return None


def same_format(first: Optional[str], second: Optional[str]) -> bool:
    """Compare two format labels, treating jpg and jpeg as one format."""
    if first is None or second is None:
        return False
    first, second = first.lower(), second.lower()
    if first in _JPEG_LABELS and second in _JPEG_LABELS:
        return True
    return first == second
