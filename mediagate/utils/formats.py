"""
Format policy: maps MIME types to extensions and decides how a file is
presented to the browser.
"""

import mimetypes
from typing import Optional
from urllib.parse import quote

from ..config import ICON_FORMATS, VIDEO_FORMATS

DEFAULT_EXTENSION = "txt"
DEFAULT_MEDIA_TYPE = "application/octet-stream"

# Preferred extensions for types where mimetypes is ambiguous or platform dependent
_MIME_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "video/webm": "webm",
    "video/ogg": "ogg",
    "audio/ogg": "ogg",
    "application/pdf": "pdf",
    "text/plain": "txt",
}

_FORMAT_MEDIA_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}


def extension_for(media_type: Optional[str]) -> str:
    """Return the canonical extension (without a dot) for a MIME type."""
    if not media_type:
        return DEFAULT_EXTENSION
    base_type = media_type.split(";", 1)[0].strip().lower()
    known = _MIME_EXTENSIONS.get(base_type)
    if known:
        return known
    guessed = mimetypes.guess_extension(base_type)
    if guessed:
        return guessed.lstrip(".")
    return DEFAULT_EXTENSION


def media_type_for_format(image_format: str) -> str:
    """Return the MIME type served for an image format name."""
    return _FORMAT_MEDIA_TYPES.get(image_format.lower(), DEFAULT_MEDIA_TYPE)


def is_inline_extension(extension: str) -> bool:
    return extension in ICON_FORMATS or extension in VIDEO_FORMATS


def content_disposition(media_type: Optional[str], filename: str) -> str:
    """
    Build a Content-Disposition header value.

    Images and videos render in place, everything else is downloaded.
    """
    extension = extension_for(media_type)
    disposition = "inline" if is_inline_extension(extension) else "attachment"
    safe_name = filename.replace('"', "").replace("\r", "").replace("\n", "")
    if safe_name.isascii():
        return f'{disposition}; filename="{safe_name}"'
    # Header values are latin-1 on the wire; non-ASCII names go through RFC 5987
    ascii_name = safe_name.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"{disposition}; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(safe_name, safe='')}"
