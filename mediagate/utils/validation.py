"""
Validation utilities for inbound gateway requests.
All checks here run before any network call is made.
"""

import re
from typing import Mapping, Optional, Tuple

from ..config import ICON_FORMATS
from ..models.grant import AccessGrant
from .errors import ClientInputError

_ICON_NAME_PATTERN = re.compile(r"^(?P<hash>[^./]+)\.(?P<format>[A-Za-z0-9]+)$")


def require_grant(resource_id: Optional[str], query: Mapping[str, str]) -> AccessGrant:
    """Collect the access grant from the path id and the k/ex/s query parameters."""
    values = {
        "resource_id": resource_id,
        "key": query.get("k"),
        "expiry": query.get("ex"),
        "signature": query.get("s"),
    }
    missing = [name for name, value in values.items() if not value or not value.strip()]
    if missing:
        raise ClientInputError(f"Bad Request (missing {', '.join(missing)})")
    return AccessGrant(**values)


def require_multipart(content_type: Optional[str]) -> None:
    if not content_type or "multipart/form-data" not in content_type:
        raise ClientInputError("Bad Request (CT)")


def split_icon_name(icon_name: str) -> Tuple[str, str]:
    """Split ``<hash>.<format>`` and check the format is a supported one."""
    match = _ICON_NAME_PATTERN.match(icon_name)
    if not match:
        raise ClientInputError("Bad Request (icon name)")
    image_format = match.group("format").lower()
    if image_format not in ICON_FORMATS:
        raise ClientInputError(f"Bad Request (unsupported format {image_format})")
    return match.group("hash"), image_format


def _parse_dimension(name: str, raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ClientInputError(f"Bad Request ({name} must be an integer)") from exc


def parse_resize_params(
    query: Mapping[str, str],
) -> Optional[Tuple[int, int]]:
    """
    Return the requested (width, height), or None when no resize was asked for.

    ``size`` excludes ``width``/``height``, and those two must come together.
    """
    size = _parse_dimension("size", query.get("size"))
    width = _parse_dimension("width", query.get("width"))
    height = _parse_dimension("height", query.get("height"))

    if size is not None and (width is not None or height is not None):
        raise ClientInputError("Bad Request (size excludes width and height)")
    if (width is None) != (height is None):
        raise ClientInputError("Bad Request (width and height go together)")

    if size is not None:
        return size, size
    if width is not None and height is not None:
        return width, height
    return None
