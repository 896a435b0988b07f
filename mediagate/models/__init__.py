"""
Models package for the media gateway.
Contains request and wire schemas.
"""

from .grant import AccessGrant, MediaObject, MediaScope
from .media import (
    ConvertRequest,
    ConvertResponse,
    IconUploadResponse,
    ImageFormat,
    PresignedOperation,
)

__all__ = [
    "AccessGrant",
    "MediaObject",
    "MediaScope",
    "ConvertRequest",
    "ConvertResponse",
    "IconUploadResponse",
    "ImageFormat",
    "PresignedOperation",
]
