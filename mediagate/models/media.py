"""
Wire models exchanged with the storage backend and the convert service.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ImageFormat(str, Enum):
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"


class PresignedOperation(BaseModel):
    """A presigned URL good for exactly one object-store call."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(alias="Url")
    declared_content_type: Optional[str] = Field(default=None, alias="Type")


class IconUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hash: str = Field(alias="Hash")


class ConvertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str = Field(alias="File")
    to: ImageFormat = Field(alias="To")


class ConvertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str = Field(alias="File")
