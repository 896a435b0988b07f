"""
Services package for the media gateway.
Contains the clients for the backend, the object store and the convert service.
"""

from .convert_client import ConvertClient
from .image_dispatcher import ImageDispatcher, RenderedIcon
from .presign_client import PresignClient
from .storage_proxy import StorageProxy

__all__ = ["ConvertClient", "ImageDispatcher", "RenderedIcon", "PresignClient", "StorageProxy"]
