"""
Routes package for the media gateway.
Order matters: fallback must be included last.
"""

from . import fallback, health, media, uploads

__all__ = ["fallback", "health", "media", "uploads"]
