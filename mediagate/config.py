"""
Configuration module for the media gateway.
Centralizes all configuration settings and environment variables.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Server configuration
PORT = int(os.getenv("PORT", "8787"))
DEV = os.getenv("DEV", "false").lower() == "true"
HOST = os.getenv("HOST", "0.0.0.0")

# "staging" relays upstream failures verbatim, "production" hides them
ENVIRONMENT = os.getenv("ENVIRONMENT", "staging").lower()

# Storage backend that signs and issues presigned URLs
URL = os.getenv("URL", "http://127.0.0.1:8080").rstrip("/")
SEC_KEY = os.getenv("SEC_KEY", "")

# Remote image convert collaborator
CONVERT_URL = os.getenv("CONVERT_URL", "http://127.0.0.1:8090").rstrip("/")

# Seconds allowed for each outbound call
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

# Application settings
APP_TITLE = "Media Gateway"
APP_DESCRIPTION = "Upload and download proxy for presigned media storage"
VERSION = "1.2"

# Image settings
ICON_FORMATS = ["png", "jpg", "jpeg", "gif", "webp"]
VIDEO_FORMATS = ["mp4", "webm", "ogg"]
FALLBACK_ICON_SIZE = 32

# Logging settings
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_RETENTION = "7 days"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
REQUEST_LOGGING_ENABLED = os.getenv("REQUEST_LOGGING_ENABLED", "true").lower() == "true"


def is_production() -> bool:
    """Return True when upstream failures must be hidden from clients."""
    return ENVIRONMENT == "production"
