"""
Health check route.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .. import config

router = APIRouter()


@router.get("/health", response_class=JSONResponse)
async def health():
    return {"status": "ok", "environment": config.ENVIRONMENT, "version": config.VERSION}
