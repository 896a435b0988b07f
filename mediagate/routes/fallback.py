"""
Catch-all for methods the gateway does not serve.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

ALLOWED_METHODS = "GET, PUT"


@router.api_route(
    "/{path:path}",
    methods=["HEAD", "POST", "DELETE", "PATCH", "OPTIONS"],
    include_in_schema=False,
)
async def method_not_allowed(path: str):
    return PlainTextResponse("Method not allowed", status_code=405, headers={"Allow": ALLOWED_METHODS})
