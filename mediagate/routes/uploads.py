"""
Upload routes for the media gateway.
Proxies multipart uploads into the object store through backend-issued presigned URLs.
"""

import hashlib

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from loguru import logger
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from ..models.grant import MediaObject, MediaScope
from ..models.media import IconUploadResponse
from ..services.http_client import open_http_client
from ..services.presign_client import PresignClient
from ..services.storage_proxy import StorageProxy
from ..utils.errors import ClientInputError, UnsupportedFormatError
from ..utils.sniffer import sniff_image_format
from ..utils.validation import require_grant, require_multipart

router = APIRouter()


async def _read_form_file(request: Request) -> bytes:
    """Pull the ``file`` field out of a multipart body, fully buffered."""
    require_multipart(request.headers.get("content-type"))
    try:
        form = await request.form()
    except (HTTPException, MultiPartException) as exc:
        logger.warning(f"Unparseable multipart body on {request.url.path}: {exc}")
        raise ClientInputError("Bad Request (form)") from exc

    field = form.get("file")
    if field is None:
        raise ClientInputError("Bad Request (NF)")
    if isinstance(field, UploadFile):
        return await field.read()
    return field.encode("utf-8")


# The optional trailing segment is accepted and ignored; the backend names the object.
@router.put("/g/{resource_id}{suffix:path}", status_code=201)
async def upload_file(request: Request, resource_id: str):
    """Upload a generic file for a guild."""
    grant = require_grant(resource_id, request.query_params)
    data = await _read_form_file(request)
    media = MediaObject(scope=MediaScope.GUILD, scope_id=grant.resource_id)

    async with open_http_client() as client:
        operation = await PresignClient(client).init_upload(media, grant)
        await StorageProxy(client).put_object(operation, data)

    logger.info(f"File uploaded for guild {resource_id} ({len(data)} bytes)")
    return Response(content=b"", status_code=201)


@router.put("/u/{resource_id}{suffix:path}", status_code=201)
async def upload_icon(request: Request, resource_id: str):
    """Upload an icon. Icons are content addressed by the SHA-256 of their bytes."""
    grant = require_grant(resource_id, request.query_params)
    data = await _read_form_file(request)

    image_format = sniff_image_format(data)
    if image_format is None:
        logger.warning(f"Rejected icon upload for {resource_id}: unrecognised image bytes")
        raise UnsupportedFormatError("Unsupported Media Type")
    digest = hashlib.sha256(data).hexdigest()
    media = MediaObject(scope=MediaScope.ICON, scope_id=grant.resource_id, name=digest)

    async with open_http_client() as client:
        operation = await PresignClient(client).init_upload(media, grant, image_format=image_format)
        await StorageProxy(client).put_object(operation, data)

    logger.info(f"Icon {digest} ({image_format}) uploaded for {resource_id}")
    body = IconUploadResponse(hash=digest)
    return JSONResponse(status_code=201, content=body.model_dump(by_alias=True))


@router.put("/{scope}/{rest:path}")
async def upload_unknown_scope(scope: str):
    """Reject uploads outside the known scopes before touching the backend."""
    raise ClientInputError(f"Bad Request (unknown upload scope {scope})")
