"""
Media proxy routes for serving stored files and icons.
"""

from fastapi import APIRouter, Request
from fastapi.responses import Response
from loguru import logger

from ..models.grant import MediaObject, MediaScope
from ..services.convert_client import ConvertClient
from ..services.http_client import open_http_client
from ..services.image_dispatcher import ImageDispatcher
from ..services.presign_client import PresignClient
from ..services.storage_proxy import StorageProxy
from ..utils.formats import DEFAULT_MEDIA_TYPE, content_disposition
from ..utils.imaging import PillowCodec
from ..utils.validation import parse_resize_params, split_icon_name

router = APIRouter()


@router.get("/icon/{resource_id}/{icon_name}")
async def fetch_icon(request: Request, resource_id: str, icon_name: str):
    """
    Serve an icon in the requested format.

    ``size`` or ``width``/``height`` resize the icon and always produce PNG.
    Without a resize the stored bytes are served when they already are the
    requested format, otherwise they go through the convert service.
    """
    digest, image_format = split_icon_name(icon_name)
    resize = parse_resize_params(request.query_params)
    media = MediaObject(scope=MediaScope.ICON, scope_id=resource_id, name=digest)

    async with open_http_client() as client:
        operation = await PresignClient(client).resolve(media)
        data = await StorageProxy(client).get_object(operation)
        dispatcher = ImageDispatcher(PillowCodec(), ConvertClient(client))
        rendered = await dispatcher.render(data, image_format, resize)

    return Response(
        content=rendered.content,
        media_type=rendered.media_type,
        headers={
            "Content-Disposition": f'inline; filename="{digest}.{rendered.image_format}"',
        },
    )


@router.get("/{resource_id}/{filename}")
async def fetch_file(resource_id: str, filename: str):
    """Serve a stored file; images and videos inline, everything else as a download."""
    media = MediaObject(scope=MediaScope.GUILD, scope_id=resource_id, name=filename)

    async with open_http_client() as client:
        operation = await PresignClient(client).resolve(media)
        data = await StorageProxy(client).get_object(operation)

    media_type = operation.declared_content_type or DEFAULT_MEDIA_TYPE
    logger.debug(f"Serving {filename} for {resource_id} as {media_type}")
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": content_disposition(operation.declared_content_type, filename)},
    )
