"""
Main FastAPI application for the media gateway.
Wires the upload, media and fallback routes together with the error policy.
"""

import os

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from . import config
from .config import APP_TITLE, APP_DESCRIPTION, LOG_DIR, LOG_LEVEL, LOG_RETENTION, VERSION
from .middleware.request_logging import RequestLoggingMiddleware
from .middleware.security_headers import SecurityHeadersMiddleware
from .routes import fallback, health, media, uploads
from .utils.errors import GatewayError, UpstreamError, render_upstream_failure

# Configure loguru
os.makedirs(LOG_DIR, exist_ok=True)
logger.add(os.path.join(LOG_DIR, "gateway.log"), rotation="1 day", retention=LOG_RETENTION, level=LOG_LEVEL)
logger.add(os.path.join(LOG_DIR, "errors.log"), rotation="1 day", retention=LOG_RETENTION, level="ERROR")

if not config.SEC_KEY:
    logger.warning("SEC_KEY not set; backend calls will be sent without a shared secret")

# Create FastAPI app
app = FastAPI(title=APP_TITLE, description=APP_DESCRIPTION, version=VERSION)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Include route modules; fallback last so it only sees unmatched methods
app.include_router(health.router)
app.include_router(uploads.router)
app.include_router(media.router)
app.include_router(fallback.router)


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    verbose = not config.is_production()
    logger.warning(
        f"Upstream failure from {exc.source} on {request.method} {request.url.path}: "
        f"{exc.status_code}"
    )
    return render_upstream_failure(exc.status_code, exc.body, verbose)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.on_event("startup")
async def startup_event():
    logger.info(
        f"{APP_TITLE} {VERSION} started in {config.ENVIRONMENT} mode; backend at {config.URL}"
    )


if __name__ == "__main__":
    import uvicorn
    from .config import HOST, PORT, DEV

    uvicorn.run("mediagate.server:app", host=HOST, port=PORT, reload=DEV)
