"""
Error types for the media gateway and the policy that renders upstream failures.
"""

from fastapi.responses import PlainTextResponse, Response
from loguru import logger

GENERIC_FAILURE_BODY = "Internal Server Error"


class GatewayError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(GatewayError):
    """Missing or malformed request parameters. Raised before any network call."""

    status_code = 400


class UnsupportedFormatError(GatewayError):
    """Bytes did not sniff as one of the supported image formats."""

    status_code = 415


class UpstreamError(GatewayError):
    """The backend, the object store or the convert service answered with a failure."""

    def __init__(self, status_code: int, body: str = "", source: str = "backend") -> None:
        super().__init__(body)
        self.status_code = status_code
        self.body = body
        self.source = source


def render_upstream_failure(status: int, body: str, verbose: bool) -> Response:
    """
    Turn an upstream failure into the response sent to the client.

    In verbose (non-production) mode the upstream status and body are relayed
    verbatim. Otherwise every failure collapses to an opaque 500.
    """
    if verbose:
        return PlainTextResponse(content=body, status_code=status)
    logger.debug(f"Hiding upstream failure {status} from client")
    return PlainTextResponse(content=GENERIC_FAILURE_BODY, status_code=500)
