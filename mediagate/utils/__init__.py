"""
Utils package for the media gateway.
Contains sniffing, format policy and validation helpers.
"""

from .errors import (
    ClientInputError,
    GatewayError,
    UnsupportedFormatError,
    UpstreamError,
    render_upstream_failure,
)
from .sniffer import same_format, sniff_image_format

__all__ = [
    'ClientInputError',
    'GatewayError',
    'UnsupportedFormatError',
    'UpstreamError',
    'render_upstream_failure',
    'same_format',
    'sniff_image_format',
]
