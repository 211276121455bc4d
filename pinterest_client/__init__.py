"""
Pinterest resource-protocol client
Drives pinterest.com the way its own front end does: login, boards, pins, repins
"""

from .client import PinterestClient
from .config import ClientConfig, load_config
from .cookies import read_csrf_token
from .errors import ErrorCode, Failure, Success, TransportError
from .scraper import (
    get_pin_description,
    get_pin_image_url,
    get_pin_pinner,
    get_pin_preview_url,
    is_repin_url,
)

__all__ = [
    "PinterestClient",
    "ClientConfig",
    "load_config",
    "read_csrf_token",
    "ErrorCode",
    "Failure",
    "Success",
    "TransportError",
    "get_pin_description",
    "get_pin_image_url",
    "get_pin_pinner",
    "get_pin_preview_url",
    "is_repin_url",
]
