"""
Resource response interpreter
Turns raw response bodies into Success/Failure results per operation
"""

import json
import logging
from enum import Enum

from .errors import ErrorCode, Failure, Success

logger = logging.getLogger(__name__)


class Operation(Enum):
    LOGIN = "login"
    BOARDS = "boards"
    ACCOUNT_NAME = "account_name"
    IMAGE_PREVIEW = "image_preview"
    PIN = "pin"
    REPIN = "repin"
    DELETE = "delete"


FAILURE_CODES = {
    Operation.LOGIN: ErrorCode.INVALID_LOGIN,
    Operation.BOARDS: ErrorCode.UNABLE_TO_GET_BOARDS,
    Operation.ACCOUNT_NAME: ErrorCode.UNABLE_TO_GET_ACCOUNT_NAME,
    Operation.IMAGE_PREVIEW: ErrorCode.UNABLE_TO_CREATE_IMAGE_PREVIEW,
    Operation.PIN: ErrorCode.UNABLE_TO_PIN,
    Operation.REPIN: ErrorCode.UNABLE_TO_REPIN,
    Operation.DELETE: ErrorCode.UNABLE_TO_DELETE,
}


def decode(raw):
    """Parse a response body as JSON; None for empty, invalid or null bodies"""
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _dig(obj, *path):
    """Follow dict keys and list indexes; None as soon as one is missing"""
    for key in path:
        if isinstance(key, int):
            if not isinstance(obj, list) or len(obj) <= key:
                return None
        elif not isinstance(obj, dict) or key not in obj:
            return None
        obj = obj[key]
    return obj


def _response_data(payload, key):
    return _dig(payload, "resource_response", "data", key)


def _boards(payload):
    all_boards = _response_data(payload, "all_boards")
    if not isinstance(all_boards, list):
        return None

    boards = {}
    for board in all_boards:
        if not isinstance(board, dict) or "name" not in board or "id" not in board:
            return None
        boards[board["name"]] = str(board["id"])
    return boards


def _username(payload):
    username = _dig(payload, "resource_data_cache", 1, "resource", "options", "username")
    return username if isinstance(username, str) else None


def _image_url(payload):
    image_url = _response_data(payload, "image_url")
    return image_url if isinstance(image_url, str) and image_url else None


def _pin_id(payload):
    pin_id = _response_data(payload, "id")
    if isinstance(pin_id, bool):
        return None
    try:
        return int(pin_id)
    except (TypeError, ValueError):
        return None


# Operations that need more than "the body was JSON"
EXTRACTORS = {
    Operation.BOARDS: _boards,
    Operation.ACCOUNT_NAME: _username,
    Operation.IMAGE_PREVIEW: _image_url,
    Operation.PIN: _pin_id,
    Operation.REPIN: _pin_id,
}


def interpret(raw, operation):
    """
    Interpret a response body for the given operation

    Args:
        raw (bytes): response body, possibly empty
        operation (Operation): which resource call produced it

    Returns:
        Success with the extracted value (None for login and delete), or
        Failure with the operation's error code. A body that parses but lacks
        the expected fields fails the same way as one that does not parse.
    """
    failure = Failure(FAILURE_CODES[operation])

    payload = decode(raw)
    if payload is None:
        logger.warning("%s: response is not JSON", operation.value)
        return failure

    extractor = EXTRACTORS.get(operation)
    if extractor is None:
        return Success(None)

    value = extractor(payload)
    if value is None:
        logger.warning("%s: unexpected response shape", operation.value)
        return failure

    return Success(value)
