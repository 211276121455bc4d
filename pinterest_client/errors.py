"""
Result codes and result wrappers for Pinterest operations
Every public operation returns either Success(value) or Failure(code)
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    SUCCESS = 0
    INVALID_LOGIN = -1
    NOT_LOGGED_IN = -2
    MISSING_PIN_URL = -10
    MISSING_PIN_DESCRIPTION = -11
    MISSING_PIN_IMAGE_PREVIEW = -12
    UNABLE_TO_PIN = -13
    BAD_REPIN_URL = -14
    REPIN_URL_NOT_FOUND = -15
    UNABLE_TO_REPIN = -16
    IMAGE_DOESNT_EXIST = -20
    UNABLE_TO_CREATE_IMAGE_PREVIEW = -21
    UNABLE_TO_GET_BOARDS = -30
    UNABLE_TO_GET_ACCOUNT_NAME = -31
    UNABLE_TO_DELETE = -40
    NO_TRANSPORT = -100


class TransportError(Exception):
    """Raised by the transport when an HTTP call could not be completed"""
    pass


@dataclass(frozen=True)
class Success:
    """
    A successful operation.

    ``value`` is the operation's payload: a board mapping, a URL, a username,
    a pin id, or None for operations that only signal success.
    """
    value: Any = None

    ok = True
    code = ErrorCode.SUCCESS


@dataclass(frozen=True)
class Failure:
    """A failed operation, carrying one of the negative ErrorCode values"""
    code: ErrorCode

    ok = False

    @property
    def value(self):
        raise AttributeError(f"{self.code.name} carries no value")
