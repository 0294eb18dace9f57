"""Error handling module for clouddb.

Local validation errors (MissingArgumentError, RequestSyntaxError) are
raised before any request is sent. RemoteError wraps a response that
failed the status check, or a success response whose body could not be
read.

Fault Body Format (sent by the management API on errors):
{
    "itemNotFound": {
        "message": "The resource could not be found.",
        "code": 404
    }
}

The outer key names the fault; its message becomes RemoteError.message.

Usage:
    from clouddb.errors import MissingArgumentError, raise_for_response

    # Raise with custom message
    raise MissingArgumentError("Must provide a volume size")

    # Raise the status-specific RemoteError subtype
    raise_for_response(response)
"""

from enum import Enum
from typing import NoReturn

import httpx


class ErrorCode(str, Enum):
    """Error codes."""

    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    SYNTAX = "SYNTAX"
    REMOTE_ERROR = "REMOTE_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    BAD_METHOD = "BAD_METHOD"
    OVER_LIMIT = "OVER_LIMIT"
    DATABASE_FAULT = "DATABASE_FAULT"
    NOT_SUPPORTED = "NOT_SUPPORTED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class CloudDBError(Exception):
    """Base exception for clouddb.

    All clouddb specific exceptions inherit from this class.

    Attributes:
        code: The error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code, or None for local errors
    """

    def __init__(self, code: ErrorCode, message: str, status_code: int | None) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class MissingArgumentError(CloudDBError):
    """A required request field was not provided."""

    def __init__(self, message: str = "Missing required argument") -> None:
        super().__init__(ErrorCode.MISSING_ARGUMENT, message, None)


class RequestSyntaxError(CloudDBError):
    """A request field violates a length, type, range or emptiness rule."""

    def __init__(self, message: str = "Invalid request syntax") -> None:
        super().__init__(ErrorCode.SYNTAX, message, None)


class RemoteError(CloudDBError):
    """The API answered with a status outside the accepted set, or an unreadable body.

    The raw response is kept on ``response`` for inspection.
    """

    error_code = ErrorCode.REMOTE_ERROR

    def __init__(self, response: httpx.Response, message: str | None = None) -> None:
        self.response = response
        super().__init__(
            self.error_code,
            message or f"HTTP {response.status_code}",
            response.status_code,
        )


class BadRequestError(RemoteError):
    """400 Bad Request."""

    error_code = ErrorCode.BAD_REQUEST


class UnauthorizedError(RemoteError):
    """401 Unauthorized - token missing or expired."""

    error_code = ErrorCode.UNAUTHORIZED


class ForbiddenError(RemoteError):
    """403 Forbidden."""

    error_code = ErrorCode.FORBIDDEN


class ItemNotFoundError(RemoteError):
    """404 Not Found - instance, database or user does not exist."""

    error_code = ErrorCode.ITEM_NOT_FOUND


class BadMethodError(RemoteError):
    """405 Method Not Allowed."""

    error_code = ErrorCode.BAD_METHOD


class OverLimitError(RemoteError):
    """413 Over Limit - account quota or rate limit reached."""

    error_code = ErrorCode.OVER_LIMIT


class DatabaseFaultError(RemoteError):
    """500 Internal Server Error."""

    error_code = ErrorCode.DATABASE_FAULT


class NotSupportedError(RemoteError):
    """501 Not Implemented."""

    error_code = ErrorCode.NOT_SUPPORTED


class ServiceUnavailableError(RemoteError):
    """503 Service Unavailable."""

    error_code = ErrorCode.SERVICE_UNAVAILABLE


STATUS_ERRORS: dict[int, type[RemoteError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: ItemNotFoundError,
    405: BadMethodError,
    413: OverLimitError,
    500: DatabaseFaultError,
    501: NotSupportedError,
    503: ServiceUnavailableError,
}


def fault_message(response: httpx.Response) -> str | None:
    """Extract the message from a fault body.

    Fault bodies wrap the detail in a single named object:
        {"itemNotFound": {"message": "...", "code": 404}}

    Returns:
        The fault message, or None if the body is not a fault document.
    """
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict) or len(data) != 1:
        return None
    fault = next(iter(data.values()))
    if isinstance(fault, dict) and isinstance(fault.get("message"), str):
        return fault["message"]
    return None


def raise_for_response(response: httpx.Response) -> NoReturn:
    """Raise the RemoteError subtype matching the response status."""
    error_cls = STATUS_ERRORS.get(response.status_code, RemoteError)
    raise error_cls(response, fault_message(response))
