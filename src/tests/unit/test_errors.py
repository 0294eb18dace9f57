"""Tests for error handling classes."""

import httpx
import pytest

from clouddb.errors import (
    BadMethodError,
    BadRequestError,
    CloudDBError,
    DatabaseFaultError,
    ErrorCode,
    ForbiddenError,
    ItemNotFoundError,
    MissingArgumentError,
    NotSupportedError,
    OverLimitError,
    RemoteError,
    RequestSyntaxError,
    ServiceUnavailableError,
    UnauthorizedError,
    fault_message,
    raise_for_response,
)


class TestLocalErrors:
    """Tests for errors raised before any request."""

    def test_missing_argument(self) -> None:
        """MissingArgumentError should carry its code and no status."""
        exc = MissingArgumentError("Must provide a volume size")
        assert isinstance(exc, CloudDBError)
        assert exc.code == ErrorCode.MISSING_ARGUMENT
        assert exc.status_code is None
        assert str(exc) == "Must provide a volume size"

    def test_syntax_error_is_not_builtin(self) -> None:
        """RequestSyntaxError should not be confused with SyntaxError."""
        exc = RequestSyntaxError()
        assert not isinstance(exc, SyntaxError)
        assert exc.code == ErrorCode.SYNTAX
        assert exc.message == "Invalid request syntax"

    def test_not_remote(self) -> None:
        """Local errors should not be RemoteErrors and carry no response."""
        exc = RequestSyntaxError("User names must be 16 characters or less")

        assert not isinstance(exc, RemoteError)
        assert not hasattr(exc, "response")
        assert exc.message == "User names must be 16 characters or less"


class TestRaiseForResponse:
    """Tests for status code to exception mapping."""

    @pytest.mark.parametrize(
        "status_code,error_cls",
        [
            (400, BadRequestError),
            (401, UnauthorizedError),
            (403, ForbiddenError),
            (404, ItemNotFoundError),
            (405, BadMethodError),
            (413, OverLimitError),
            (500, DatabaseFaultError),
            (501, NotSupportedError),
            (503, ServiceUnavailableError),
        ],
    )
    def test_mapped_status(self, status_code: int, error_cls: type[RemoteError]) -> None:
        """Known statuses should raise their RemoteError subtype."""
        response = httpx.Response(status_code)

        with pytest.raises(error_cls) as exc_info:
            raise_for_response(response)

        assert isinstance(exc_info.value, RemoteError)
        assert exc_info.value.status_code == status_code
        assert exc_info.value.response is response

    @pytest.mark.parametrize("status_code", [200, 202, 302, 409, 422])
    def test_unmapped_status(self, status_code: int) -> None:
        """Other statuses should raise plain RemoteError."""
        with pytest.raises(RemoteError) as exc_info:
            raise_for_response(httpx.Response(status_code))

        assert type(exc_info.value) is RemoteError
        assert exc_info.value.code == ErrorCode.REMOTE_ERROR
        assert exc_info.value.message == f"HTTP {status_code}"

    def test_fault_message_used(self) -> None:
        """The fault body message should become the error message."""
        response = httpx.Response(
            413, json={"overLimit": {"message": "Too many instances", "code": 413}}
        )

        with pytest.raises(OverLimitError) as exc_info:
            raise_for_response(response)

        assert exc_info.value.message == "Too many instances"
        assert exc_info.value.code == ErrorCode.OVER_LIMIT


class TestFaultMessage:
    """Tests for fault body parsing."""

    def test_non_json_body(self) -> None:
        assert fault_message(httpx.Response(502, text="<html>Bad Gateway</html>")) is None

    def test_empty_body(self) -> None:
        assert fault_message(httpx.Response(500)) is None

    def test_unrelated_json(self) -> None:
        assert fault_message(httpx.Response(400, json={"a": 1, "b": 2})) is None
        assert fault_message(httpx.Response(400, json=["x"])) is None
        assert fault_message(httpx.Response(400, json={"badRequest": "text"})) is None
