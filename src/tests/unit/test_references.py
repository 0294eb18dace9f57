"""Tests for Database and User references."""

from unittest.mock import MagicMock

import pytest

from clouddb.errors import RemoteError
from clouddb.instance import Instance

BASE = "/v1.0/1234/instances/d4603f69-ec7e-4e9b-803f-600b9205576f"


class TestDatabase:
    def test_destroy(self, instance: Instance, mock_connection: MagicMock, respond) -> None:
        """destroy should DELETE the escaped database path."""
        respond(202)

        assert instance.database("sales data").destroy() is True

        args = mock_connection.dbreq.call_args.args
        assert args[0] == "DELETE"
        assert args[2] == f"{BASE}/databases/sales%20data"

    def test_destroy_requires_202(self, instance: Instance, respond) -> None:
        """200 is not accepted for deletes."""
        respond(200)

        with pytest.raises(RemoteError):
            instance.database("orders").destroy()

    def test_repr(self, instance: Instance) -> None:
        assert "orders" in repr(instance.database("orders"))


class TestUser:
    def test_destroy(self, instance: Instance, mock_connection: MagicMock, respond) -> None:
        """destroy should DELETE the user path."""
        respond(202)

        assert instance.user("app").destroy() is True

        args = mock_connection.dbreq.call_args.args
        assert args[0] == "DELETE"
        assert args[2] == f"{BASE}/users/app"

    def test_destroy_not_found(self, instance: Instance, respond) -> None:
        """A 404 should raise RemoteError."""
        respond(404)

        with pytest.raises(RemoteError) as exc_info:
            instance.user("ghost").destroy()

        assert exc_info.value.status_code == 404
