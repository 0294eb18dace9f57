"""Fixtures for clouddb unit tests."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from clouddb.instance import Instance

INSTANCE_ID = "d4603f69-ec7e-4e9b-803f-600b9205576f"


@pytest.fixture
def instance_body() -> dict[str, Any]:
    """A full GET /instances/{id} response body."""
    return {
        "instance": {
            "id": INSTANCE_ID,
            "name": "orders-db",
            "hostname": "e09ad9a3f73309469cf1f43d11e79549caf9acf2.rackspaceclouddb.com",
            "flavor": {"id": "1", "links": []},
            "rootEnabled": False,
            "volume": {"used": 0.16, "size": 2},
            "status": "ACTIVE",
            "created": "2012-03-28T21:34:25",
            "updated": "2012-03-28T21:34:25",
            "links": [
                {
                    "href": "https://ord.databases.api.example.com/v1.0/1234/instances/d4603f69",
                    "rel": "self",
                }
            ],
        }
    }


@pytest.fixture
def mock_connection(instance_body: dict[str, Any]) -> MagicMock:
    """Mock Connection answering the initial populate() with 200."""
    connection = MagicMock()
    connection.dbmgmthost = "ord.databases.api.example.com"
    connection.dbmgmtpath = "/v1.0/1234"
    connection.dbmgmtport = 443
    connection.dbmgmtscheme = "https"
    connection.dbreq.return_value = httpx.Response(200, json=instance_body)
    return connection


@pytest.fixture
def instance(mock_connection: MagicMock) -> Instance:
    """Instance populated from instance_body; dbreq history is reset."""
    inst = Instance(mock_connection, INSTANCE_ID)
    mock_connection.dbreq.reset_mock()
    return inst


@pytest.fixture
def respond(mock_connection: MagicMock) -> Callable[..., None]:
    """Set the response returned by the next dbreq calls."""

    def _respond(status_code: int, body: Any = None) -> None:
        if body is None:
            mock_connection.dbreq.return_value = httpx.Response(status_code)
        else:
            mock_connection.dbreq.return_value = httpx.Response(status_code, json=body)

    return _respond


@pytest.fixture
def sent_body(mock_connection: MagicMock) -> Callable[[], Any]:
    """Decode the JSON body of the last dbreq call."""

    def _sent_body() -> Any:
        return json.loads(mock_connection.dbreq.call_args.args[6])

    return _sent_body
