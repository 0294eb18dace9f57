"""Client for managed database instances over the database management API."""

from clouddb.connection import Connection
from clouddb.database import Database
from clouddb.errors import (
    CloudDBError,
    MissingArgumentError,
    RemoteError,
    RequestSyntaxError,
)
from clouddb.instance import Instance
from clouddb.user import User

__all__ = [
    "CloudDBError",
    "Connection",
    "Database",
    "Instance",
    "MissingArgumentError",
    "RemoteError",
    "RequestSyntaxError",
    "User",
]
