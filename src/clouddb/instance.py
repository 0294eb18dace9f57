"""Client-side handle for one managed database instance.

The handle is a snapshot: fields reflect the last successful populate(),
not the live server state. Every operation is a single synchronous call
through the connection's ``dbreq``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import httpx
from pydantic import ValidationError

from clouddb.database import Database
from clouddb.errors import (
    MissingArgumentError,
    RemoteError,
    RequestSyntaxError,
    raise_for_response,
)
from clouddb.logging_schema import LogEvent
from clouddb.models import (
    CreateDatabasesRequest,
    CreateUsersRequest,
    DatabaseSpec,
    FlavorResize,
    InstanceEnvelope,
    ResizeRequest,
    RestartRequest,
    RootStatus,
    UserSpec,
    VolumeResize,
    VolumeSize,
    WireModel,
)
from clouddb.user import User
from clouddb.utils import escape, normalize_keys

if TYPE_CHECKING:
    from collections.abc import Container

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)

# Any 20x status. Wider than the documented 200/202/204, kept as observed.
SUCCESS_CODES = range(200, 210)
# Deletes are asynchronous on the server side: only 202 Accepted counts.
ACCEPTED_CODES = (202,)

MAX_DATABASE_NAME = 64
MAX_USER_NAME = 16
MIN_VOLUME_SIZE = 1
MAX_VOLUME_SIZE = 10


class DBConnection(Protocol):
    """Transport used by Instance. See clouddb.connection.Connection."""

    dbmgmthost: str
    dbmgmtpath: str
    dbmgmtport: int
    dbmgmtscheme: str

    def dbreq(
        self,
        method: str,
        host: str,
        path: str,
        port: int,
        scheme: str,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> httpx.Response: ...


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _decode(response: httpx.Response, key: str | None = None) -> Any:
    """Decode a JSON body, optionally taking one top-level member.

    Raises:
        RemoteError: If the body is not JSON or lacks ``key``.
    """
    try:
        data = response.json()
    except ValueError:
        raise RemoteError(response, "Response body is not valid JSON") from None
    if key is None:
        return data
    if not isinstance(data, dict) or key not in data:
        raise RemoteError(response, f"Response body has no {key!r} member")
    return data[key]


def _parse(model: type[M], response: httpx.Response) -> M:
    """Validate a JSON body against a response schema.

    Raises:
        RemoteError: If the body does not match the schema.
    """
    try:
        return model.model_validate(_decode(response))
    except ValidationError as exc:
        raise RemoteError(
            response, f"Unexpected response body: {exc.error_count()} validation error(s)"
        ) from exc


class Instance:
    """A managed database instance.

    Construction fetches the instance, so it raises RemoteError when the
    instance does not exist.

    Example:
        inst = Instance(conn, "2f1d7b4c")
        inst.create_database(name="orders")
        inst.resize_volume(size=4)
    """

    def __init__(self, connection: DBConnection, id: Any) -> None:
        self.connection = connection
        self.id = id
        self.dbmgmthost = connection.dbmgmthost
        self.dbmgmtpath = connection.dbmgmtpath
        self.dbmgmtport = connection.dbmgmtport
        self.dbmgmtscheme = connection.dbmgmtscheme

        self.name: Any = None
        self.hostname: Any = None
        self.flavor_id: Any = None
        self.root_enabled: Any = None
        self.volume_used: Any = None
        self.volume_size: Any = None
        self.status: Any = None
        self.created: Any = None
        self.updated: Any = None
        self.links: Any = None

        self.populate()

    def __repr__(self) -> str:
        return f"<Instance id={self.id!r} name={self.name!r} status={self.status!r}>"

    @property
    def path(self) -> str:
        """Management path of this instance."""
        return f"{self.dbmgmtpath}/instances/{escape(self.id)}"

    def request(
        self,
        method: str,
        suffix: str = "",
        *,
        body: WireModel | None = None,
        expect: Container[int] = SUCCESS_CODES,
    ) -> httpx.Response:
        """Send a request below this instance's path and check the status.

        Args:
            method: HTTP method (GET, POST, DELETE).
            suffix: Path below the instance, e.g. "/databases".
            body: Request payload, serialized with wire aliases.
            expect: Status codes counted as success.

        Raises:
            RemoteError: If the status is not in ``expect``.
        """
        payload = body.to_json() if body is not None else None
        response = self.connection.dbreq(
            method,
            self.dbmgmthost,
            self.path + suffix,
            self.dbmgmtport,
            self.dbmgmtscheme,
            {},
            payload,
        )
        if response.status_code not in expect:
            logger.warning(
                "%s %s failed with status %d",
                method,
                self.path + suffix,
                response.status_code,
                extra={
                    "event": LogEvent.REQUEST_FAILED,
                    "instance_id": self.id,
                    "status_code": response.status_code,
                },
            )
            raise_for_response(response)
        return response

    # =========================================================================
    # Instance details
    # =========================================================================

    def populate(self) -> bool:
        """Reload all fields from the API."""
        response = self.request("GET")
        data = _parse(InstanceEnvelope, response).instance

        if data.id is not None:
            self.id = data.id
        self.name = data.name
        self.hostname = data.hostname
        if data.flavor is not None:
            self.flavor_id = data.flavor.id
        self.root_enabled = data.root_enabled
        if data.volume is not None:
            self.volume_used = data.volume.used
            self.volume_size = data.volume.size
        self.status = data.status
        self.created = data.created
        self.updated = data.updated
        self.links = data.links

        logger.debug(
            "Refreshed instance %s (status=%s)",
            self.id,
            self.status,
            extra={"event": LogEvent.INSTANCE_REFRESHED, "instance_id": self.id},
        )
        return True

    refresh = populate

    # =========================================================================
    # Databases
    # =========================================================================

    def list_databases(self) -> list[dict[str, Any]]:
        """List the databases on this instance, keys in snake_case."""
        response = self.request("GET", "/databases")
        return normalize_keys(_decode(response, "databases"))

    databases = list_databases

    def get_database(self, name: str) -> Database:
        """Return a reference to a database. No request is made."""
        return Database(self, name)

    database = get_database

    def create_databases(self, databases: Sequence[Mapping[str, Any]]) -> bool:
        """Create databases on this instance.

        Each entry accepts:
            name: Database name, at most 64 characters. *required*
            character_set: Defaults to utf8.
            collate: Defaults to utf8_general_ci.

        All entries are validated before the request is sent.
        """
        if not _is_sequence(databases) or len(databases) < 1:
            raise RequestSyntaxError("Must provide at least one database in the array")

        specs = []
        for database in databases:
            if not isinstance(database, Mapping):
                raise RequestSyntaxError("Each database must be a mapping of options")
            name = database.get("name")
            if name is None:
                raise MissingArgumentError("Must provide a name for each database")
            if not isinstance(name, str) or len(name) > MAX_DATABASE_NAME:
                raise RequestSyntaxError("Database names must be 64 characters or less")
            # None falls back to the default; "" is sent as given
            options = {
                key: database[key]
                for key in ("character_set", "collate")
                if database.get(key) is not None
            }
            specs.append(DatabaseSpec(name=name, **options))

        self.request("POST", "/databases", body=CreateDatabasesRequest(databases=specs))
        logger.info(
            "Created %d database(s) on instance %s",
            len(specs),
            self.id,
            extra={"event": LogEvent.DATABASES_CREATED, "instance_id": self.id},
        )
        return True

    def create_database(self, **options: Any) -> bool:
        """Create a single database. Options as for create_databases()."""
        return self.create_databases([options])

    # =========================================================================
    # Users
    # =========================================================================

    def list_users(self) -> list[dict[str, Any]]:
        """List the users on this instance, keys in snake_case."""
        response = self.request("GET", "/users")
        return normalize_keys(_decode(response, "users"))

    users = list_users

    def get_user(self, name: str) -> User:
        """Return a reference to a user. No request is made."""
        return User(self, name)

    user = get_user

    def create_users(self, users: Sequence[Mapping[str, Any]]) -> bool:
        """Create users on this instance.

        Each entry accepts:
            name: User name, at most 16 characters. *required*
            password: User password. *required*
            databases: Non-empty list of database names. *required*
        """
        if not _is_sequence(users) or len(users) < 1:
            raise RequestSyntaxError("Must provide at least one user in the array")

        specs = []
        for user in users:
            if not isinstance(user, Mapping):
                raise RequestSyntaxError("Each user must be a mapping of options")
            name = user.get("name")
            if name is None:
                raise MissingArgumentError("Must provide a name for each user")
            password = user.get("password")
            if password is None:
                raise MissingArgumentError("Must provide a password for each user")
            if not isinstance(name, str) or len(name) > MAX_USER_NAME:
                raise RequestSyntaxError("User names must be 16 characters or less")
            user_databases = user.get("databases")
            if not _is_sequence(user_databases) or len(user_databases) < 1:
                raise RequestSyntaxError(
                    "Must provide at least one database in each user databases array"
                )
            specs.append(
                UserSpec(name=name, password=password, databases=list(user_databases))
            )

        self.request("POST", "/users", body=CreateUsersRequest(users=specs))
        logger.info(
            "Created %d user(s) on instance %s",
            len(specs),
            self.id,
            extra={"event": LogEvent.USERS_CREATED, "instance_id": self.id},
        )
        return True

    def create_user(self, **options: Any) -> bool:
        """Create a single user. Options as for create_users()."""
        return self.create_users([options])

    # =========================================================================
    # Root account
    # =========================================================================

    def enable_root(self) -> Any:
        """Enable the root user and return its generated credentials.

        root_enabled is set locally without re-reading the instance.
        """
        response = self.request("POST", "/root")
        self.root_enabled = True
        logger.info(
            "Enabled root on instance %s",
            self.id,
            extra={"event": LogEvent.ROOT_ENABLED, "instance_id": self.id},
        )
        data = _decode(response)
        return data.get("user") if isinstance(data, dict) else None

    def is_root_enabled(self) -> Any:
        """Ask the API whether root is enabled and update root_enabled."""
        response = self.request("GET", "/root")
        self.root_enabled = _parse(RootStatus, response).root_enabled
        return self.root_enabled

    # =========================================================================
    # Actions
    # =========================================================================

    def resize(self, flavor_ref: Any = None) -> bool:
        """Change the memory size of the instance. Restarts the database.

        Args:
            flavor_ref: Flavor reference from the flavor listing. *required*
        """
        if flavor_ref is None:
            raise MissingArgumentError("Must provide a flavor to resize an instance")

        body = ResizeRequest(resize=FlavorResize(flavor_ref=flavor_ref))
        self.request("POST", "/action", body=body)
        logger.info(
            "Resize to flavor %s requested for instance %s",
            flavor_ref,
            self.id,
            extra={"event": LogEvent.INSTANCE_RESIZED, "instance_id": self.id},
        )
        return True

    def resize_volume(self, size: Any = None) -> bool:
        """Grow the attached volume. Shrinking is not supported by the API.

        Args:
            size: New size in GB, an integer from 1 to 10. *required*
        """
        if size is None:
            raise MissingArgumentError("Must provide a volume size")
        if (
            not isinstance(size, int)
            or isinstance(size, bool)
            or not MIN_VOLUME_SIZE <= size <= MAX_VOLUME_SIZE
        ):
            raise RequestSyntaxError("Volume size must be a value between 1 and 10")

        body = ResizeRequest(resize=VolumeResize(volume=VolumeSize(size=size)))
        self.request("POST", "/action", body=body)
        logger.info(
            "Volume resize to %d GB requested for instance %s",
            size,
            self.id,
            extra={"event": LogEvent.VOLUME_RESIZED, "instance_id": self.id},
        )
        return True

    def restart(self) -> bool:
        """Restart the database service. Dynamic server settings are lost."""
        self.request("POST", "/action", body=RestartRequest())
        logger.info(
            "Restart requested for instance %s",
            self.id,
            extra={"event": LogEvent.INSTANCE_RESTARTED, "instance_id": self.id},
        )
        return True

    def destroy(self) -> bool:
        """Delete the instance. The handle is not invalidated locally."""
        self.request("DELETE", expect=ACCEPTED_CODES)
        logger.info(
            "Deleted instance %s",
            self.id,
            extra={"event": LogEvent.INSTANCE_DELETED, "instance_id": self.id},
        )
        return True
