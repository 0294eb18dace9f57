"""Request and response schemas for the database management API.

Field names are snake_case locally. The API uses camelCase for a few keys
(flavorRef, rootEnabled), mapped through aliases. Request bodies are
serialized with ``by_alias=True``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for API payloads: accepts both local names and wire aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


# =============================================================================
# Requests
# =============================================================================


class DatabaseSpec(WireModel):
    """Only name is checked locally; other values go to the API as given."""

    name: str
    character_set: Any = "utf8"
    collate: Any = "utf8_general_ci"


class CreateDatabasesRequest(WireModel):
    databases: list[DatabaseSpec]


class UserSpec(WireModel):
    name: str
    password: Any
    databases: list[Any]


class CreateUsersRequest(WireModel):
    users: list[UserSpec]


class FlavorResize(WireModel):
    flavor_ref: Any = Field(alias="flavorRef")


class VolumeSize(WireModel):
    size: int


class VolumeResize(WireModel):
    volume: VolumeSize


class ResizeRequest(WireModel):
    """Body of the resize action (flavor or volume)."""

    resize: FlavorResize | VolumeResize


class RestartRequest(WireModel):
    restart: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Responses
# =============================================================================


class FlavorRef(WireModel):
    id: Any = None


class VolumeInfo(WireModel):
    used: Any = None
    size: Any = None


class InstanceDetail(WireModel):
    """The ``instance`` object returned by GET /instances/{id}.

    ``flavor`` and ``volume`` may be absent; they stay None rather than
    being defaulted.
    """

    id: Any = None
    name: Any = None
    hostname: Any = None
    flavor: FlavorRef | None = None
    root_enabled: Any = Field(default=None, alias="rootEnabled")
    volume: VolumeInfo | None = None
    status: Any = None
    created: Any = None
    updated: Any = None
    links: Any = None


class InstanceEnvelope(WireModel):
    instance: InstanceDetail


class RootStatus(WireModel):
    root_enabled: Any = Field(default=None, alias="rootEnabled")
