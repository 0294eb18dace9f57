"""Reference to a database hosted on an instance."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clouddb.logging_schema import LogEvent
from clouddb.utils import escape

if TYPE_CHECKING:
    from clouddb.instance import Instance

logger = logging.getLogger(__name__)


class Database:
    """A database on an instance, identified by name.

    Creating the reference makes no request; the database may not exist.
    """

    def __init__(self, instance: Instance, name: str) -> None:
        self.instance = instance
        self.name = name

    def __repr__(self) -> str:
        return f"<Database name={self.name!r} instance={self.instance.id!r}>"

    def destroy(self) -> bool:
        """Delete the database. Only 202 Accepted counts as success."""
        self.instance.request("DELETE", f"/databases/{escape(self.name)}", expect=(202,))
        logger.info(
            "Deleted database %s on instance %s",
            self.name,
            self.instance.id,
            extra={"event": LogEvent.DATABASE_DELETED, "instance_id": self.instance.id},
        )
        return True
