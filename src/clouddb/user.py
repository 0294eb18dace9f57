"""Reference to a database user on an instance."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clouddb.logging_schema import LogEvent
from clouddb.utils import escape

if TYPE_CHECKING:
    from clouddb.instance import Instance

logger = logging.getLogger(__name__)


class User:
    """A user on an instance, identified by name."""

    def __init__(self, instance: Instance, name: str) -> None:
        self.instance = instance
        self.name = name

    def __repr__(self) -> str:
        return f"<User name={self.name!r} instance={self.instance.id!r}>"

    def destroy(self) -> bool:
        """Delete the user. Only 202 Accepted counts as success."""
        self.instance.request("DELETE", f"/users/{escape(self.name)}", expect=(202,))
        logger.info(
            "Deleted user %s on instance %s",
            self.name,
            self.instance.id,
            extra={"event": LogEvent.USER_DELETED, "instance_id": self.instance.id},
        )
        return True
