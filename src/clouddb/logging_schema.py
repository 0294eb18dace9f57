"""Log event types for structured logging."""

from enum import StrEnum


class LogEvent(StrEnum):
    """Log event types for clouddb.

    Used with logger.info/warning/error extra dict:
        logger.info("message", extra={"event": LogEvent.INSTANCE_RESIZED, ...})
    """

    # Transport
    REQUEST_COMPLETE = "request_complete"
    REQUEST_FAILED = "request_failed"

    # Instance events
    INSTANCE_REFRESHED = "instance_refreshed"
    INSTANCE_RESIZED = "instance_resized"
    VOLUME_RESIZED = "volume_resized"
    INSTANCE_RESTARTED = "instance_restarted"
    INSTANCE_DELETED = "instance_deleted"
    ROOT_ENABLED = "root_enabled"

    # Database and user events
    DATABASES_CREATED = "databases_created"
    DATABASE_DELETED = "database_deleted"
    USERS_CREATED = "users_created"
    USER_DELETED = "user_deleted"
