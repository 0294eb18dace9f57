"""Client configuration using pydantic-settings.

Configuration hierarchy:
- ManagementConfig: Management API endpoint
- AuthConfig: Token and client identification
- HttpConfig: HTTP client behavior
- LoggingConfig: Logging behavior
- ClientConfig: Main config aggregating all sub-configs

Environment variable prefix: CLOUDDB_
Example: CLOUDDB_MGMT_HOST=ord.databases.api.example.com
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ManagementConfig(BaseSettings):
    """Database management endpoint.

    Requests go to {scheme}://{host}:{port}{path}/instances/...
    """

    model_config = SettingsConfigDict(env_prefix="CLOUDDB_MGMT_")

    host: str = Field(default="localhost", description="Management API host")
    path: str = Field(
        default="",
        description="Path prefix, usually /v1.0/{account_id}",
    )
    port: int = Field(default=443, description="Management API port")
    scheme: str = Field(default="https", description="URL scheme (http, https)")


class AuthConfig(BaseSettings):
    """Authentication settings.

    The token is obtained out of band; it is sent as X-Auth-Token.
    """

    model_config = SettingsConfigDict(env_prefix="CLOUDDB_AUTH_")

    token: str = Field(default="", description="Auth token (X-Auth-Token)")
    user_agent: str = Field(default="clouddb-python", description="User-Agent header")


class HttpConfig(BaseSettings):
    """HTTP client configuration."""

    model_config = SettingsConfigDict(env_prefix="CLOUDDB_HTTP_")

    timeout: float = Field(default=30.0, description="Request timeout (seconds)")
    verify: bool = Field(default=True, description="Verify TLS certificates")


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Output is off unless enabled; the host application's logging setup
    applies otherwise. Formats:
    - text: Human-readable for local development
    - json: Structured logging for production (log aggregation)
    """

    model_config = SettingsConfigDict(env_prefix="CLOUDDB_LOGGING_")

    enabled: bool = Field(default=False, description="Attach a handler to the clouddb logger")
    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="text", description="Log format (text, json)")
    service_name: str = Field(default="clouddb", description="Service identifier in logs")


class ClientConfig(BaseSettings):
    """Main client configuration aggregating all sub-configs.

    Environment variable prefix: CLOUDDB_
    Sub-configs use their own prefixes (CLOUDDB_MGMT_, CLOUDDB_AUTH_, etc.)
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOUDDB_",
        env_nested_delimiter="__",
    )

    mgmt: ManagementConfig = Field(default_factory=ManagementConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_config() -> ClientConfig:
    """Get cached client configuration singleton."""
    return ClientConfig()
