"""HTTP connection to the database management API.

The connection owns an httpx.Client and knows the management endpoint.
It sends requests and returns responses; status handling is left to
the caller (see Instance.request).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from clouddb.config import ClientConfig, get_config
from clouddb.instance import Instance
from clouddb.logging import configure_logging
from clouddb.logging_schema import LogEvent

logger = logging.getLogger(__name__)


class Connection:
    """Synchronous connection to the management API.

    Example:
        with Connection() as conn:
            inst = conn.get_instance("2f1d7b4c")
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or get_config()
        configure_logging(self._config.logging)
        self._client = httpx.Client(
            timeout=self._config.http.timeout,
            verify=self._config.http.verify,
            transport=transport,
        )

    @property
    def dbmgmthost(self) -> str:
        return self._config.mgmt.host

    @property
    def dbmgmtpath(self) -> str:
        return self._config.mgmt.path

    @property
    def dbmgmtport(self) -> int:
        return self._config.mgmt.port

    @property
    def dbmgmtscheme(self) -> str:
        return self._config.mgmt.scheme

    def _get_headers(self) -> dict[str, str]:
        """Get default request headers with auth token."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self._config.auth.user_agent,
        }
        if self._config.auth.token:
            headers["X-Auth-Token"] = self._config.auth.token
        return headers

    def dbreq(
        self,
        method: str,
        host: str,
        path: str,
        port: int,
        scheme: str,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> httpx.Response:
        """Send one request and return the response unchecked.

        Args:
            method: HTTP method (GET, POST, DELETE).
            host: Server host.
            path: Absolute path, already escaped.
            port: Server port.
            scheme: URL scheme.
            headers: Extra headers, merged over the defaults.
            body: JSON request body.

        Raises:
            httpx.HTTPError: On transport failure (connect, timeout).
        """
        request_headers = self._get_headers()
        if headers:
            request_headers.update(headers)

        url = f"{scheme}://{host}:{port}{path}"
        start = time.monotonic()
        response = self._client.request(method, url, headers=request_headers, content=body)
        duration_ms = (time.monotonic() - start) * 1000

        logger.debug(
            "%s %s -> %d (%.1fms)",
            method,
            path,
            response.status_code,
            duration_ms,
            extra={
                "event": LogEvent.REQUEST_COMPLETE,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    def get_instance(self, id: Any) -> Instance:
        """Fetch an instance by id."""
        return Instance(self, id)

    instance = get_instance

    def close(self) -> None:
        """Close HTTP client."""
        if not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
