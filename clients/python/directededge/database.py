"""Directed Edge database handle."""

import logging
import os
from typing import Any, BinaryIO, Mapping, Sequence
from urllib.parse import quote

import httpx

from .config import DEFAULT_TIMEOUT, DatabaseConfig
from .exceptions import ResourceException
from .types import Protocol

logger = logging.getLogger(__name__)

Resources = str | Sequence[str]


class Database:
    """HTTP handle for one database on the Directed Edge web services.

    Every request is sent with HTTP Basic credentials built from the database
    name and password. Any response other than 200 raises
    :class:`ResourceException`, as does a request that cannot complete.

    A ``Database`` owns one ``httpx.Client``. httpx clients are safe to share
    between threads, so a single handle may be used concurrently; nothing
    here adds locking on top of that.

    Args:
        name: Database (account) name, also the Basic auth username.
        password: Account password.
        host: Web services host. Falls back to ``DIRECTEDEDGE_HOST`` and then
            to the public host.
        protocol: ``Protocol.HTTP`` (default) or ``Protocol.HTTPS``.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, mainly for stubbing the server.

    Example:
        >>> with Database("mydb", "secret") as db:
        ...     xml = db.get(["item1", "related"], {"tags": "product"})
    """

    def __init__(
        self,
        name: str,
        password: str,
        *,
        host: str | None = None,
        protocol: Protocol | str = Protocol.HTTP,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = DatabaseConfig.create(name, password, host=host, protocol=protocol)
        self._client = httpx.Client(
            auth=httpx.BasicAuth(*self.config.credentials),
            timeout=timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def host(self) -> str:
        return self.config.host

    @property
    def protocol(self) -> Protocol:
        return self.config.protocol

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Database(name={self.name!r}, host={self.host!r}, protocol={self.protocol.value!r})"

    def set_timeout(self, milliseconds: int) -> None:
        """Set the connect and read timeouts for all following requests."""
        self._client.timeout = httpx.Timeout(milliseconds / 1000.0)

    def url(self, resources: Resources, options: Mapping[str, Any] | None = None) -> str:
        """Build the URL for a resource path and query options.

        Each segment is percent-encoded on its own, so a ``/`` inside a
        segment never introduces a new path level. Without options no query
        string is appended. Options whose value is ``None`` are left out.

        Raises:
            UnicodeEncodeError: A segment or option cannot be encoded as UTF-8.
        """
        if isinstance(resources, str):
            resources = [resources]

        path = "/".join(quote(str(segment), safe="") for segment in resources)
        url = self.config.base_url + path

        pairs = [
            f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
            for key, value in (options or {}).items()
            if value is not None
        ]
        if pairs:
            url = f"{url}?{'&'.join(pairs)}"

        return url

    def import_from_file(self, path: str | os.PathLike[str]) -> None:
        """Replace the database contents with an XML export file.

        The file is streamed as the request body rather than read up front.

        Args:
            path: Local XML file, e.g. one written by an ``Exporter``.
        """
        try:
            f = open(path, "rb")
        except OSError as e:
            url = self.config.base_url
            logger.error("Could not read import file %s: %s", path, e)
            raise ResourceException("PUT", url, f"could not read {path}: {e}") from e

        with f:
            self._request("PUT", [], content=f)

    def get(self, resources: Resources, options: Mapping[str, Any] | None = None) -> str:
        """Fetch a resource.

        Args:
            resources: Path segments below the database, e.g. ``["item1", "related"]``.
            options: Query options.

        Returns:
            The response body text.
        """
        response = self._request("GET", resources, options=options)
        return response.text

    def put(
        self,
        resources: Resources,
        data: str,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Create or replace a resource with an XML document."""
        self._request("PUT", resources, content=data.encode("utf-8"), options=options)

    def post(
        self,
        resources: Resources,
        data: str,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Post an XML document to a resource."""
        self._request("POST", resources, content=data.encode("utf-8"), options=options)

    def delete(self, resources: Resources) -> None:
        """Delete a resource."""
        self._request("DELETE", resources)

    def _resolve(
        self,
        method: str,
        resources: Resources,
        options: Mapping[str, Any] | None,
    ) -> str:
        try:
            return self.url(resources, options)
        except (UnicodeError, TypeError, ValueError) as e:
            logger.error("Could not build %s URL for %r: %s", method, resources, e)
            raise ResourceException(method, self.config.base_url, f"invalid resource: {e}") from e

    def _request(
        self,
        method: str,
        resources: Resources,
        *,
        content: bytes | BinaryIO | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one authenticated request and check for a 200."""
        url = self._resolve(method, resources, options)
        headers = {"Content-Type": "text/xml"} if content is not None else None

        try:
            response = self._client.request(method, url, content=content, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ResourceException(method, url, str(e)) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)

        # The service answers 200 for every successful call, writes included.
        if response.status_code != 200:
            raise ResourceException(method, url, f"HTTP {response.status_code}")

        return response
