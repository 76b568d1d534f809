"""Connection settings and the environment boundary."""

import os
from dataclasses import dataclass
from urllib.parse import quote

from .types import Protocol

HOST_ENV_VAR = "DIRECTEDEDGE_HOST"
DEFAULT_HOST = "webservices.directededge.com"
DEFAULT_TIMEOUT = 30.0


def resolve_host(host: str | None = None) -> str:
    """Return the host to talk to.

    An explicit host wins; otherwise ``DIRECTEDEDGE_HOST`` is consulted and
    finally the public web services host is used.
    """
    if host:
        return host
    return os.environ.get(HOST_ENV_VAR) or DEFAULT_HOST


@dataclass(frozen=True)
class DatabaseConfig:
    """Where a database lives and how to authenticate against it."""

    name: str
    password: str
    host: str = DEFAULT_HOST
    protocol: Protocol = Protocol.HTTP

    @classmethod
    def create(
        cls,
        name: str,
        password: str,
        host: str | None = None,
        protocol: Protocol | str = Protocol.HTTP,
    ) -> "DatabaseConfig":
        """Build a config, resolving the host from the environment if needed."""
        return cls(
            name=name,
            password=password,
            host=resolve_host(host),
            protocol=Protocol(protocol),
        )

    @property
    def base_url(self) -> str:
        """Root of the database's REST namespace, with a trailing slash."""
        return f"{self.protocol.value}://{self.host}/api/v1/{quote(self.name, safe='')}/"

    @property
    def credentials(self) -> tuple[str, str]:
        return (self.name, self.password)
