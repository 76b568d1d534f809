"""Directed Edge client exceptions."""


class DirectedEdgeError(Exception):
    """Base exception for Directed Edge errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceException(DirectedEdgeError):
    """A request against a database resource failed.

    Raised both when the request could not complete (connection refused,
    timeout, unreadable input) and when the server answered with anything
    other than 200.

    Attributes:
        method: HTTP verb that was attempted, e.g. "GET".
        url: Fully resolved URL of the request.
    """

    def __init__(self, method: str, url: str | None, reason: str | None = None):
        message = f"{method} {url or '<unresolved url>'} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.method = method
        self.url = url
        self.reason = reason
