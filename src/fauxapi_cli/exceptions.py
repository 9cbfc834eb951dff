"""Error types raised by the FauxAPI client."""

from __future__ import annotations


class FauxApiError(Exception):
    """Base class for all client errors."""


class ConfigError(FauxApiError, ValueError):
    """A required client setting is missing or empty."""


class TransportError(FauxApiError):
    """The request never produced an HTTP response.

    Raised for DNS failures, refused connections, TLS handshake errors and
    timeouts. A response with a non-2xx status is not a transport error.
    """

    def __init__(self, message: str, *, method: str, url: str):
        super().__init__(message)
        self.method = method
        self.url = url


class DecodeError(FauxApiError, ValueError):
    """The response body could not be decoded as JSON."""

    def __init__(self, message: str, *, status_code: int, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
