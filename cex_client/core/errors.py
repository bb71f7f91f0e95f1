from __future__ import annotations


class CexClientError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(CexClientError):
    """Missing or invalid credentials/config. Raised before any request is made."""


class TransportError(CexClientError):
    """Connectivity, TLS, timeout or undecodable response from the HTTP layer."""


class RemoteApiError(CexClientError):
    """
    The remote service answered with an `{"error": ...}` envelope.

    Only raised when the caller opts in via `ApiResponse.unwrap()`; otherwise
    remote errors are returned as data.
    """

    def __init__(self, message: str, payload: object = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload
