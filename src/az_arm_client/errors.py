"""Exceptions raised by the ARM client."""

from __future__ import annotations


class AzureError(RuntimeError):
    """Base class for every error surfaced by the client."""


class InvalidResourceId(AzureError, ValueError):
    """A resource id does not follow the ARM ``/subscriptions/...`` layout."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(f'"{resource_id}" is not a valid URL.')
        self.resource_id = resource_id


class AuthenticationError(AzureError):
    """The identity endpoint or ARM rejected the client's credentials."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpError(AzureError):
    """ARM answered with an unexpected status code."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(AzureError):
    """The connection failed and retries were exhausted."""
