"""Custom exception hierarchy for transitmap."""

from __future__ import annotations


class TransitMapError(Exception):
    """Base exception for all transitmap errors."""


class TransitMapConfigError(TransitMapError):
    """Invalid or missing configuration."""


class SelectionError(TransitMapError):
    """Selection API used outside its contract (e.g. route without a mode)."""


class FetchError(TransitMapError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class MalformedDataError(TransitMapError):
    """Provider response is missing fields the map needs.

    Raised when the JSON:API document has no ``data`` list, or when a
    resource lacks its id, coordinates or route name.
    """

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)
