"""Client configuration for transitmap."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from transitmap._constants import (
    BASE_URL,
    DEFAULT_CENTER,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
)
from transitmap.exceptions import TransitMapConfigError


@dataclasses.dataclass(frozen=True)
class MapView:
    """Initial view of the map surface.

    ``center`` is expressed in the surface's native projection
    (EPSG:3857 metres), not in longitude/latitude.
    """

    center: tuple[float, float] = DEFAULT_CENTER
    zoom: int = DEFAULT_ZOOM
    min_zoom: int = MIN_ZOOM
    max_zoom: int = MAX_ZOOM

    def __post_init__(self) -> None:
        if not self.min_zoom <= self.zoom <= self.max_zoom:
            raise TransitMapConfigError(
                f"zoom {self.zoom} outside [{self.min_zoom}, {self.max_zoom}]"
            )


@dataclasses.dataclass(frozen=True)
class TransitMapConfig:
    """Live map configuration.

    Parameters
    ----------
    base_url : str
        Transit provider API base URL. Defaults to the MBTA v3 API.
        A trailing slash is stripped.
    poll_interval_ms : int
        Milliseconds between vehicle position polls.
    request_timeout : float
        Total per-request timeout in seconds.
    view : MapView
        Initial map view handed to the surface.
    """

    base_url: str = BASE_URL
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    view: MapView = dataclasses.field(default_factory=MapView)

    def __post_init__(self) -> None:
        base_url = (self.base_url or "").strip().rstrip("/")
        if not base_url:
            raise TransitMapConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", base_url)
        if self.poll_interval_ms <= 0:
            raise TransitMapConfigError(f"poll_interval_ms must be positive, got {self.poll_interval_ms}")
        if self.request_timeout <= 0:
            raise TransitMapConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0

    @classmethod
    def from_env(cls, **overrides: Any) -> TransitMapConfig:
        """Create configuration from environment variables.

        Reads ``TRANSITMAP_BASE_URL``, ``TRANSITMAP_POLL_INTERVAL_MS`` and
        ``TRANSITMAP_REQUEST_TIMEOUT``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("TRANSITMAP_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        interval_env = env.get("TRANSITMAP_POLL_INTERVAL_MS")
        if interval_env is not None and "poll_interval_ms" not in overrides:
            try:
                config_kwargs["poll_interval_ms"] = int(interval_env)
            except ValueError as exc:
                raise TransitMapConfigError(f"TRANSITMAP_POLL_INTERVAL_MS is not an integer: {interval_env!r}") from exc

        timeout_env = env.get("TRANSITMAP_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise TransitMapConfigError(f"TRANSITMAP_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
