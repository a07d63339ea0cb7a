"""HTTP transport for the transit provider's JSON:API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from transitmap._constants import JSONAPI_CONTENT_TYPE, USER_AGENT
from transitmap.config import TransitMapConfig
from transitmap.exceptions import FetchError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the fetchers.

    ``get_json`` returns the decoded JSON:API document or raises
    :class:`FetchError`.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        ...


class HttpTransport:
    """GET-only transport over an :class:`aiohttp.ClientSession`."""

    def __init__(self, config: TransitMapConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        """Issue ``GET <base_url><endpoint>`` and return the decoded body.

        Raises
        ------
        FetchError
            On connection failure, timeout, non-2xx status or a body that
            is not JSON.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = {
            "accept": JSONAPI_CONTENT_TYPE,
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s params=%s", url, dict(params))

        try:
            async with self._http.get(url, params=dict(params), headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise FetchError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except FetchError:
            raise
        except TimeoutError as exc:
            raise FetchError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise FetchError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise FetchError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=resp.status,
                endpoint=endpoint,
            ) from exc
