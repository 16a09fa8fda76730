"""Thin async REST client for Shelly Gen1 devices."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .codecs import (
    ShellySettings,
    ShellySettingsStatus,
    ShellyStatusSensor,
    decode_sensor_status,
    decode_settings,
    decode_status,
)
from .const import DEFAULT_REQUEST_TIMEOUT, SETTINGS_PATH, STATUS_PATH
from .exceptions import ShellyApiError, ShellyAuthError, ShellyDataError
from .utils import mask_identifier

_LOGGER = logging.getLogger(__name__)


class ShellyRESTClient:
    """Fetch status and settings from a Shelly device over HTTP.

    The client performs no retries; failures surface as ``ShellyApiError``
    and retry policy belongs to the caller.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        host: str,
        *,
        username: str | None = None,
        password: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialise the client for ``host`` using a shared session."""

        if not host.startswith("http"):
            host = f"http://{host}"
        self._session = session
        self._base_url = host.rstrip("/")
        self._auth = (
            aiohttp.BasicAuth(username or "admin", password) if password else None
        )
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def base_url(self) -> str:
        """Return the device base URL."""

        return self._base_url

    async def _get_json(self, path: str) -> Any:
        """Perform a GET request and return the decoded JSON body."""

        url = f"{self._base_url}{path}"
        masked = mask_identifier(self._base_url)
        _LOGGER.debug("HTTP GET %s%s", masked, path)
        try:
            async with self._session.get(
                url, auth=self._auth, timeout=self._timeout
            ) as resp:
                if resp.status == 401:
                    raise ShellyAuthError(f"Authentication failed for {masked}")
                if resp.status >= 400:
                    _LOGGER.error(
                        "HTTP error GET %s%s -> %s", masked, path, resp.status
                    )
                    raise ShellyApiError(
                        f"GET {path} failed with HTTP status {resp.status}"
                    )
                try:
                    return await resp.json(content_type=None)
                except ValueError as err:
                    raise ShellyDataError(
                        f"GET {path} returned a non-JSON body"
                    ) from err
        except (ShellyApiError, ShellyDataError):
            raise
        except asyncio.CancelledError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            _LOGGER.error("Request GET %s%s failed: %s", masked, path, err)
            raise ShellyApiError(f"GET {path} failed: {err}") from err

    async def get_status(self) -> ShellySettingsStatus:
        """Return the device status snapshot."""

        return decode_status(await self._get_json(STATUS_PATH))

    async def get_settings(self) -> ShellySettings:
        """Return the device settings relevant to status mapping."""

        return decode_settings(await self._get_json(SETTINGS_PATH))

    async def get_sensor_status(self) -> ShellyStatusSensor:
        """Return the sensor view of the device status."""

        return decode_sensor_status(await self._get_json(STATUS_PATH))
