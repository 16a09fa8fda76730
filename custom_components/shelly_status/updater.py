"""Run the status, meter and sensor updaters for one polling cycle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .codecs import ShellySettingsStatus
from .device_status import update_device_status
from .meters import update_meters
from .sensors import async_update_sensors

if TYPE_CHECKING:
    from .handler import ShellyThingHandler

_LOGGER = logging.getLogger(__name__)


async def async_update_components(
    handler: ShellyThingHandler, status: ShellySettingsStatus
) -> bool:
    """Apply ``status`` to all component channels; return ``True`` on change."""

    updated = update_device_status(handler, status)
    updated |= update_meters(handler, status)
    updated |= await async_update_sensors(handler, status)
    _LOGGER.debug("Component update finished (changed=%s)", updated)
    return updated
