"""Map top-level device health fields to device status channels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.const import UnitOfTemperature, UnitOfTime

from .codecs import ShellySettingsStatus
from .const import (
    CHANNEL_DEVST_CALIBRATED,
    CHANNEL_DEVST_ITEMP,
    CHANNEL_DEVST_RSSI,
    CHANNEL_DEVST_UPDATE,
    CHANNEL_DEVST_UPTIME,
    CHANNEL_GROUP_DEV_STATUS,
    CHANNEL_GROUP_SENSOR,
    CHANNEL_SENSOR_SLEEPTIME,
    DIGITS_NONE,
    SHELLY_API_INVTEMP,
    SHELLY_UPTIME_RUNNING,
)
from .domain import ChannelDefinitionKind, DecimalValue, OnOffType, to_quantity
from .utils import map_signal_strength

if TYPE_CHECKING:
    from .handler import ShellyThingHandler


def update_device_status(
    handler: ShellyThingHandler, status: ShellySettingsStatus
) -> bool:
    """Write uptime, signal, temperature and update flags.

    Returns ``False``: device status never triggers a dependent refresh.
    """

    profile = handler.profile

    if not handler.channels_created:
        handler.update_channel_definitions(ChannelDefinitionKind.DEVICE, status)

    uptime = status.uptime or 0
    if uptime > SHELLY_UPTIME_RUNNING:
        handler.update_channel(
            CHANNEL_GROUP_DEV_STATUS,
            CHANNEL_DEVST_UPTIME,
            to_quantity(uptime, UnitOfTime.SECONDS, DIGITS_NONE),
        )

    rssi = status.wifi_sta.rssi if status.wifi_sta is not None else None
    handler.update_channel(
        CHANNEL_GROUP_DEV_STATUS,
        CHANNEL_DEVST_RSSI,
        DecimalValue(map_signal_strength(rssi or 0)),
    )

    if (status.temperature or 0.0) != SHELLY_API_INVTEMP:
        if status.tmp is not None and not profile.capabilities.is_sensor:
            handler.update_channel(
                CHANNEL_GROUP_DEV_STATUS,
                CHANNEL_DEVST_ITEMP,
                to_quantity(status.tmp.t_c, UnitOfTemperature.CELSIUS, DIGITS_NONE),
            )
        elif status.temperature is not None:
            handler.update_channel(
                CHANNEL_GROUP_DEV_STATUS,
                CHANNEL_DEVST_ITEMP,
                to_quantity(
                    status.temperature, UnitOfTemperature.CELSIUS, DIGITS_NONE
                ),
            )

    handler.update_channel(
        CHANNEL_GROUP_SENSOR,
        CHANNEL_SENSOR_SLEEPTIME,
        to_quantity(status.sleep_time or 0, UnitOfTime.SECONDS),
    )

    handler.update_channel(
        CHANNEL_GROUP_DEV_STATUS,
        CHANNEL_DEVST_UPDATE,
        OnOffType.from_bool(status.has_update),
    )

    if profile.settings.calibrated is not None:
        handler.update_channel(
            CHANNEL_GROUP_DEV_STATUS,
            CHANNEL_DEVST_CALIBRATED,
            OnOffType.from_bool(profile.settings.calibrated),
        )

    return False
