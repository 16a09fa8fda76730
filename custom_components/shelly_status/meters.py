"""Aggregate simple and polyphase power meter readings."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import TYPE_CHECKING

from homeassistant.const import (
    PERCENTAGE,
    UnitOfElectricCurrent,
    UnitOfElectricPotential,
    UnitOfEnergy,
    UnitOfPower,
)
from homeassistant.util import dt as dt_util

from .codecs import ShellyEMeter, ShellyMeter, ShellySettingsStatus
from .const import (
    CHANNEL_DEVST_ACCURETURNED,
    CHANNEL_DEVST_ACCUTOTAL,
    CHANNEL_DEVST_ACCUWATTS,
    CHANNEL_EMETER_CURRENT,
    CHANNEL_EMETER_PFACTOR,
    CHANNEL_EMETER_REACTWATTS,
    CHANNEL_EMETER_TOTALRET,
    CHANNEL_EMETER_VOLTAGE,
    CHANNEL_GROUP_DEV_STATUS,
    CHANNEL_GROUP_METER,
    CHANNEL_LAST_UPDATE,
    CHANNEL_METER_CURRENTWATTS,
    CHANNEL_METER_LASTMIN1,
    CHANNEL_METER_TOTALKWH,
    DIGITS_KWH,
    DIGITS_VOLT,
    DIGITS_WATT,
    POWER_FACTOR_NOISE_FLOOR,
    WATT_HOURS_PER_KWH,
    WATT_MINUTES_PER_KWH,
)
from .domain import ChannelDefinitionKind, DateTimeValue, to_quantity
from .utils import device_timestamp

if TYPE_CHECKING:
    from .domain import DeviceProfile
    from .handler import ShellyThingHandler

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class MeterTotals:
    """Running device-level totals for one aggregation pass."""

    watts: float = 0.0
    total_kwh: float = 0.0
    returned_kwh: float = 0.0


def watt_minutes_to_kwh(value: float | None) -> float:
    """Convert a simple meter counter (watt-minutes) to kWh."""

    return (value or 0.0) / WATT_MINUTES_PER_KWH


def watt_hours_to_kwh(value: float | None) -> float:
    """Convert a polyphase meter counter (watt-hours) to kWh."""

    return (value or 0.0) / WATT_HOURS_PER_KWH


def compute_power_factor(emeter: ShellyEMeter) -> float:
    """Return the device power factor, or derive it from power and reactive.

    Readings whose combined magnitude is within the noise floor yield ``0.0``.
    """

    if emeter.pf is not None:
        return emeter.pf

    power = emeter.power or 0.0
    reactive = emeter.reactive
    if reactive is not None and abs(power) + abs(reactive) > POWER_FACTOR_NOISE_FLOOR:
        return power / math.sqrt(power * power + reactive * reactive)
    return 0.0


def update_meters(handler: ShellyThingHandler, status: ShellySettingsStatus) -> bool:
    """Write meter channels and device-level accumulated totals.

    Rollers and RGBW2 dimmers sum all meters into a single ``meter`` group;
    every other device maps each meter to its own group.
    """

    if status.meters is None and status.emeters is None:
        return False

    profile = handler.profile
    caps = profile.capabilities

    if caps.is_roller or caps.is_rgbw2:
        return _update_summed_meters(handler, status.meters or [])

    totals = MeterTotals()
    if caps.is_emeter:
        updated = _update_emeters(handler, status.emeters or [], totals)
    else:
        updated = _update_simple_meters(handler, status.meters or [], totals)

    handler.update_channel(
        CHANNEL_GROUP_DEV_STATUS,
        CHANNEL_DEVST_ACCUWATTS,
        to_quantity(totals.watts, UnitOfPower.WATT, DIGITS_WATT),
    )
    handler.update_channel(
        CHANNEL_GROUP_DEV_STATUS,
        CHANNEL_DEVST_ACCUTOTAL,
        to_quantity(totals.total_kwh, UnitOfEnergy.KILO_WATT_HOUR, DIGITS_KWH),
    )
    handler.update_channel(
        CHANNEL_GROUP_DEV_STATUS,
        CHANNEL_DEVST_ACCURETURNED,
        to_quantity(totals.returned_kwh, UnitOfEnergy.KILO_WATT_HOUR, DIGITS_KWH),
    )
    return updated


def _meter_timestamp(profile: DeviceProfile, timestamp: int) -> DateTimeValue:
    """Return a device-local meter timestamp as a channel value."""

    return DateTimeValue(device_timestamp(profile.timezone, timestamp))


def _update_simple_meters(
    handler: ShellyThingHandler,
    meters: list[ShellyMeter],
    totals: MeterTotals,
) -> bool:
    """Map each simple meter to its own channel group."""

    profile = handler.profile
    caps = profile.capabilities
    updated = False

    for index, meter in enumerate(meters):
        # Lights (e.g. RGBW2 in white mode) do not report is_valid reliably.
        if not (meter.is_valid or caps.is_light):
            _LOGGER.debug("Skipping invalid meter %s", index)
            continue

        group = profile.meter_group(index)
        if not handler.channels_created and not caps.is_bulb:
            # Bulbs expose a meter that is never populated.
            handler.update_channel_definitions(
                ChannelDefinitionKind.METER, (group, meter)
            )

        updated |= handler.update_channel(
            group,
            CHANNEL_METER_CURRENTWATTS,
            to_quantity(meter.power, UnitOfPower.WATT, DIGITS_WATT),
        )
        totals.watts += meter.power or 0.0

        if meter.total is not None:
            kwh = watt_minutes_to_kwh(meter.total)
            updated |= handler.update_channel(
                group,
                CHANNEL_METER_TOTALKWH,
                to_quantity(kwh, UnitOfEnergy.KILO_WATT_HOUR, DIGITS_KWH),
            )
            totals.total_kwh += kwh

        if meter.counters:
            updated |= handler.update_channel(
                group,
                CHANNEL_METER_LASTMIN1,
                to_quantity(meter.counters[0], UnitOfPower.WATT, DIGITS_WATT),
            )

        if meter.timestamp is not None:
            handler.update_channel(
                group,
                CHANNEL_LAST_UPDATE,
                _meter_timestamp(profile, meter.timestamp),
            )

    return updated


def _update_emeters(
    handler: ShellyThingHandler,
    emeters: list[ShellyEMeter],
    totals: MeterTotals,
) -> bool:
    """Map each polyphase meter to its own channel group."""

    profile = handler.profile
    updated = False

    for index, emeter in enumerate(emeters):
        # 3EM reports disabled phases as invalid.
        if not emeter.is_valid:
            _LOGGER.debug("Skipping invalid emeter %s", index)
            continue

        group = profile.meter_group(index)
        if not handler.channels_created:
            handler.update_channel_definitions(
                ChannelDefinitionKind.EMETER, (group, emeter)
            )

        total_kwh = watt_hours_to_kwh(emeter.total)
        returned_kwh = watt_hours_to_kwh(emeter.total_returned)

        updated |= handler.update_channel(
            group,
            CHANNEL_METER_CURRENTWATTS,
            to_quantity(emeter.power, UnitOfPower.WATT, DIGITS_WATT),
        )
        updated |= handler.update_channel(
            group,
            CHANNEL_METER_TOTALKWH,
            to_quantity(total_kwh, UnitOfEnergy.KILO_WATT_HOUR, DIGITS_KWH),
        )
        updated |= handler.update_channel(
            group,
            CHANNEL_EMETER_TOTALRET,
            to_quantity(returned_kwh, UnitOfEnergy.KILO_WATT_HOUR, DIGITS_KWH),
        )
        updated |= handler.update_channel(
            group,
            CHANNEL_EMETER_REACTWATTS,
            to_quantity(emeter.reactive, UnitOfPower.WATT, DIGITS_WATT),
        )
        updated |= handler.update_channel(
            group,
            CHANNEL_EMETER_VOLTAGE,
            to_quantity(emeter.voltage, UnitOfElectricPotential.VOLT, DIGITS_VOLT),
        )
        updated |= handler.update_channel(
            group,
            CHANNEL_EMETER_CURRENT,
            to_quantity(emeter.current, UnitOfElectricCurrent.AMPERE, DIGITS_VOLT),
        )
        updated |= handler.update_channel(
            group,
            CHANNEL_EMETER_PFACTOR,
            to_quantity(compute_power_factor(emeter), PERCENTAGE),
        )

        totals.watts += emeter.power or 0.0
        totals.total_kwh += total_kwh
        totals.returned_kwh += returned_kwh

        if updated:
            handler.update_channel(
                group, CHANNEL_LAST_UPDATE, DateTimeValue(dt_util.now())
            )

    return updated


def _update_summed_meters(
    handler: ShellyThingHandler, meters: list[ShellyMeter]
) -> bool:
    """Sum all valid meters into the single ``meter`` group."""

    profile = handler.profile
    group = CHANNEL_GROUP_METER
    updated = False

    if not handler.channels_created and meters and meters[0].is_valid:
        handler.update_channel_definitions(
            ChannelDefinitionKind.METER, (group, meters[0])
        )

    current_watts = 0.0
    total_watt_minutes = 0.0
    last_min1 = 0.0
    timestamp = 0
    for meter in meters:
        if not meter.is_valid:
            continue
        current_watts += meter.power or 0.0
        total_watt_minutes += meter.total or 0.0
        if meter.counters:
            last_min1 += meter.counters[0]
        if (meter.timestamp or 0) > timestamp:
            timestamp = meter.timestamp or 0

    updated |= handler.update_channel(
        group,
        CHANNEL_METER_LASTMIN1,
        to_quantity(last_min1, UnitOfPower.WATT, DIGITS_WATT),
    )
    updated |= handler.update_channel(
        group,
        CHANNEL_METER_CURRENTWATTS,
        to_quantity(current_watts, UnitOfPower.WATT, DIGITS_WATT),
    )
    updated |= handler.update_channel(
        group,
        CHANNEL_METER_TOTALKWH,
        to_quantity(
            watt_minutes_to_kwh(total_watt_minutes),
            UnitOfEnergy.KILO_WATT_HOUR,
            DIGITS_KWH,
        ),
    )

    if updated and timestamp > 0:
        handler.update_channel(
            group, CHANNEL_LAST_UPDATE, _meter_timestamp(profile, timestamp)
        )

    return updated
