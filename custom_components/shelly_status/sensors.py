"""Map sensor and thermostat payloads to sensor channels."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homeassistant.const import (
    CONCENTRATION_PARTS_PER_MILLION,
    DEGREE,
    LIGHT_LUX,
    PERCENTAGE,
    UnitOfElectricPotential,
    UnitOfTemperature,
    UnitOfTime,
)
from homeassistant.util import dt as dt_util

from .codecs import ShellySettingsStatus, ShellyStatusSensor
from .const import (
    ALARM_TYPE_LOW_BATTERY,
    CHANNEL_CONTROL_BCONTROL,
    CHANNEL_CONTROL_BTIMER,
    CHANNEL_CONTROL_MODE,
    CHANNEL_CONTROL_POSITION,
    CHANNEL_CONTROL_PROFILE,
    CHANNEL_CONTROL_SETTEMP,
    CHANNEL_DEVST_CHARGER,
    CHANNEL_DEVST_SCHEDULE,
    CHANNEL_DEVST_SELFTTEST,
    CHANNEL_GROUP_BATTERY,
    CHANNEL_GROUP_CONTROL,
    CHANNEL_GROUP_DEV_STATUS,
    CHANNEL_GROUP_SENSOR,
    CHANNEL_LAST_UPDATE,
    CHANNEL_SENSOR_ALARM_STATE,
    CHANNEL_SENSOR_BAT_LEVEL,
    CHANNEL_SENSOR_BAT_LOW,
    CHANNEL_SENSOR_ERROR,
    CHANNEL_SENSOR_FLOOD,
    CHANNEL_SENSOR_HUM,
    CHANNEL_SENSOR_ILLUM,
    CHANNEL_SENSOR_LUX,
    CHANNEL_SENSOR_MOTION,
    CHANNEL_SENSOR_MOTION_ACT,
    CHANNEL_SENSOR_MOTION_TS,
    CHANNEL_SENSOR_PPM,
    CHANNEL_SENSOR_SMOKE,
    CHANNEL_SENSOR_SSTATE,
    CHANNEL_SENSOR_STATE,
    CHANNEL_SENSOR_TEMP,
    CHANNEL_SENSOR_TILT,
    CHANNEL_SENSOR_VOLTAGE,
    DIGITS_ADC,
    DIGITS_LUX,
    DIGITS_NONE,
    DIGITS_PERCENT,
    DIGITS_TEMP,
    SENSOR_ERROR_NONE,
    SHELLY_API_DWSTATE_OPEN,
    SHELLY_TEMP_FAHRENHEIT,
    SHELLY_TRV_MODE_AUTO,
    SHELLY_TRV_MODE_MANUAL,
    SHELLY_TRV_POS_UNDEFINED,
)
from .domain import (
    UNDEF,
    ChannelDefinitionKind,
    DateTimeValue,
    DecimalValue,
    OnOffType,
    OpenClosedType,
    string_value,
    to_quantity,
)
from .utils import convert_to_celsius, device_timestamp

if TYPE_CHECKING:
    from .codecs import ShellyTemperature, ShellyThermostat, ShellyThermostatSettings
    from .handler import ShellyThingHandler

_LOGGER = logging.getLogger(__name__)


def sensor_temperature_celsius(tmp: ShellyTemperature) -> float:
    """Return a sensor temperature block in Celsius."""

    if tmp.units == SHELLY_TEMP_FAHRENHEIT:
        if tmp.t_f is not None:
            return convert_to_celsius(tmp.t_f, tmp.units)
        if tmp.t_c is not None:
            return tmp.t_c
        return convert_to_celsius(tmp.value, tmp.units)
    value = tmp.t_c if tmp.t_c is not None else tmp.value
    return convert_to_celsius(value, tmp.units)


def is_externally_powered(
    external_power: int | None, sdata: ShellyStatusSensor
) -> bool:
    """Return ``True`` when the device runs on external or charger power."""

    return external_power == 1 or bool(sdata.charger)


async def async_update_sensors(
    handler: ShellyThingHandler, status: ShellySettingsStatus
) -> bool:
    """Fetch the sensor status and write sensor, battery and TRV channels.

    Transport errors raised by the sensor status fetch propagate unchanged.
    Returns ``True`` when any channel value changed.
    """

    profile = handler.profile
    caps = profile.capabilities
    if not (caps.is_sensor or caps.has_battery):
        return False

    sdata = await handler.api.get_sensor_status()
    if not handler.channels_created:
        handler.update_channel_definitions(
            ChannelDefinitionKind.SENSOR, (profile, sdata)
        )

    updated = handler.update_wakeup_reason(sdata.act_reasons)

    if sdata.sensor is not None and sdata.sensor.is_valid:
        is_open = (sdata.sensor.state or "").lower() == SHELLY_API_DWSTATE_OPEN
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_STATE,
            OpenClosedType.OPEN if is_open else OpenClosedType.CLOSED,
        )
        sensor_error = sdata.sensor_error
        changed = handler.update_channel(
            CHANNEL_GROUP_SENSOR, CHANNEL_SENSOR_ERROR, string_value(sensor_error)
        )
        if changed and sensor_error is not None and sensor_error != SENSOR_ERROR_NONE:
            handler.post_event(sensor_error, True)
        updated |= changed

    thermostat_settings = profile.thermostat_settings
    if sdata.tmp is not None and sdata.tmp.is_valid:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_TEMP,
            to_quantity(
                sensor_temperature_celsius(sdata.tmp),
                UnitOfTemperature.CELSIUS,
                DIGITS_TEMP,
            ),
        )
    elif status.thermostats and thermostat_settings is not None:
        updated |= _update_thermostat(
            handler, status.thermostats[0], thermostat_settings
        )

    if sdata.hum is not None:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_HUM,
            to_quantity(sdata.hum.value, PERCENTAGE, DIGITS_PERCENT),
        )

    if sdata.lux is not None and sdata.lux.is_valid:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_LUX,
            to_quantity(sdata.lux.value, LIGHT_LUX, DIGITS_LUX),
        )
        if sdata.lux.illumination is not None:
            updated |= handler.update_channel(
                CHANNEL_GROUP_SENSOR,
                CHANNEL_SENSOR_ILLUM,
                string_value(sdata.lux.illumination),
            )

    if sdata.accel is not None:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_TILT,
            to_quantity(sdata.accel.tilt, DEGREE, DIGITS_NONE),
        )

    if sdata.flood is not None:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR, CHANNEL_SENSOR_FLOOD, OnOffType.from_bool(sdata.flood)
        )

    if sdata.smoke is not None:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR, CHANNEL_SENSOR_SMOKE, OnOffType.from_bool(sdata.smoke)
        )

    if sdata.gas_sensor is not None:
        gas = sdata.gas_sensor
        updated |= handler.update_channel(
            CHANNEL_GROUP_DEV_STATUS,
            CHANNEL_DEVST_SELFTTEST,
            string_value(gas.self_test_state),
        )
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_ALARM_STATE,
            string_value(gas.alarm_state),
        )
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_SSTATE,
            string_value(gas.sensor_state),
        )

    if sdata.concentration is not None and sdata.concentration.is_valid:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_PPM,
            to_quantity(
                sdata.concentration.ppm,
                CONCENTRATION_PARTS_PER_MILLION,
                DIGITS_NONE,
            ),
        )

    if sdata.adcs:
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_VOLTAGE,
            to_quantity(
                sdata.adcs[0].voltage, UnitOfElectricPotential.VOLT, DIGITS_ADC
            ),
        )

    external_power = profile.settings.external_power
    charger = is_externally_powered(external_power, sdata)
    if external_power is not None or sdata.charger is not None:
        updated |= handler.update_channel(
            CHANNEL_GROUP_DEV_STATUS,
            CHANNEL_DEVST_CHARGER,
            OnOffType.from_bool(charger),
        )

    if sdata.bat is not None:
        battery = sdata.bat.value or 0.0
        updated |= handler.update_channel(
            CHANNEL_GROUP_BATTERY,
            CHANNEL_SENSOR_BAT_LEVEL,
            to_quantity(battery, PERCENTAGE, DIGITS_NONE),
        )
        low_battery = not charger and battery < profile.config.low_battery
        changed = handler.update_channel(
            CHANNEL_GROUP_BATTERY,
            CHANNEL_SENSOR_BAT_LOW,
            OnOffType.from_bool(low_battery),
        )
        updated |= changed
        if changed and low_battery:
            _LOGGER.debug(
                "Battery level %s below threshold %s",
                battery,
                profile.config.low_battery,
            )
            handler.post_event(ALARM_TYPE_LOW_BATTERY, False)

    if sdata.motion is not None:
        # Shelly Sense
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR, CHANNEL_SENSOR_MOTION, OnOffType.from_bool(sdata.motion)
        )

    if sdata.sensor is not None:
        # Shelly Motion
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_MOTION_ACT,
            OnOffType.from_bool(sdata.sensor.motion_active),
        )
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_MOTION,
            OnOffType.from_bool(sdata.sensor.motion),
        )
        motion_ts = sdata.sensor.motion_timestamp or 0
        if motion_ts:
            updated |= handler.update_channel(
                CHANNEL_GROUP_SENSOR,
                CHANNEL_SENSOR_MOTION_TS,
                DateTimeValue(device_timestamp(profile.timezone, motion_ts)),
            )

    updated |= handler.update_inputs(status)

    if updated:
        handler.update_channel(
            profile.control_group(0),
            CHANNEL_LAST_UPDATE,
            DateTimeValue(dt_util.now()),
        )

    return updated


def _update_thermostat(
    handler: ShellyThingHandler,
    thermostat: ShellyThermostat,
    settings: ShellyThermostatSettings,
) -> bool:
    """Write TRV boost, schedule, temperature and valve position channels."""

    updated = False
    device_minutes = thermostat.boost_minutes or 0
    boost_minutes = device_minutes if device_minutes > 0 else settings.boost_minutes or 0

    updated |= handler.update_channel(
        CHANNEL_GROUP_CONTROL,
        CHANNEL_CONTROL_BCONTROL,
        OnOffType.from_bool(device_minutes > 0),
    )
    updated |= handler.update_channel(
        CHANNEL_GROUP_CONTROL,
        CHANNEL_CONTROL_BTIMER,
        to_quantity(boost_minutes, UnitOfTime.MINUTES, DIGITS_NONE),
    )

    target = thermostat.target_temp
    auto = target is not None and bool(target.enabled)
    updated |= handler.update_channel(
        CHANNEL_GROUP_CONTROL,
        CHANNEL_CONTROL_MODE,
        string_value(SHELLY_TRV_MODE_AUTO if auto else SHELLY_TRV_MODE_MANUAL),
    )

    schedule = bool(thermostat.schedule)
    profile_index = (thermostat.schedule_profile or 0) + 1 if schedule else 0
    updated |= handler.update_channel(
        CHANNEL_GROUP_CONTROL, CHANNEL_CONTROL_PROFILE, DecimalValue(profile_index)
    )
    updated |= handler.update_channel(
        CHANNEL_GROUP_DEV_STATUS, CHANNEL_DEVST_SCHEDULE, OnOffType.from_bool(schedule)
    )

    if thermostat.tmp is not None:
        current = convert_to_celsius(thermostat.tmp.value, thermostat.tmp.units)
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_TEMP,
            to_quantity(current, UnitOfTemperature.CELSIUS, DIGITS_TEMP),
        )
        if target is not None:
            setpoint = convert_to_celsius(target.value, target.units)
            updated |= handler.update_channel(
                CHANNEL_GROUP_CONTROL,
                CHANNEL_CONTROL_SETTEMP,
                to_quantity(setpoint, UnitOfTemperature.CELSIUS, DIGITS_TEMP),
            )

    if thermostat.pos is not None:
        position = thermostat.pos
        updated |= handler.update_channel(
            CHANNEL_GROUP_CONTROL,
            CHANNEL_CONTROL_POSITION,
            UNDEF
            if position == SHELLY_TRV_POS_UNDEFINED
            else to_quantity(position, PERCENTAGE, DIGITS_NONE),
        )
        updated |= handler.update_channel(
            CHANNEL_GROUP_SENSOR,
            CHANNEL_SENSOR_STATE,
            OpenClosedType.OPEN if position > 0 else OpenClosedType.CLOSED,
        )

    return updated
