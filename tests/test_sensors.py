from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from homeassistant.const import (
    CONCENTRATION_PARTS_PER_MILLION,
    DEGREE,
    LIGHT_LUX,
    PERCENTAGE,
    UnitOfElectricPotential,
    UnitOfTemperature,
    UnitOfTime,
)
import pytest

from custom_components.shelly_status.codecs import (
    ShellyTemperature,
    decode_sensor_status,
    decode_status,
)
from custom_components.shelly_status.domain import (
    UNDEF,
    ChannelDefinitionKind,
    DateTimeValue,
    DecimalValue,
    OnOffType,
    OpenClosedType,
    QuantityValue,
    StringValue,
)
from custom_components.shelly_status.exceptions import ShellyApiError
from custom_components.shelly_status.sensors import (
    async_update_sensors,
    is_externally_powered,
    sensor_temperature_celsius,
)


async def _run(handler, status: dict[str, Any] | None = None) -> bool:
    return await async_update_sensors(handler, decode_status(status or {}))


def _celsius(value: float) -> QuantityValue:
    return QuantityValue(value, UnitOfTemperature.CELSIUS)


TRV_SETTINGS = {"thermostats": [{"boost_minutes": 30}]}


def _trv_status(**overrides: Any) -> dict[str, Any]:
    thermostat = {
        "pos": 45,
        "target_t": {"enabled": True, "value": 70.0, "units": "F"},
        "tmp": {"value": 68.0, "units": "F", "is_valid": True},
        "schedule": True,
        "schedule_profile": 1,
        "boost_minutes": 0,
    }
    thermostat.update(overrides)
    return {"thermostats": [thermostat]}


def test_sensor_temperature_prefers_matching_unit_field() -> None:
    assert sensor_temperature_celsius(
        ShellyTemperature(value=20.0, t_c=21.5, units="C")
    ) == 21.5
    assert sensor_temperature_celsius(
        ShellyTemperature(value=99.0, t_f=212.0, t_c=100.0, units="F")
    ) == pytest.approx(100.0)
    assert sensor_temperature_celsius(ShellyTemperature(value=19.0)) == 19.0


def test_sensor_temperature_fahrenheit_falls_back_to_celsius_field() -> None:
    assert sensor_temperature_celsius(ShellyTemperature(t_c=21.5, units="F")) == 21.5
    assert sensor_temperature_celsius(
        ShellyTemperature(value=212.0, units="F")
    ) == pytest.approx(100.0)
    assert sensor_temperature_celsius(ShellyTemperature(units="F")) == 0.0


@pytest.mark.parametrize(
    "external_power, payload, expected",
    [(1, {}, True), (0, {"charger": True}, True), (0, {"charger": False}, False), (None, {}, False)],
)
def test_is_externally_powered(external_power, payload, expected) -> None:
    assert is_externally_powered(external_power, decode_sensor_status(payload)) is expected


@pytest.mark.asyncio
async def test_non_sensor_devices_are_skipped(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("relay"), {"bat": {"value": 50}})

    assert await _run(handler) is False
    assert handler.api.calls == 0
    assert handler.writes == []


@pytest.mark.asyncio
async def test_door_window_state_and_error(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor"),
        {"sensor": {"state": "open", "is_valid": True}, "sensor_error": 0},
    )

    assert await _run(handler) is True
    assert handler.value("sensors", "state") is OpenClosedType.OPEN
    assert handler.value("sensors", "sensor_error") == StringValue("0")
    assert handler.value("sensors", "motion") is OnOffType.OFF
    assert handler.value("sensors", "motion_active") is OnOffType.OFF
    assert isinstance(handler.value("sensors", "last_update"), DateTimeValue)
    assert handler.events == []
    assert handler.store.definitions[0][0] is ChannelDefinitionKind.SENSOR


@pytest.mark.asyncio
async def test_invalid_contact_state_is_not_written(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor"), {"sensor": {"state": "open", "is_valid": False}}
    )

    await _run(handler)

    assert "state" not in handler.written("sensors")
    assert "sensor_error" not in handler.written("sensors")


@pytest.mark.asyncio
async def test_sensor_error_posts_event_once(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor"),
        {"sensor": {"state": "close", "is_valid": True}, "sensor_error": "1"},
    )

    await _run(handler)
    await _run(handler)

    assert handler.value("sensors", "state") is OpenClosedType.CLOSED
    assert handler.events == [("1", True)]


@pytest.mark.asyncio
async def test_missing_sensor_error_posts_nothing(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor"), {"sensor": {"state": "open", "is_valid": True}}
    )

    await _run(handler)

    assert handler.value("sensors", "sensor_error") == StringValue("")
    assert handler.events == []


@pytest.mark.asyncio
async def test_fahrenheit_sensor_temperature_is_converted(
    profile_factory, handler_factory
) -> None:
    handler = handler_factory(
        profile_factory("sensor"),
        {"tmp": {"value": 212.0, "units": "F", "tF": 212.0, "tC": 100.0, "is_valid": True}},
    )

    await _run(handler)

    assert handler.value("sensors", "temperature") == _celsius(100.0)


@pytest.mark.asyncio
async def test_invalid_temperature_is_not_written(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor"), {"tmp": {"value": 21.0, "is_valid": False}}
    )

    await _run(handler)

    assert "temperature" not in handler.written("sensors")


@pytest.mark.asyncio
async def test_thermostat_channels(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("thermostat", TRV_SETTINGS))

    assert await _run(handler, _trv_status()) is True

    assert handler.value("control", "boost") is OnOffType.OFF
    assert handler.value("control", "boost_timer") == QuantityValue(
        30.0, UnitOfTime.MINUTES
    )
    assert handler.value("control", "mode") == StringValue("auto")
    assert handler.value("control", "profile") == DecimalValue(2)
    assert handler.value("device", "schedule") is OnOffType.ON
    assert handler.value("sensors", "temperature") == _celsius(20.0)
    assert handler.value("control", "target_temp") == _celsius(21.1)
    assert handler.value("control", "position") == QuantityValue(45.0, PERCENTAGE)
    assert handler.value("sensors", "state") is OpenClosedType.OPEN


@pytest.mark.asyncio
async def test_thermostat_boost_and_manual_mode(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("thermostat", TRV_SETTINGS))

    await _run(
        handler,
        _trv_status(
            boost_minutes=15,
            schedule=False,
            target_t={"enabled": False, "value": 22.0, "units": "C"},
        ),
    )

    assert handler.value("control", "boost") is OnOffType.ON
    assert handler.value("control", "boost_timer") == QuantityValue(
        15.0, UnitOfTime.MINUTES
    )
    assert handler.value("control", "mode") == StringValue("manual")
    assert handler.value("control", "profile") == DecimalValue(0)
    assert handler.value("device", "schedule") is OnOffType.OFF
    assert handler.value("control", "target_temp") == _celsius(22.0)


@pytest.mark.asyncio
async def test_thermostat_undefined_position(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("thermostat", TRV_SETTINGS))

    await _run(handler, _trv_status(pos=-1))

    assert handler.value("control", "position") is UNDEF
    assert handler.value("sensors", "state") is OpenClosedType.CLOSED


@pytest.mark.asyncio
async def test_thermostat_requires_settings(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("thermostat"))

    await _run(handler, _trv_status())

    assert handler.written("control") == set()


@pytest.mark.asyncio
async def test_low_battery_event_on_transition_only(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("sensor"), {"bat": {"value": 25}})

    await _run(handler)
    assert handler.value("battery", "low_battery") is OnOffType.OFF
    assert handler.value("battery", "battery_level") == QuantityValue(25.0, PERCENTAGE)

    handler.api.payload = {"bat": {"value": 15}}
    await _run(handler)
    await _run(handler)

    assert handler.value("battery", "low_battery") is OnOffType.ON
    assert handler.events == [("LOW_BATTERY", False)]


@pytest.mark.asyncio
async def test_low_battery_threshold_is_configurable(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor", low_battery=30), {"bat": {"value": 25}}
    )

    await _run(handler)

    assert handler.value("battery", "low_battery") is OnOffType.ON


@pytest.mark.asyncio
async def test_external_power_suppresses_low_battery(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor", {"external_power": 1}), {"bat": {"value": 5}}
    )

    await _run(handler)

    assert handler.value("device", "charger") is OnOffType.ON
    assert handler.value("battery", "low_battery") is OnOffType.OFF
    assert handler.events == []


@pytest.mark.asyncio
async def test_charger_flag_from_sensor_payload(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("sensor"), {"charger": False})

    await _run(handler)

    assert handler.value("device", "charger") is OnOffType.OFF


@pytest.mark.asyncio
async def test_environment_readings(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor"),
        {
            "hum": {"value": 45.26},
            "lux": {"value": 120.4, "illumination": "twilight", "is_valid": True},
            "accel": {"tilt": 12.6},
            "flood": True,
            "smoke": False,
        },
    )

    await _run(handler)

    assert handler.value("sensors", "humidity") == QuantityValue(45.3, PERCENTAGE)
    assert handler.value("sensors", "lux") == QuantityValue(120.0, LIGHT_LUX)
    assert handler.value("sensors", "illumination") == StringValue("twilight")
    assert handler.value("sensors", "tilt") == QuantityValue(13.0, DEGREE)
    assert handler.value("sensors", "flood") is OnOffType.ON
    assert handler.value("sensors", "smoke") is OnOffType.OFF


@pytest.mark.asyncio
async def test_gas_concentration_and_adc(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor"),
        {
            "gas_sensor": {
                "self_test_state": "completed",
                "alarm_state": "none",
                "sensor_state": "normal",
            },
            "concentration": {"ppm": 42, "is_valid": True},
            "adcs": [{"voltage": 12.345}],
        },
    )

    await _run(handler)

    assert handler.value("device", "self_test") == StringValue("completed")
    assert handler.value("sensors", "alarm_state") == StringValue("none")
    assert handler.value("sensors", "sensor_state") == StringValue("normal")
    assert handler.value("sensors", "ppm") == QuantityValue(
        42.0, CONCENTRATION_PARTS_PER_MILLION
    )
    assert handler.value("sensors", "voltage") == QuantityValue(
        12.35, UnitOfElectricPotential.VOLT
    )


@pytest.mark.asyncio
async def test_motion_families(profile_factory, handler_factory) -> None:
    handler = handler_factory(
        profile_factory("sensor", {"timezone": "UTC"}),
        {
            "motion": True,
            "sensor": {"motion": True, "active": True, "timestamp": 1_700_000_000},
        },
    )

    await _run(handler)

    assert handler.value("sensors", "motion") is OnOffType.ON
    assert handler.value("sensors", "motion_active") is OnOffType.ON
    assert handler.value("sensors", "motion_timestamp") == DateTimeValue(
        datetime.fromtimestamp(1_700_000_000, UTC)
    )


@pytest.mark.asyncio
async def test_wakeup_reasons_are_forwarded(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("button"), {"act_reasons": ["button"]})

    await _run(handler)

    assert handler.wakeups == [["button"]]


@pytest.mark.asyncio
async def test_inputs_change_writes_last_update(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("button"), inputs_changed=True)

    assert await _run(handler) is True
    assert isinstance(handler.value("status", "last_update"), DateTimeValue)


@pytest.mark.asyncio
async def test_unchanged_pass_skips_last_update(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("sensor"), {"hum": {"value": 40}})

    await _run(handler)
    handler.writes.clear()

    assert await _run(handler) is False
    assert "last_update" not in handler.written("sensors")


@pytest.mark.asyncio
async def test_definitions_requested_until_created(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("sensor"), channels_created=True)

    await _run(handler)

    assert handler.store.definitions == ()


@pytest.mark.asyncio
async def test_transport_errors_propagate(profile_factory, handler_factory) -> None:
    handler = handler_factory(profile_factory("sensor"), error=ShellyApiError("offline"))

    with pytest.raises(ShellyApiError):
        await _run(handler)

    assert handler.writes == []
