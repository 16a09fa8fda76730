"""Pydantic models for Shelly Gen1 status and settings payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import normalize_units

_MODEL_CONFIG = ConfigDict(extra="ignore", populate_by_name=True)


class ShellyWiFiStatus(BaseModel):
    """Station-mode WiFi status."""

    model_config = _MODEL_CONFIG

    connected: bool | None = None
    ssid: str | None = None
    ip: str | None = None
    rssi: int | None = None


class ShellyTemperature(BaseModel):
    """Temperature block shared by the device, sensor and TRV payloads."""

    model_config = _MODEL_CONFIG

    value: float | None = None
    t_c: float | None = Field(default=None, alias="tC")
    t_f: float | None = Field(default=None, alias="tF")
    units: str | None = None
    is_valid: bool | None = None

    @field_validator("units", mode="before")
    @classmethod
    def _normalize_units(cls, value: Any) -> Any:
        """Upper-case unit markers such as ``c``/``f``."""

        return normalize_units(value)


class ShellyMeter(BaseModel):
    """Simple power meter reading (relays, rollers, dimmers, bulbs)."""

    model_config = _MODEL_CONFIG

    power: float | None = None
    overpower: float | None = None
    is_valid: bool | None = None
    timestamp: int | None = None
    counters: list[float] | None = None
    total: float | None = None


class ShellyEMeter(BaseModel):
    """Polyphase energy meter reading (EM, 3EM)."""

    model_config = _MODEL_CONFIG

    power: float | None = None
    reactive: float | None = None
    pf: float | None = None
    voltage: float | None = None
    current: float | None = None
    is_valid: bool | None = None
    total: float | None = None
    total_returned: float | None = None


class ShellyTargetTemp(BaseModel):
    """Thermostat target temperature."""

    model_config = _MODEL_CONFIG

    enabled: bool | None = None
    value: float | None = None
    units: str | None = None

    @field_validator("units", mode="before")
    @classmethod
    def _normalize_units(cls, value: Any) -> Any:
        """Upper-case unit markers such as ``c``/``f``."""

        return normalize_units(value)


class ShellyThermostat(BaseModel):
    """Runtime state of a TRV thermostat."""

    model_config = _MODEL_CONFIG

    pos: float | None = None
    target_temp: ShellyTargetTemp | None = Field(default=None, alias="target_t")
    tmp: ShellyTemperature | None = None
    schedule: bool | None = None
    schedule_profile: int | None = None
    boost_minutes: int | None = None
    window_open: bool | None = None


class ShellySettingsStatus(BaseModel):
    """Point-in-time ``/status`` snapshot."""

    model_config = _MODEL_CONFIG

    uptime: int | None = None
    wifi_sta: ShellyWiFiStatus | None = None
    temperature: float | None = None
    tmp: ShellyTemperature | None = None
    sleep_time: int | None = None
    has_update: bool | None = None
    meters: list[ShellyMeter] | None = None
    emeters: list[ShellyEMeter] | None = None
    thermostats: list[ShellyThermostat] | None = None
    inputs: list[dict[str, Any]] | None = None


class ShellySensorState(BaseModel):
    """Door/window contact or motion detector block."""

    model_config = _MODEL_CONFIG

    state: str | None = None
    is_valid: bool | None = None
    motion: bool | None = None
    motion_active: bool | None = Field(default=None, alias="active")
    motion_timestamp: int | None = Field(default=None, alias="timestamp")
    vibration: bool | None = None


class ShellyHumidity(BaseModel):
    """Relative humidity reading."""

    model_config = _MODEL_CONFIG

    value: float | None = None
    is_valid: bool | None = None


class ShellyLux(BaseModel):
    """Illuminance reading."""

    model_config = _MODEL_CONFIG

    value: float | None = None
    illumination: str | None = None
    is_valid: bool | None = None


class ShellyAccelerometer(BaseModel):
    """Accelerometer block of the door/window sensor."""

    model_config = _MODEL_CONFIG

    tilt: float | None = None
    vibration: int | None = None


class ShellyGasSensor(BaseModel):
    """Gas detector state strings."""

    model_config = _MODEL_CONFIG

    self_test_state: str | None = None
    alarm_state: str | None = None
    sensor_state: str | None = None


class ShellyConcentration(BaseModel):
    """Gas concentration reading."""

    model_config = _MODEL_CONFIG

    ppm: int | None = None
    is_valid: bool | None = None


class ShellyADC(BaseModel):
    """Analog input reading."""

    model_config = _MODEL_CONFIG

    voltage: float | None = None


class ShellyBattery(BaseModel):
    """Battery state."""

    model_config = _MODEL_CONFIG

    value: float | None = None
    voltage: float | None = None


class ShellyStatusSensor(BaseModel):
    """``/status`` payload of battery powered and sensor devices."""

    model_config = _MODEL_CONFIG

    act_reasons: list[str] | None = None
    sensor: ShellySensorState | None = None
    sensor_error: str | None = None
    tmp: ShellyTemperature | None = None
    hum: ShellyHumidity | None = None
    lux: ShellyLux | None = None
    accel: ShellyAccelerometer | None = None
    flood: bool | None = None
    smoke: bool | None = None
    gas_sensor: ShellyGasSensor | None = None
    concentration: ShellyConcentration | None = None
    adcs: list[ShellyADC] | None = None
    charger: bool | None = None
    bat: ShellyBattery | None = None
    motion: bool | None = None

    @field_validator("sensor_error", mode="before")
    @classmethod
    def _stringify_error(cls, value: Any) -> Any:
        """Devices report the error code as a number or a string."""

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value))
        return value

    @field_validator("act_reasons", mode="before")
    @classmethod
    def _listify_reasons(cls, value: Any) -> Any:
        """Accept a single wake-up reason as well as a list."""

        if isinstance(value, str):
            return [value]
        return value


class ShellyThermostatSettings(BaseModel):
    """Persisted TRV settings (defaults used when the device omits them)."""

    model_config = _MODEL_CONFIG

    boost_minutes: int | None = None
    target_temp: ShellyTargetTemp | None = Field(default=None, alias="target_t")
    schedule: bool | None = None
    schedule_profile: int | None = None


class ShellySettings(BaseModel):
    """Subset of ``/settings`` relevant to status normalization."""

    model_config = _MODEL_CONFIG

    timezone: str | None = None
    calibrated: bool | None = None
    external_power: int | None = None
    thermostats: list[ShellyThermostatSettings] | None = None
    relays: list[dict[str, Any]] | None = None
    rollers: list[dict[str, Any]] | None = None
    lights: list[dict[str, Any]] | None = None
    emeters: list[dict[str, Any]] | None = None
