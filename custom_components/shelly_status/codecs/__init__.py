"""Vendor payload codecs for Shelly devices."""

from .shelly_codec import decode_sensor_status, decode_settings, decode_status
from .shelly_models import (
    ShellyEMeter,
    ShellyMeter,
    ShellySettings,
    ShellySettingsStatus,
    ShellyStatusSensor,
    ShellyTemperature,
    ShellyThermostat,
    ShellyThermostatSettings,
)

__all__ = [
    "ShellyEMeter",
    "ShellyMeter",
    "ShellySettings",
    "ShellySettingsStatus",
    "ShellyStatusSensor",
    "ShellyTemperature",
    "ShellyThermostat",
    "ShellyThermostatSettings",
    "decode_sensor_status",
    "decode_settings",
    "decode_status",
]
