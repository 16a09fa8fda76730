"""Normalize Shelly device status payloads into typed channel state."""

from .api import ShellyRESTClient
from .device_status import update_device_status
from .exceptions import ShellyApiError, ShellyAuthError, ShellyDataError, ShellyError
from .handler import DeviceHandler, SensorStatusSource, ShellyThingHandler
from .meters import compute_power_factor, update_meters
from .sensors import async_update_sensors
from .updater import async_update_components

__all__ = [
    "DeviceHandler",
    "SensorStatusSource",
    "ShellyApiError",
    "ShellyAuthError",
    "ShellyDataError",
    "ShellyError",
    "ShellyRESTClient",
    "ShellyThingHandler",
    "async_update_components",
    "async_update_sensors",
    "compute_power_factor",
    "update_device_status",
    "update_meters",
]
