"""Constants for the Shelly status integration."""

from __future__ import annotations

from typing import Final

# HTTP paths (Gen1 REST API)
STATUS_PATH: Final = "/status"
SETTINGS_PATH: Final = "/settings"
DEFAULT_REQUEST_TIMEOUT: Final = 15  # seconds

# --- Channel groups ---
CHANNEL_GROUP_DEV_STATUS: Final = "device"
CHANNEL_GROUP_METER: Final = "meter"
CHANNEL_GROUP_SENSOR: Final = "sensors"
CHANNEL_GROUP_BATTERY: Final = "battery"
CHANNEL_GROUP_CONTROL: Final = "control"
CHANNEL_GROUP_RELAY_CONTROL: Final = "relay"
CHANNEL_GROUP_ROL_CONTROL: Final = "roller"
CHANNEL_GROUP_LIGHT_CONTROL: Final = "control"
CHANNEL_GROUP_LIGHT_CHANNEL: Final = "channel"
CHANNEL_GROUP_STATUS: Final = "status"

# --- Device status channels ---
CHANNEL_DEVST_UPTIME: Final = "uptime"
CHANNEL_DEVST_RSSI: Final = "wifi_signal"
CHANNEL_DEVST_ITEMP: Final = "internal_temp"
CHANNEL_DEVST_UPDATE: Final = "update_available"
CHANNEL_DEVST_CALIBRATED: Final = "calibrated"
CHANNEL_DEVST_CHARGER: Final = "charger"
CHANNEL_DEVST_SCHEDULE: Final = "schedule"
CHANNEL_DEVST_SELFTTEST: Final = "self_test"
CHANNEL_DEVST_ACCUWATTS: Final = "accumulated_watts"
CHANNEL_DEVST_ACCUTOTAL: Final = "accumulated_total"
CHANNEL_DEVST_ACCURETURNED: Final = "accumulated_returned"

# --- Meter channels ---
CHANNEL_METER_CURRENTWATTS: Final = "current_watts"
CHANNEL_METER_TOTALKWH: Final = "total_kwh"
CHANNEL_METER_LASTMIN1: Final = "last_power1"
CHANNEL_EMETER_TOTALRET: Final = "returned_kwh"
CHANNEL_EMETER_REACTWATTS: Final = "reactive_watts"
CHANNEL_EMETER_VOLTAGE: Final = "voltage"
CHANNEL_EMETER_CURRENT: Final = "current"
CHANNEL_EMETER_PFACTOR: Final = "power_factor"
CHANNEL_LAST_UPDATE: Final = "last_update"

# --- Sensor channels ---
CHANNEL_SENSOR_STATE: Final = "state"
CHANNEL_SENSOR_ERROR: Final = "sensor_error"
CHANNEL_SENSOR_TEMP: Final = "temperature"
CHANNEL_SENSOR_HUM: Final = "humidity"
CHANNEL_SENSOR_LUX: Final = "lux"
CHANNEL_SENSOR_ILLUM: Final = "illumination"
CHANNEL_SENSOR_TILT: Final = "tilt"
CHANNEL_SENSOR_FLOOD: Final = "flood"
CHANNEL_SENSOR_SMOKE: Final = "smoke"
CHANNEL_SENSOR_ALARM_STATE: Final = "alarm_state"
CHANNEL_SENSOR_SSTATE: Final = "sensor_state"
CHANNEL_SENSOR_PPM: Final = "ppm"
CHANNEL_SENSOR_VOLTAGE: Final = "voltage"
CHANNEL_SENSOR_MOTION: Final = "motion"
CHANNEL_SENSOR_MOTION_ACT: Final = "motion_active"
CHANNEL_SENSOR_MOTION_TS: Final = "motion_timestamp"
CHANNEL_SENSOR_SLEEPTIME: Final = "sleep_time"
CHANNEL_SENSOR_BAT_LEVEL: Final = "battery_level"
CHANNEL_SENSOR_BAT_LOW: Final = "low_battery"

# --- Thermostat (TRV) control channels ---
CHANNEL_CONTROL_BCONTROL: Final = "boost"
CHANNEL_CONTROL_BTIMER: Final = "boost_timer"
CHANNEL_CONTROL_MODE: Final = "mode"
CHANNEL_CONTROL_PROFILE: Final = "profile"
CHANNEL_CONTROL_SETTEMP: Final = "target_temp"
CHANNEL_CONTROL_POSITION: Final = "position"

# --- Device API values ---
SHELLY_API_INVTEMP: Final = 999.0
SHELLY_API_DWSTATE_OPEN: Final = "open"
SHELLY_TEMP_FAHRENHEIT: Final = "F"
SHELLY_TRV_MODE_AUTO: Final = "auto"
SHELLY_TRV_MODE_MANUAL: Final = "manual"
SHELLY_TRV_POS_UNDEFINED: Final = -1
SHELLY_UPTIME_RUNNING: Final = 10  # seconds

# Alarm codes posted by this layer
ALARM_TYPE_LOW_BATTERY: Final = "LOW_BATTERY"
SENSOR_ERROR_NONE: Final = "0"

# Rounding precision per quantity
DIGITS_NONE: Final = 0
DIGITS_WATT: Final = 2
DIGITS_KWH: Final = 3
DIGITS_VOLT: Final = 1
DIGITS_TEMP: Final = 1
DIGITS_LUX: Final = 0
DIGITS_PERCENT: Final = 1
DIGITS_ADC: Final = 2

# Unit scaling
WATT_MINUTES_PER_KWH: Final = 60.0 * 1000.0
WATT_HOURS_PER_KWH: Final = 1000.0
POWER_FACTOR_NOISE_FLOOR: Final = 1.5

# Options
CONF_LOW_BATTERY: Final = "low_battery"
DEFAULT_LOW_BATTERY: Final = 20  # percent
MIN_LOW_BATTERY: Final = 0
MAX_LOW_BATTERY: Final = 100
