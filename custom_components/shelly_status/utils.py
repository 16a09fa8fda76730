"""Utility helpers shared across the Shelly status integration."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import math
from typing import Any

from homeassistant.const import UnitOfTemperature
from homeassistant.util import dt as dt_util
from homeassistant.util.unit_conversion import TemperatureConverter

from .const import SHELLY_TEMP_FAHRENHEIT


def coerce_int(value: Any) -> int | None:
    """Return ``value`` as ``int`` when possible, else ``None``."""

    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    candidate = str(value).strip()
    if not candidate:
        return None
    try:
        return int(float(candidate))
    except (TypeError, ValueError):
        return None


def round_half_up(value: float, digits: int) -> float:
    """Round ``value`` to ``digits`` decimals, halves away from zero."""

    try:
        quantum = Decimal(1).scaleb(-digits)
        return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return value


def map_signal_strength(dbm: int) -> int:
    """Map a WiFi RSSI in dBm to a 0-4 signal quality bucket."""

    if dbm > -60:
        return 4
    if dbm > -70:
        return 3
    if dbm > -80:
        return 2
    if dbm > -90:
        return 1
    return 0


def fahrenheit_to_celsius(value: float) -> float:
    """Convert a Fahrenheit reading to Celsius."""

    return TemperatureConverter.convert(
        value, UnitOfTemperature.FAHRENHEIT, UnitOfTemperature.CELSIUS
    )


def convert_to_celsius(value: float | None, units: str | None) -> float:
    """Return ``value`` in Celsius given the device reported ``units``.

    Missing readings map to ``0.0``; anything but ``F`` is taken as Celsius.
    """

    if value is None:
        return 0.0
    if (units or "").strip().upper() == SHELLY_TEMP_FAHRENHEIT:
        return fahrenheit_to_celsius(value)
    return float(value)


def device_timestamp(
    timezone_name: str | None,
    timestamp: int,
    *,
    now: datetime | None = None,
) -> datetime:
    """Translate a device-local epoch ``timestamp`` into an aware datetime.

    Shelly devices report seconds since the epoch in their local time, so the
    current UTC offset of the device timezone is removed before conversion.
    """

    tzinfo = dt_util.get_time_zone(timezone_name) if timezone_name else None
    if tzinfo is None:
        tzinfo = dt_util.DEFAULT_TIME_ZONE

    reference = (now or dt_util.now()).astimezone(tzinfo)
    offset = reference.utcoffset()
    delta = int(offset.total_seconds()) if offset is not None else 0
    return dt_util.utc_from_timestamp(timestamp - delta).astimezone(tzinfo)


def mask_identifier(value: str | None) -> str:
    """Return a masked identifier suitable for log output."""

    if value is None:
        return ""
    trimmed = str(value).strip()
    if not trimmed:
        return ""
    if len(trimmed) <= 4:
        return "***"
    if len(trimmed) <= 8:
        return f"{trimmed[:2]}...{trimmed[-2:]}"
    prefix = trimmed[:6]
    suffix = trimmed[-4:]
    return f"{prefix}...{suffix}"
