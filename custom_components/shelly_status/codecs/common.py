"""Shared codec validation helpers."""

from __future__ import annotations

from typing import Any


def normalize_units(units: Any) -> str | None:
    """Return temperature units as an upper-case marker.

    ``None`` and blank strings are kept as ``None``; the devices use ``C`` and
    ``F`` but older firmwares send lower-case markers.
    """

    if units is None:
        return None
    unit_value = str(units).strip().upper()
    return unit_value or None


__all__ = ["normalize_units"]
