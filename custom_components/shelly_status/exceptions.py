"""Exceptions raised by the Shelly status integration."""

from __future__ import annotations


class ShellyError(Exception):
    """Base exception for Shelly status errors."""


class ShellyApiError(ShellyError):
    """Communication with the device failed."""


class ShellyAuthError(ShellyApiError):
    """The device rejected the configured credentials."""


class ShellyDataError(ShellyError):
    """The device returned a payload that could not be decoded."""
