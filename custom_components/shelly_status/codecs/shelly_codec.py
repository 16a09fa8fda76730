"""Codec helpers turning raw Shelly JSON into validated models."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from custom_components.shelly_status.exceptions import ShellyDataError

from .shelly_models import ShellySettings, ShellySettingsStatus, ShellyStatusSensor

_LOGGER = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _decode(model_cls: type[_ModelT], raw: Any, label: str) -> _ModelT:
    """Validate ``raw`` against ``model_cls`` or raise ``ShellyDataError``."""

    if isinstance(raw, model_cls):
        return raw
    if not isinstance(raw, dict):
        raise ShellyDataError(
            f"Unexpected {label} payload type: {type(raw).__name__}"
        )
    try:
        return model_cls.model_validate(raw)
    except ValidationError as err:
        _LOGGER.debug("Invalid %s payload: %s", label, err)
        raise ShellyDataError(f"Invalid {label} payload: {err}") from err


def decode_status(raw: Any) -> ShellySettingsStatus:
    """Validate a ``/status`` payload."""

    return _decode(ShellySettingsStatus, raw, "status")


def decode_sensor_status(raw: Any) -> ShellyStatusSensor:
    """Validate the sensor view of a ``/status`` payload."""

    return _decode(ShellyStatusSensor, raw, "sensor status")


def decode_settings(raw: Any) -> ShellySettings:
    """Validate a ``/settings`` payload."""

    return _decode(ShellySettings, raw, "settings")
