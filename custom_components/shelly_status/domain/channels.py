"""Typed channel values written to the platform channel model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from custom_components.shelly_status.utils import round_half_up


class ChannelDefinitionKind(str, Enum):
    """Kinds of channel definitions requested from the schema builder."""

    DEVICE = "device"
    METER = "meter"
    EMETER = "emeter"
    SENSOR = "sensor"


class OnOffType(str, Enum):
    """Binary switch state."""

    ON = "ON"
    OFF = "OFF"

    @classmethod
    def from_bool(cls, value: bool | None) -> OnOffType:
        """Return ``ON`` for truthy values and ``OFF`` otherwise."""

        return cls.ON if value else cls.OFF


class OpenClosedType(str, Enum):
    """Contact state."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class UnDefType(str, Enum):
    """Explicit undefined state, distinct from a numeric zero."""

    UNDEF = "UNDEF"


UNDEF = UnDefType.UNDEF


@dataclass(frozen=True, slots=True)
class ChannelKey:
    """Address of a channel inside a device."""

    group: str
    channel: str

    def __str__(self) -> str:
        """Return the ``group#channel`` notation used in logs."""

        return f"{self.group}#{self.channel}"


@dataclass(frozen=True, slots=True)
class QuantityValue:
    """Numeric value with a unit."""

    value: float
    unit: str


@dataclass(frozen=True, slots=True)
class DecimalValue:
    """Unit-less number."""

    value: float | int


@dataclass(frozen=True, slots=True)
class StringValue:
    """Free-form string state."""

    value: str


@dataclass(frozen=True, slots=True)
class DateTimeValue:
    """Point in time."""

    value: datetime


ChannelValue = (
    QuantityValue
    | DecimalValue
    | StringValue
    | DateTimeValue
    | OnOffType
    | OpenClosedType
    | UnDefType
)


def to_quantity(value: float | int | None, unit: str, digits: int | None = None) -> QuantityValue:
    """Return a ``QuantityValue`` rounded to ``digits`` when given."""

    numeric = float(value or 0.0)
    if digits is not None:
        numeric = round_half_up(numeric, digits)
    return QuantityValue(numeric, unit)


def string_value(value: Any) -> StringValue:
    """Return ``value`` as a string state; ``None`` maps to an empty string."""

    return StringValue("" if value is None else str(value))
