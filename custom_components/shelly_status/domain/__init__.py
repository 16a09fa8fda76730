"""Domain-layer primitives for the Shelly status integration."""

from .channels import (
    UNDEF,
    ChannelDefinitionKind,
    ChannelKey,
    ChannelValue,
    DateTimeValue,
    DecimalValue,
    OnOffType,
    OpenClosedType,
    QuantityValue,
    StringValue,
    UnDefType,
    string_value,
    to_quantity,
)
from .profile import (
    DeviceCapabilities,
    DeviceConfig,
    DeviceKind,
    DeviceProfile,
    build_device_profile,
    device_counts,
    normalize_device_kind,
)
from .state import ChannelStateStore

__all__ = [
    "UNDEF",
    "ChannelDefinitionKind",
    "ChannelKey",
    "ChannelStateStore",
    "ChannelValue",
    "DateTimeValue",
    "DecimalValue",
    "DeviceCapabilities",
    "DeviceConfig",
    "DeviceKind",
    "DeviceProfile",
    "OnOffType",
    "OpenClosedType",
    "QuantityValue",
    "StringValue",
    "UnDefType",
    "build_device_profile",
    "device_counts",
    "normalize_device_kind",
    "string_value",
    "to_quantity",
]
