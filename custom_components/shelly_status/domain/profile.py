"""Device profiles describing the capabilities of a Shelly device."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
import logging
from types import MappingProxyType
from typing import Any

from custom_components.shelly_status.codecs.shelly_models import (
    ShellySettings,
    ShellySettingsStatus,
    ShellyThermostatSettings,
)
from custom_components.shelly_status.const import (
    CHANNEL_GROUP_CONTROL,
    CHANNEL_GROUP_LIGHT_CHANNEL,
    CHANNEL_GROUP_LIGHT_CONTROL,
    CHANNEL_GROUP_METER,
    CHANNEL_GROUP_RELAY_CONTROL,
    CHANNEL_GROUP_ROL_CONTROL,
    CHANNEL_GROUP_SENSOR,
    CHANNEL_GROUP_STATUS,
    CONF_LOW_BATTERY,
    DEFAULT_LOW_BATTERY,
    MAX_LOW_BATTERY,
    MIN_LOW_BATTERY,
)
from custom_components.shelly_status.utils import coerce_int

_LOGGER = logging.getLogger(__name__)


class DeviceKind(str, Enum):
    """Device families with distinct status layouts."""

    RELAY = "relay"
    ROLLER = "roller"
    DIMMER = "dimmer"
    LIGHT = "light"
    BULB = "bulb"
    RGBW2 = "rgbw2"
    EMETER = "emeter"
    SENSOR = "sensor"
    THERMOSTAT = "thermostat"
    BUTTON = "button"
    GENERIC = "generic"


def normalize_device_kind(kind: DeviceKind | str) -> DeviceKind:
    """Normalize assorted device kind inputs to ``DeviceKind``."""

    if isinstance(kind, DeviceKind):
        return kind
    try:
        return DeviceKind(str(kind).strip().lower())
    except ValueError as err:
        raise ValueError(f"Unknown device kind: {kind}") from err


@dataclass(frozen=True, slots=True)
class DeviceCapabilities:
    """Capability flags and output counts of a device."""

    is_roller: bool = False
    is_rgbw2: bool = False
    is_emeter: bool = False
    is_light: bool = False
    is_bulb: bool = False
    is_dimmer: bool = False
    is_sensor: bool = False
    is_button: bool = False
    has_relays: bool = False
    has_battery: bool = False
    num_meters: int = 1
    num_relays: int = 0
    num_rollers: int = 0
    num_inputs: int = 0
    num_lights: int = 0


_KIND_CAPABILITIES: Mapping[DeviceKind, Mapping[str, bool]] = MappingProxyType(
    {
        DeviceKind.RELAY: {"has_relays": True},
        DeviceKind.ROLLER: {"is_roller": True, "has_relays": True},
        DeviceKind.DIMMER: {"is_dimmer": True, "is_light": True},
        DeviceKind.LIGHT: {"is_light": True},
        DeviceKind.BULB: {"is_light": True, "is_bulb": True},
        DeviceKind.RGBW2: {"is_light": True, "is_rgbw2": True},
        DeviceKind.EMETER: {"is_emeter": True, "has_relays": True},
        DeviceKind.SENSOR: {"is_sensor": True, "has_battery": True},
        DeviceKind.THERMOSTAT: {"is_sensor": True, "has_battery": True},
        DeviceKind.BUTTON: {"is_button": True, "has_battery": True},
        DeviceKind.GENERIC: {},
    }
)


@dataclass(frozen=True, slots=True)
class DeviceConfig:
    """Per-device options configured by the user."""

    low_battery: int = DEFAULT_LOW_BATTERY

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any] | None,
        data: Mapping[str, Any] | None = None,
    ) -> DeviceConfig:
        """Build a config from entry options, falling back to entry data.

        Values that are missing or outside their allowed range fall back to
        the defaults.
        """

        options = options or {}
        data = data or {}
        raw = options.get(CONF_LOW_BATTERY, data.get(CONF_LOW_BATTERY))
        low_battery = coerce_int(raw)
        if low_battery is None or not MIN_LOW_BATTERY <= low_battery <= MAX_LOW_BATTERY:
            if raw is not None:
                _LOGGER.debug(
                    "Ignoring invalid %s option %r; using %s",
                    CONF_LOW_BATTERY,
                    raw,
                    DEFAULT_LOW_BATTERY,
                )
            low_battery = DEFAULT_LOW_BATTERY
        return cls(low_battery=low_battery)


@dataclass(frozen=True, slots=True)
class DeviceProfile:
    """Immutable capability descriptor built once per device session."""

    kind: DeviceKind
    capabilities: DeviceCapabilities
    settings: ShellySettings = field(default_factory=ShellySettings)
    config: DeviceConfig = field(default_factory=DeviceConfig)

    @property
    def timezone(self) -> str | None:
        """Return the device timezone name when configured."""

        return self.settings.timezone

    @property
    def thermostat_settings(self) -> ShellyThermostatSettings | None:
        """Return the settings of the first thermostat when present."""

        if not self.settings.thermostats:
            return None
        return self.settings.thermostats[0]

    def meter_group(self, index: int) -> str:
        """Return the channel group name for meter ``index`` (0-based)."""

        if self.capabilities.num_meters > 1:
            return f"{CHANNEL_GROUP_METER}{index + 1}"
        return CHANNEL_GROUP_METER

    def control_group(self, index: int) -> str:
        """Return the primary control channel group for output ``index``."""

        if index < 0:
            return ""
        caps = self.capabilities
        idx = index + 1
        if caps.is_dimmer:
            return CHANNEL_GROUP_CONTROL
        if caps.is_roller:
            if caps.num_rollers <= 1:
                return CHANNEL_GROUP_ROL_CONTROL
            return f"{CHANNEL_GROUP_ROL_CONTROL}{idx}"
        if caps.has_relays:
            if caps.num_relays <= 1:
                return CHANNEL_GROUP_RELAY_CONTROL
            return f"{CHANNEL_GROUP_RELAY_CONTROL}{idx}"
        if caps.is_rgbw2:
            if caps.num_lights > 1:
                return f"{CHANNEL_GROUP_LIGHT_CHANNEL}{idx}"
            return CHANNEL_GROUP_LIGHT_CONTROL
        if caps.is_light:
            if caps.num_relays <= 1:
                return CHANNEL_GROUP_LIGHT_CONTROL
            return f"{CHANNEL_GROUP_LIGHT_CONTROL}{idx}"
        if caps.is_button:
            return CHANNEL_GROUP_STATUS
        if caps.is_sensor:
            return CHANNEL_GROUP_SENSOR
        if caps.num_inputs <= 1:
            return CHANNEL_GROUP_STATUS
        return f"{CHANNEL_GROUP_STATUS}{idx}"


def device_counts(
    settings: ShellySettings | None, status: ShellySettingsStatus | None = None
) -> dict[str, int]:
    """Return output and meter counts reported by the device payloads.

    Counts the device does not report are left out so the capability
    defaults apply.
    """

    counts: dict[str, int] = {}
    if settings is not None:
        for name, items in (
            ("num_relays", settings.relays),
            ("num_rollers", settings.rollers),
            ("num_lights", settings.lights),
            ("num_meters", settings.emeters),
        ):
            if items:
                counts[name] = len(items)
    if status is not None:
        meters = status.emeters or status.meters
        if meters:
            counts["num_meters"] = len(meters)
        if status.inputs:
            counts["num_inputs"] = len(status.inputs)
    return counts


def build_device_profile(
    kind: DeviceKind | str,
    settings: ShellySettings | None = None,
    config: DeviceConfig | None = None,
    *,
    status: ShellySettingsStatus | None = None,
    **counts: Any,
) -> DeviceProfile:
    """Return a profile for ``kind`` with capability flags from the kind table.

    Output and meter counts are taken from ``settings`` and ``status`` when
    the device reports them. ``counts`` may override them (``num_meters``,
    ``num_relays``, ...) and individual flags such as ``has_battery``.
    """

    normalized = normalize_device_kind(kind)
    capabilities = DeviceCapabilities(**_KIND_CAPABILITIES[normalized])
    overrides = {**device_counts(settings, status), **counts}
    if overrides:
        capabilities = replace(capabilities, **overrides)
    return DeviceProfile(
        kind=normalized,
        capabilities=capabilities,
        settings=settings or ShellySettings(),
        config=config or DeviceConfig(),
    )
