"""Device handler contract consumed by the status updaters."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from typing import Any, Protocol

from .codecs import ShellySettingsStatus, ShellyStatusSensor
from .domain import ChannelDefinitionKind, ChannelStateStore, ChannelValue, DeviceProfile
from .updater import async_update_components

_LOGGER = logging.getLogger(__name__)

AlarmCallback = Callable[[str, bool], None]
WakeupCallback = Callable[[Sequence[str]], bool]
InputsCallback = Callable[[ShellySettingsStatus], bool]


class SensorStatusSource(Protocol):
    """Protocol for the client fetching the sensor status payload."""

    async def get_sensor_status(self) -> ShellyStatusSensor:
        """Return the current sensor status; raises ``ShellyApiError``."""


class StatusSource(SensorStatusSource, Protocol):
    """Protocol for clients that can also fetch the full status snapshot."""

    async def get_status(self) -> ShellySettingsStatus:
        """Return the current status snapshot; raises ``ShellyApiError``."""


class ShellyThingHandler(Protocol):
    """Protocol for the per-device handler the updaters write through."""

    profile: DeviceProfile
    api: SensorStatusSource

    @property
    def channels_created(self) -> bool:
        """Return ``True`` once channel definitions exist for this session."""

    def update_channel(self, group: str, channel: str, value: ChannelValue) -> bool:
        """Write ``value``; return ``True`` when it differs from the stored one."""

    def update_channel_definitions(
        self, kind: ChannelDefinitionKind, context: Any
    ) -> None:
        """Request channel definitions of ``kind`` built from ``context``."""

    def post_event(self, code: str, is_error: bool) -> None:
        """Post an alarm or event notification."""

    def update_wakeup_reason(self, reasons: Sequence[str] | None) -> bool:
        """Forward the device wake-up reasons."""

    def update_inputs(self, status: ShellySettingsStatus) -> bool:
        """Map digital input states from ``status``."""


class DeviceHandler:
    """Default handler backed by a ``ChannelStateStore``.

    Alarm, wake-up and input handling are delegated to optional callbacks so
    the hosting platform can plug in its own event transport.
    """

    def __init__(
        self,
        profile: DeviceProfile,
        api: SensorStatusSource,
        store: ChannelStateStore | None = None,
        *,
        alarm_callback: AlarmCallback | None = None,
        wakeup_callback: WakeupCallback | None = None,
        inputs_callback: InputsCallback | None = None,
    ) -> None:
        """Initialise the handler for one device session."""

        self.profile = profile
        self.api = api
        self.store = store if store is not None else ChannelStateStore()
        self._alarm_callback = alarm_callback
        self._wakeup_callback = wakeup_callback
        self._inputs_callback = inputs_callback

    @property
    def channels_created(self) -> bool:
        """Return ``True`` once the first update cycle completed."""

        return self.store.channels_created

    def update_channel(self, group: str, channel: str, value: ChannelValue) -> bool:
        """Write ``value`` through the channel store."""

        return self.store.update_channel(group, channel, value)

    def update_channel_definitions(
        self, kind: ChannelDefinitionKind, context: Any
    ) -> None:
        """Record a channel definition request for ``kind``."""

        _LOGGER.debug("Requesting %s channel definitions", kind.value)
        self.store.add_definitions(kind, context)

    def post_event(self, code: str, is_error: bool) -> None:
        """Forward an alarm to the configured callback."""

        _LOGGER.debug("Posting %s event %s", "error" if is_error else "alarm", code)
        if self._alarm_callback is not None:
            self._alarm_callback(code, is_error)

    def update_wakeup_reason(self, reasons: Sequence[str] | None) -> bool:
        """Forward wake-up reasons to the configured callback."""

        if not reasons or self._wakeup_callback is None:
            return False
        return bool(self._wakeup_callback(reasons))

    def update_inputs(self, status: ShellySettingsStatus) -> bool:
        """Forward the status to the configured input mapper."""

        if self._inputs_callback is None:
            return False
        return bool(self._inputs_callback(status))

    async def async_refresh(self, status: ShellySettingsStatus | None = None) -> bool:
        """Run one update cycle and mark the channels as created.

        When ``status`` is omitted the snapshot is fetched from ``api``, which
        then has to provide ``get_status``.
        """

        if status is None:
            status = await self.api.get_status()  # type: ignore[attr-defined]
        updated = await async_update_components(self, status)
        self.store.channels_created = True
        return updated
