# ruff: noqa: D100,D101,D102,D103,D107
from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
import inspect
from typing import Any

import pytest

from custom_components.shelly_status.codecs import (
    ShellySettings,
    ShellySettingsStatus,
    ShellyStatusSensor,
    decode_sensor_status,
    decode_settings,
    decode_status,
)
from custom_components.shelly_status.domain import (
    ChannelStateStore,
    DeviceConfig,
    DeviceProfile,
    build_device_profile,
)
from custom_components.shelly_status.handler import DeviceHandler


def pytest_configure(config: pytest.Config) -> None:
    """Register custom pytest markers used across the suite."""

    if not config.pluginmanager.hasplugin("pytest_asyncio"):
        config.addinivalue_line(
            "markers", "asyncio: mark test as requiring asyncio event loop support."
        )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async tests when pytest-asyncio is unavailable."""

    if pyfuncitem.config.pluginmanager.hasplugin("pytest_asyncio"):
        return None

    testfunction = pyfuncitem.obj
    if not inspect.iscoroutinefunction(testfunction):
        return None

    marker = pyfuncitem.get_closest_marker("asyncio")
    if marker is None:
        return None

    with asyncio.Runner(debug=False) as runner:
        runner.run(testfunction(**pyfuncitem.funcargs))
    return True


class FakeSensorApi:
    """Sensor status source returning queued payloads."""

    def __init__(
        self,
        payload: ShellyStatusSensor | dict[str, Any] | None = None,
        *,
        error: BaseException | None = None,
        status: ShellySettingsStatus | dict[str, Any] | None = None,
    ) -> None:
        self.payload = payload
        self.error = error
        self.status = status
        self.calls = 0

    async def get_sensor_status(self) -> ShellyStatusSensor:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return decode_sensor_status(self.payload or {})

    async def get_status(self) -> ShellySettingsStatus:
        return decode_status(self.status or {})


class RecordingHandler(DeviceHandler):
    """Device handler recording posted events and every channel write."""

    def __init__(
        self,
        profile: DeviceProfile,
        api: FakeSensorApi | None = None,
        *,
        channels_created: bool = False,
        inputs_changed: bool = False,
    ) -> None:
        self.events: list[tuple[str, bool]] = []
        self.writes: list[tuple[str, str, Any]] = []
        self.wakeups: list[Sequence[str]] = []
        super().__init__(
            profile,
            api or FakeSensorApi(),
            alarm_callback=lambda code, is_error: self.events.append((code, is_error)),
            wakeup_callback=self._record_wakeup,
            inputs_callback=lambda status: inputs_changed,
        )
        self.store.channels_created = channels_created

    def _record_wakeup(self, reasons: Sequence[str]) -> bool:
        self.wakeups.append(reasons)
        return False

    def update_channel(self, group: str, channel: str, value: Any) -> bool:
        self.writes.append((group, channel, value))
        return super().update_channel(group, channel, value)

    def value(self, group: str, channel: str) -> Any:
        return self.store.get_value(group, channel)

    def written(self, group: str) -> set[str]:
        return {channel for grp, channel, _ in self.writes if grp == group}


@pytest.fixture
def profile_factory() -> Callable[..., DeviceProfile]:
    """Return a helper building profiles from a kind and raw settings."""

    def _factory(
        kind: str,
        settings: dict[str, Any] | ShellySettings | None = None,
        *,
        low_battery: int | None = None,
        status: dict[str, Any] | None = None,
        **counts: Any,
    ) -> DeviceProfile:
        parsed = decode_settings(settings) if settings is not None else None
        snapshot = decode_status(status) if status is not None else None
        config = DeviceConfig.from_options({"low_battery": low_battery})
        return build_device_profile(kind, parsed, config, status=snapshot, **counts)

    return _factory


@pytest.fixture
def handler_factory() -> Callable[..., RecordingHandler]:
    """Return a helper building recording handlers."""

    def _factory(
        profile: DeviceProfile,
        payload: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> RecordingHandler:
        error = kwargs.pop("error", None)
        return RecordingHandler(profile, FakeSensorApi(payload, error=error), **kwargs)

    return _factory


@pytest.fixture
def channel_store() -> ChannelStateStore:
    """Return an empty channel store."""

    return ChannelStateStore()
