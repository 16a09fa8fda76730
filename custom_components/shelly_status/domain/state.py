"""In-memory channel state with change detection."""

from __future__ import annotations

import logging
from typing import Any

from .channels import ChannelDefinitionKind, ChannelKey, ChannelValue

_LOGGER = logging.getLogger(__name__)


class ChannelStateStore:
    """Channel state of one device session.

    ``update_channel`` stores a value and reports whether it differs from the
    previously stored one. The store is not safe for overlapping update
    cycles of the same device.
    """

    def __init__(self) -> None:
        """Initialise an empty store."""

        self._values: dict[ChannelKey, ChannelValue] = {}
        self._definitions: list[tuple[ChannelDefinitionKind, Any]] = []
        self.channels_created = False

    def update_channel(self, group: str, channel: str, value: ChannelValue) -> bool:
        """Store ``value`` for ``(group, channel)``; return ``True`` on change."""

        key = ChannelKey(group, channel)
        previous = self._values.get(key)
        if key in self._values and previous == value:
            return False
        self._values[key] = value
        _LOGGER.debug("Channel %s updated: %r -> %r", key, previous, value)
        return True

    def get_value(self, group: str, channel: str) -> ChannelValue | None:
        """Return the stored value for ``(group, channel)`` when known."""

        return self._values.get(ChannelKey(group, channel))

    def add_definitions(self, kind: ChannelDefinitionKind, context: Any) -> None:
        """Record a channel definition request."""

        self._definitions.append((kind, context))

    @property
    def definitions(self) -> tuple[tuple[ChannelDefinitionKind, Any], ...]:
        """Return the recorded channel definition requests."""

        return tuple(self._definitions)

    def reset(self) -> None:
        """Forget all values and definitions, e.g. after a device restart."""

        self._values.clear()
        self._definitions.clear()
        self.channels_created = False
