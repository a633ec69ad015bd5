"""NameRegistry: list public bus names and resolve their owners."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from busscope.domain.faults import ConnectionFault
from busscope.domain.paths import is_private_name
from busscope.infrastructure.bus import BusCallError

if TYPE_CHECKING:
    from busscope.config.models import TimeoutsConfig
    from busscope.infrastructure.bus import BusTransport

logger = logging.getLogger(__name__)


class NameRegistry:
    """Queries the bus daemon's name table."""

    def __init__(self, bus: BusTransport, timeouts: TimeoutsConfig) -> None:
        self._bus = bus
        self._timeouts = timeouts

    def list_names(self, *, timeout: float | None = None) -> list[str]:
        """Sorted, deduplicated public names; unique ``:x.y`` names dropped.

        Raises:
            ConnectionFault: The bus could not be queried.
        """
        deadline = timeout if timeout is not None else self._timeouts.list_names
        try:
            names = self._bus.list_names(timeout=deadline)
        except BusCallError as exc:
            raise ConnectionFault(f"Failed to list D-Bus names: {exc}") from exc
        return sorted({name for name in names if not is_private_name(name)})

    def resolve_owner(self, name: str) -> str | None:
        """Unique connection name owning *name*, or None on any failure."""
        try:
            return self._bus.get_name_owner(name, timeout=self._timeouts.owner)
        except (BusCallError, ConnectionFault) as exc:
            logger.debug("No owner for %s: %s", name, exc)
            return None
