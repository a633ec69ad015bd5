"""BaseService: foundation for bus-facing services.

Every service receives a :class:`BusTransport` and the resolved
:class:`BusSettings` at construction time. A service never opens its own
connection; the caller owns the handle and its lifetime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from busscope.config.settings import BusSettings
    from busscope.infrastructure.bus import BusTransport


class BaseService:
    """Base for service-layer classes.

    Usage::

        class DiscoveryService(BaseService):
            def list_names(self) -> ServiceResult:
                names = NameRegistry(self._bus, self._settings.timeouts).list_names()
                ...
    """

    def __init__(self, bus: BusTransport, settings: BusSettings) -> None:
        self._bus = bus
        self._settings = settings
