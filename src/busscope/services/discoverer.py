"""ServiceDiscoverer: enumerate bus names and walk each service.

Strictly sequential: one bus round trip at a time, no fan-out. Nothing
is cached; every call re-walks from scratch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from busscope.services.introspection import IntrospectionFetcher
from busscope.services.registry import NameRegistry
from busscope.services.walker import ObjectGraphWalker

if TYPE_CHECKING:
    from busscope.config.settings import BusSettings
    from busscope.domain.records import ServiceRecord
    from busscope.infrastructure.bus import BusTransport

logger = logging.getLogger(__name__)


class ServiceDiscoverer:
    """Entry points for names-only, single-service, and all-service discovery.

    Raises ``ConnectionFault`` only when name enumeration itself fails;
    any failure while walking a service stays inside that service's
    record.
    """

    def __init__(self, bus: BusTransport, settings: BusSettings) -> None:
        self._registry = NameRegistry(bus, settings.timeouts)
        self._walker = ObjectGraphWalker(
            IntrospectionFetcher(bus, timeout=settings.timeouts.introspect),
            quiet_namespaces=settings.discovery.quiet_namespaces,
        )
        self._enumerate_timeout = settings.timeouts.enumerate

    @property
    def walker(self) -> ObjectGraphWalker:
        return self._walker

    def enumerate_names_only(self) -> list[str]:
        return self._registry.list_names()

    def discover_all(self, name_filter: str | None = None) -> list[ServiceRecord]:
        """Walk every public service whose name contains *name_filter*.

        The filter is a plain case-sensitive substring. Results are
        sorted by service name.
        """
        names = self._registry.list_names(timeout=self._enumerate_timeout)
        if name_filter:
            names = [name for name in names if name_filter in name]
        logger.debug("Discovering %d services (filter=%r)", len(names), name_filter)

        services = [
            self._walker.walk(name, owner=self._registry.resolve_owner(name)) for name in names
        ]
        return sorted(services, key=lambda record: record.name)

    def discover_one(self, name: str) -> ServiceRecord:
        """Resolve the owner of *name* and walk it."""
        owner = self._registry.resolve_owner(name)
        return self._walker.walk(name, owner=owner)
