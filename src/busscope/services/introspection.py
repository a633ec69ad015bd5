"""IntrospectionFetcher: one ``Introspect`` round trip per call.

INVARIANT: never raises. Every outcome is either the XML text or a
classified :class:`ProtocolFault`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from busscope.domain.faults import ConnectionFault, FaultKind, ProtocolFault
from busscope.infrastructure.bus import (
    ACCESS_DENIED_ERROR,
    UNKNOWN_METHOD_ERROR,
    BusCallError,
)

if TYPE_CHECKING:
    from busscope.infrastructure.bus import BusTransport

logger = logging.getLogger(__name__)


def classify_bus_error(exc: BusCallError) -> ProtocolFault:
    """Map a D-Bus error reply onto a :class:`FaultKind`."""
    if exc.name == ACCESS_DENIED_ERROR:
        kind = FaultKind.ACCESS_DENIED
    elif exc.name == UNKNOWN_METHOD_ERROR:
        kind = FaultKind.UNSUPPORTED
    else:
        kind = FaultKind.GENERIC
    return ProtocolFault(kind=kind, message=str(exc))


class IntrospectionFetcher:
    """Fetch raw introspection XML for (service, path) pairs."""

    def __init__(self, bus: BusTransport, *, timeout: float = 1.0) -> None:
        self._bus = bus
        self._timeout = timeout

    def introspect(self, service: str, path: str) -> str | ProtocolFault:
        try:
            return self._bus.introspect(service, path, timeout=self._timeout)
        except BusCallError as exc:
            fault = classify_bus_error(exc)
        except ConnectionFault as exc:
            fault = ProtocolFault(kind=FaultKind.GENERIC, message=str(exc))
        logger.debug(
            "Introspection of %s:%s failed (%s): %s", service, path, fault.kind, fault.message
        )
        return fault
