"""Blocking D-Bus transport backed by jeepney.

One :class:`BusConnection` per discovery request. Every call is a single
bounded round trip; there is no concurrency inside a connection.

Error mapping:
- Bus unreachable, auth failure, dropped socket -> ConnectionFault
- D-Bus error reply or missed deadline          -> BusCallError
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from jeepney import DBusAddress, new_method_call
from jeepney.auth import AuthenticationError
from jeepney.io.blocking import DBusConnection, open_dbus_connection
from jeepney.wrappers import DBusErrorResponse, unwrap_msg

from busscope.domain.faults import ConnectionFault

logger = logging.getLogger(__name__)

BUS_DAEMON_NAME = "org.freedesktop.DBus"
BUS_DAEMON_PATH = "/org/freedesktop/DBus"
INTROSPECTABLE_INTERFACE = "org.freedesktop.DBus.Introspectable"

TIMEOUT_ERROR = "org.freedesktop.DBus.Error.Timeout"
ACCESS_DENIED_ERROR = "org.freedesktop.DBus.Error.AccessDenied"
UNKNOWN_METHOD_ERROR = "org.freedesktop.DBus.Error.UnknownMethod"
NAME_HAS_NO_OWNER_ERROR = "org.freedesktop.DBus.Error.NameHasNoOwner"

_BUS_DAEMON = DBusAddress(BUS_DAEMON_PATH, bus_name=BUS_DAEMON_NAME, interface=BUS_DAEMON_NAME)


class BusCallError(Exception):
    """A bus call returned a D-Bus error reply or missed its deadline."""

    def __init__(self, name: str, message: str = "") -> None:
        self.name = name
        self.message = message
        super().__init__(f"{name}: {message}" if message else name)


class BusTransport(Protocol):
    """Call contract the discovery core consumes."""

    def connect(self) -> None: ...

    def list_names(self, *, timeout: float) -> list[str]: ...

    def get_name_owner(self, name: str, *, timeout: float) -> str: ...

    def introspect(self, service: str, path: str, *, timeout: float) -> str: ...


class BusConnection:
    """Lazily opened jeepney connection to the system or session bus.

    Args:
        bus: ``"SYSTEM"``, ``"SESSION"``, or an explicit bus address.
    """

    def __init__(self, bus: str = "SYSTEM") -> None:
        self._bus = bus
        self._conn: DBusConnection | None = None

    def __enter__(self) -> BusConnection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def connect(self) -> None:
        """Open the connection if needed. Raises ConnectionFault."""
        if self._conn is not None:
            return
        try:
            self._conn = open_dbus_connection(bus=self._bus)
        except (OSError, KeyError, ValueError, AuthenticationError) as exc:
            raise ConnectionFault(f"D-Bus connection failed ({self._bus}): {exc}") from exc
        logger.debug("Connected to %s bus as %s", self._bus, self._conn.unique_name)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ── Calls ────────────────────────────────────────────────────────

    def list_names(self, *, timeout: float) -> list[str]:
        msg = new_method_call(_BUS_DAEMON, "ListNames")
        (names,) = self._call(msg, timeout)
        return list(names)

    def get_name_owner(self, name: str, *, timeout: float) -> str:
        msg = new_method_call(_BUS_DAEMON, "GetNameOwner", "s", (name,))
        (owner,) = self._call(msg, timeout)
        return str(owner)

    def introspect(self, service: str, path: str, *, timeout: float) -> str:
        address = DBusAddress(path, bus_name=service, interface=INTROSPECTABLE_INTERFACE)
        (xml,) = self._call(new_method_call(address, "Introspect"), timeout)
        return str(xml)

    def _call(self, msg: Any, timeout: float) -> tuple[Any, ...]:
        self.connect()
        assert self._conn is not None
        try:
            reply = self._conn.send_and_get_reply(msg, timeout=timeout)
            return unwrap_msg(reply)
        except DBusErrorResponse as exc:
            detail = exc.data[0] if exc.data else ""
            raise BusCallError(str(exc.name), str(detail)) from exc
        except TimeoutError as exc:
            raise BusCallError(TIMEOUT_ERROR, f"no reply within {timeout:.1f}s") from exc
        except OSError as exc:
            self.close()
            raise ConnectionFault(f"D-Bus connection lost: {exc}") from exc


def open_bus(bus: str = "system", address: str | None = None) -> BusConnection:
    """Create an unopened connection for the configured bus."""
    return BusConnection(address or bus.upper())
