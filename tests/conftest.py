"""Shared pytest fixtures and test helpers for busscope tests."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

from busscope.config.settings import BusSettings
from busscope.domain.faults import ConnectionFault
from busscope.infrastructure.bus import NAME_HAS_NO_OWNER_ERROR, BusCallError
from busscope.services.telemetry import disable_telemetry

UNKNOWN_OBJECT_ERROR = "org.freedesktop.DBus.Error.UnknownObject"

DOCTYPE = (
    '<!DOCTYPE node PUBLIC "-//freedesktop//DTD D-BUS Object Introspection 1.0//EN"\n'
    ' "http://www.freedesktop.org/standards/dbus/1.0/introspect.dtd">\n'
)


def node_xml(*children: str, body: str = "") -> str:
    """Build an introspection document advertising *children*."""
    nodes = "".join(f'<node name="{child}"/>' for child in children)
    return f"{DOCTYPE}<node>{body}{nodes}</node>"


PEER_INTERFACE = """
<interface name="org.freedesktop.DBus.Peer">
  <method name="Ping"/>
  <method name="GetMachineId"><arg type="s" name="machine_uuid" direction="out"/></method>
</interface>
"""


class FakeBus:
    """In-memory stand-in for :class:`BusConnection`.

    *objects* maps ``(service, path)`` to XML text or to an exception the
    introspect call should raise. Unknown pairs raise UnknownObject.
    Every call is recorded in :attr:`calls`.
    """

    def __init__(
        self,
        *,
        names: Iterable[str] = (),
        owners: Mapping[str, str] | None = None,
        objects: Mapping[tuple[str, str], str | Exception] | None = None,
        list_error: Exception | None = None,
        connect_error: Exception | None = None,
    ) -> None:
        self.names = list(names)
        self.owners = dict(owners or {})
        self.objects = dict(objects or {})
        self.list_error = list_error
        self.connect_error = connect_error
        self.calls: list[tuple[str, ...]] = []
        self.timeouts: list[float] = []
        self.closed = False

    def connect(self) -> None:
        self.calls.append(("connect",))
        if self.connect_error is not None:
            raise self.connect_error

    def close(self) -> None:
        self.closed = True

    def list_names(self, *, timeout: float) -> list[str]:
        self.calls.append(("list_names",))
        self.timeouts.append(timeout)
        if self.list_error is not None:
            raise self.list_error
        return list(self.names)

    def get_name_owner(self, name: str, *, timeout: float) -> str:
        self.calls.append(("get_name_owner", name))
        if name not in self.owners:
            raise BusCallError(NAME_HAS_NO_OWNER_ERROR, f"Could not get owner of name '{name}'")
        return self.owners[name]

    def introspect(self, service: str, path: str, *, timeout: float) -> str:
        self.calls.append(("introspect", service, path))
        self.timeouts.append(timeout)
        value = self.objects.get((service, path))
        if value is None:
            raise BusCallError(UNKNOWN_OBJECT_ERROR, f"No such object path '{path}'")
        if isinstance(value, Exception):
            raise value
        return value

    def introspected(self, service: str) -> list[str]:
        """Paths introspected on *service*, in call order."""
        return [c[2] for c in self.calls if c[0] == "introspect" and c[1] == service]


def example_bus() -> FakeBus:
    """Two services: a small tree under com.example.Foo and a bare org.other.Bar.

    com.example.Foo:  / -> /com -> /com/example -> {/com/example/Foo, /com/example/Denied}
    """
    foo = "com.example.Foo"
    bar = "org.other.Bar"
    return FakeBus(
        names=[bar, ":1.7", foo, ":1.12", foo],
        owners={foo: ":1.12", bar: ":1.7"},
        objects={
            (foo, "/"): node_xml("com"),
            (foo, "/com"): node_xml("example"),
            (foo, "/com/example"): node_xml("Foo", "Denied"),
            (foo, "/com/example/Foo"): node_xml(body=PEER_INTERFACE),
            (foo, "/com/example/Denied"): BusCallError(
                "org.freedesktop.DBus.Error.AccessDenied", "Rejected send message"
            ),
            (bar, "/"): node_xml(body=PEER_INTERFACE),
        },
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> BusSettings:
    """Default settings with no config file in reach."""
    monkeypatch.delenv("BUSSCOPE_CONFIG", raising=False)
    return BusSettings.from_cli(search_root=tmp_path)


@pytest.fixture
def fake_bus() -> FakeBus:
    return example_bus()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp dir so no busscope.toml is picked up."""
    monkeypatch.delenv("BUSSCOPE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_bus(monkeypatch: pytest.MonkeyPatch, _isolated_cwd: None) -> FakeBus:
    """Route the CLI's bus handle to a FakeBus."""
    bus = example_bus()
    monkeypatch.setattr("busscope.infrastructure.bus.open_bus", lambda *_a, **_k: bus)
    return bus


@pytest.fixture
def unreachable_bus(monkeypatch: pytest.MonkeyPatch, _isolated_cwd: None) -> FakeBus:
    bus = FakeBus(connect_error=ConnectionFault("D-Bus connection failed (SYSTEM): no socket"))
    monkeypatch.setattr("busscope.infrastructure.bus.open_bus", lambda *_a, **_k: bus)
    return bus


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    """CLI runs reconfigure logging and may switch telemetry on for the thread."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    disable_telemetry()
    root.handlers[:] = handlers
    logging.getLogger("busscope").setLevel(logging.NOTSET)
