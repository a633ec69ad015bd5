"""Tests for bus-name listing and owner resolution."""

from __future__ import annotations

import pytest

from busscope.config.models import TimeoutsConfig
from busscope.domain.faults import ConnectionFault
from busscope.infrastructure.bus import BusCallError
from busscope.services.registry import NameRegistry
from tests.conftest import FakeBus


class TestListNames:
    def test_sorted_deduplicated_public_only(self, fake_bus: FakeBus) -> None:
        names = NameRegistry(fake_bus, TimeoutsConfig()).list_names()
        assert names == ["com.example.Foo", "org.other.Bar"]

    def test_default_timeout(self, fake_bus: FakeBus) -> None:
        NameRegistry(fake_bus, TimeoutsConfig(list_names=3.0)).list_names()
        assert fake_bus.timeouts == [3.0]

    def test_timeout_override(self, fake_bus: FakeBus) -> None:
        NameRegistry(fake_bus, TimeoutsConfig()).list_names(timeout=2.0)
        assert fake_bus.timeouts == [2.0]

    def test_only_private_names(self) -> None:
        bus = FakeBus(names=[":1.1", ":1.2"])
        assert NameRegistry(bus, TimeoutsConfig()).list_names() == []

    def test_error_reply_is_connection_fault(self) -> None:
        bus = FakeBus(list_error=BusCallError("org.freedesktop.DBus.Error.Timeout", "slow"))
        with pytest.raises(ConnectionFault, match="Failed to list D-Bus names"):
            NameRegistry(bus, TimeoutsConfig()).list_names()

    def test_connection_fault_propagates(self) -> None:
        bus = FakeBus(list_error=ConnectionFault("gone"))
        with pytest.raises(ConnectionFault, match="gone"):
            NameRegistry(bus, TimeoutsConfig()).list_names()


class TestResolveOwner:
    def test_known(self, fake_bus: FakeBus) -> None:
        assert NameRegistry(fake_bus, TimeoutsConfig()).resolve_owner("com.example.Foo") == ":1.12"

    def test_unknown_is_none(self, fake_bus: FakeBus) -> None:
        assert NameRegistry(fake_bus, TimeoutsConfig()).resolve_owner("org.gone") is None
