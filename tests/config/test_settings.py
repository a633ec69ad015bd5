"""Tests for the layered BusSettings."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from busscope.config.settings import BusSettings


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for var in ("BUSSCOPE_CONFIG", "BUSSCOPE_BUS__KIND", "BUSSCOPE_TIMEOUTS__INTROSPECT"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestDefaults:
    def test_code_defaults(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        s = BusSettings.from_cli(search_root=tmp_path)
        assert s.config_path is None
        assert s.bus.kind == "system"
        assert s.bus.address is None
        assert s.timeouts.list_names == 1.0
        assert s.timeouts.enumerate == 2.0
        assert s.timeouts.owner == 0.5
        assert s.timeouts.introspect == 1.0
        assert s.discovery.quiet_namespaces == ("org.freedesktop.",)
        assert not s.json_output


class TestToml:
    def test_sparse_file_overrides(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        (tmp_path / "busscope.toml").write_text(
            '[bus]\nkind = "session"\n\n[timeouts]\nintrospect = 3.5\n'
        )
        s = BusSettings.from_cli(search_root=tmp_path)
        assert s.config_path == (tmp_path / "busscope.toml").resolve()
        assert s.bus.kind == "session"
        assert s.timeouts.introspect == 3.5
        assert s.timeouts.owner == 0.5

    def test_found_from_subdirectory(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        (tmp_path / "busscope.toml").write_text('[discovery]\nquiet_namespaces = ["com."]\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        s = BusSettings.from_cli(search_root=nested)
        assert s.discovery.quiet_namespaces == ("com.",)

    def test_explicit_config_path(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        cfg = tmp_path / "elsewhere.toml"
        cfg.write_text("[timeouts]\nowner = 0.1\n")
        s = BusSettings.from_cli(config_path=str(cfg), search_root=tmp_path)
        assert s.timeouts.owner == 0.1

    def test_missing_explicit_path_means_defaults(
        self, tmp_path: Path, clean_env: pytest.MonkeyPatch
    ) -> None:
        s = BusSettings.from_cli(config_path=str(tmp_path / "nope.toml"))
        assert s.config_path is None

    def test_invalid_toml(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        (tmp_path / "busscope.toml").write_text("[bus\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            BusSettings.from_cli(search_root=tmp_path)

    @pytest.mark.parametrize(
        "body",
        ['[bus]\nkind = "tcp"\n', "[timeouts]\nintrospect = 0\n", "[timeouts]\nowner = -1\n"],
    )
    def test_rejects_bad_values(
        self, tmp_path: Path, clean_env: pytest.MonkeyPatch, body: str
    ) -> None:
        (tmp_path / "busscope.toml").write_text(body)
        with pytest.raises(ValidationError):
            BusSettings.from_cli(search_root=tmp_path)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        (tmp_path / "busscope.toml").write_text("[timeouts]\nintrospect = 3.5\n")
        clean_env.setenv("BUSSCOPE_TIMEOUTS__INTROSPECT", "7")
        s = BusSettings.from_cli(search_root=tmp_path)
        assert s.timeouts.introspect == 7.0

    def test_cli_beats_toml_per_key(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        (tmp_path / "busscope.toml").write_text(
            '[bus]\nkind = "session"\naddress = "unix:path=/tmp/x"\n'
        )
        s = BusSettings.from_cli(search_root=tmp_path, bus_kind="system")
        assert s.bus.kind == "system"
        assert s.bus.address == "unix:path=/tmp/x"

    def test_cli_flags(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        s = BusSettings.from_cli(search_root=tmp_path, json_output=True, verbose=True)
        assert s.json_output
        assert s.verbose

    def test_address_flag(self, tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
        s = BusSettings.from_cli(search_root=tmp_path, address="unix:path=/run/bus")
        assert s.bus.address == "unix:path=/run/bus"
        assert s.bus.kind == "system"
