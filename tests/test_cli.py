"""Tests for the root busscope CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from busscope import __version__
from busscope.cli import cli
from tests.conftest import FakeBus

pytestmark = pytest.mark.usefixtures("_isolated_cwd")


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "busscope" in result.output
    for command in ("names", "service", "object", "discover"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_help_does_not_open_bus(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("bus opened")

    monkeypatch.setattr("busscope.infrastructure.bus.open_bus", refuse)
    assert cli_runner.invoke(cli, ["service", "--help"]).exit_code == 0


def test_bad_bus_choice(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--bus", "tcp", "names"])
    assert result.exit_code == 2


class TestBusSelection:
    @pytest.fixture
    def opened(self, monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str | None]]:
        calls: list[tuple[str, str | None]] = []

        def fake_open(bus: str = "system", address: str | None = None) -> FakeBus:
            calls.append((bus, address))
            return FakeBus(names=["a.B"])

        monkeypatch.setattr("busscope.infrastructure.bus.open_bus", fake_open)
        return calls

    def test_default_system(self, cli_runner: CliRunner, opened: list[tuple]) -> None:
        cli_runner.invoke(cli, ["names"])
        assert opened == [("system", None)]

    def test_session_flag(self, cli_runner: CliRunner, opened: list[tuple]) -> None:
        cli_runner.invoke(cli, ["--bus", "session", "names"])
        assert opened == [("session", None)]

    def test_address_flag(self, cli_runner: CliRunner, opened: list[tuple]) -> None:
        cli_runner.invoke(cli, ["--address", "unix:path=/tmp/bus", "names"])
        assert opened == [("system", "unix:path=/tmp/bus")]

    def test_config_file(
        self, cli_runner: CliRunner, opened: list[tuple], tmp_path: Path
    ) -> None:
        (tmp_path / "busscope.toml").write_text('[bus]\nkind = "session"\n')
        cli_runner.invoke(cli, ["names"])
        assert opened == [("session", None)]

    def test_explicit_config(
        self, cli_runner: CliRunner, opened: list[tuple], tmp_path: Path
    ) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text('[bus]\nkind = "session"\n')
        cli_runner.invoke(cli, ["-c", str(cfg), "names"])
        assert opened == [("session", None)]

    def test_invalid_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "busscope.toml").write_text("[bus\n")
        result = cli_runner.invoke(cli, ["names"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
