"""Tests for busscope.toml discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from busscope.config.discovery import CONFIG_FILENAME, find_config


@pytest.fixture(autouse=True)
def _no_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BUSSCOPE_CONFIG", raising=False)


class TestFindConfig:
    def test_none(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_walks_up(self, tmp_path: Path) -> None:
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("")
        deep = tmp_path / "x" / "y"
        deep.mkdir(parents=True)
        assert find_config(deep) == cfg.resolve()

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("")
        monkeypatch.setenv("BUSSCOPE_CONFIG", str(cfg))
        assert find_config(tmp_path / "unrelated") == cfg

    def test_env_pointing_nowhere_stops_search(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("BUSSCOPE_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
