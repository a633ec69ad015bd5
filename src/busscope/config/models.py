"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, busscope.toml only holds
overrides. An empty file (or none at all) talks to the system bus with
the stock deadlines.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, PositiveFloat


class BusConfig(BaseModel):
    """[bus] section."""

    model_config = {"frozen": True}

    kind: Literal["system", "session"] = "system"
    address: str | None = None


class TimeoutsConfig(BaseModel):
    """[timeouts] section: per-call deadlines in seconds."""

    model_config = {"frozen": True}

    list_names: PositiveFloat = 1.0
    enumerate: PositiveFloat = 2.0
    owner: PositiveFloat = 0.5
    introspect: PositiveFloat = 1.0


class DiscoveryConfig(BaseModel):
    """[discovery] section."""

    model_config = {"frozen": True}

    # Services under these prefixes do not log unparseable XML.
    quiet_namespaces: tuple[str, ...] = ("org.freedesktop.",)

