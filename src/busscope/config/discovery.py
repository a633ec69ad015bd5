"""Config file discovery.

Walk-up finder locates busscope.toml, the way git finds .git/.
The BUSSCOPE_CONFIG env var and the --config flag override the search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "busscope.toml"
CONFIG_ENV_VAR = "BUSSCOPE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for busscope.toml.

    Checks BUSSCOPE_CONFIG first; a path there that does not exist means
    "no config", not "keep searching".
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None

