"""Config file discovery.

Walk-up finder locates unictl.toml, the way git finds .git/. The directory
holding the file becomes the ledger root (where ``.unictl/`` lives).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "unictl.toml"
CONFIG_ENV_VAR = "UNICTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for unictl.toml.

    UNICTL_CONFIG, when set, wins outright: it names the file to use, and a
    missing file means no config rather than falling back to the walk-up.
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
