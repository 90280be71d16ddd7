"""Platform-aware path utilities.

Locates the user-level directories the version manager relies on: the
home directory, the config directory holding ``config.toml`` and the
default data directory holding plugins, downloads and installs.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

__all__ = [
    "home",
    "user_config_dir",
    "default_data_dir",
]

APP_NAME = "asdf"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get the user's home directory, honouring $HOME first."""
    home_env = os.environ.get("HOME")
    if home_env:
        return Path(home_env)
    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Get the user-level configuration directory.

    Location: $XDG_CONFIG_HOME/asdf or ~/.config/asdf
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def default_data_dir() -> Path:
    """Data directory used when neither env nor config names one."""
    return home() / f".{APP_NAME}"


def clear_caches() -> None:
    """Clear cached paths (tests change $HOME between cases)."""
    home.cache_clear()
    user_config_dir.cache_clear()
