"""Typed configuration loading and access.

Configuration lives in a TOML file:

    data_dir = "~/.asdf"
    default_latest_query = "[0-9]"
    tool_versions_filename = ".tool-versions"

    [hooks]
    pre_asdf_download_lua = "echo downloading"
    post_asdf_install_lua = "notify-send installed"

Environment overrides:
- ASDF_CONFIG_FILE: path of the TOML file (default: <user config dir>/config.toml)
- ASDF_DATA_DIR: data directory (wins over ``data_dir`` in the file)
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from asdf_core.platform.paths import default_data_dir, user_config_dir

from .result import Err, Ok, Result

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_LATEST_QUERY",
    "DEFAULT_TOOL_VERSIONS_FILENAME",
    "config_path",
    "load_config",
    "load_config_or_default",
]

DEFAULT_LATEST_QUERY = "[0-9]"
DEFAULT_TOOL_VERSIONS_FILENAME = ".tool-versions"

ENV_CONFIG_FILE = "ASDF_CONFIG_FILE"
ENV_DATA_DIR = "ASDF_DATA_DIR"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


def _no_hooks() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container.

    Attributes:
        data_dir: Root of plugins/, downloads/ and installs/
        hooks: Hook event name -> shell command
        default_latest_query: Query handed to ``latest-stable`` when none is given
        tool_versions_filename: Name of declaration files
    """

    data_dir: Path = field(default_factory=default_data_dir)
    hooks: dict[str, str] = field(default_factory=_no_hooks)
    default_latest_query: str = DEFAULT_LATEST_QUERY
    tool_versions_filename: str = DEFAULT_TOOL_VERSIONS_FILENAME

    @property
    def plugins_dir(self) -> Path:
        return self.data_dir / "plugins"

    @property
    def downloads_dir(self) -> Path:
        return self.data_dir / "downloads"

    @property
    def installs_dir(self) -> Path:
        return self.data_dir / "installs"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        data_dir = _get_str(data, "data_dir")
        hooks_table = data.get("hooks")
        hooks: dict[str, str] = {}
        if isinstance(hooks_table, dict):
            for name, command in hooks_table.items():
                if isinstance(name, str) and isinstance(command, str) and command.strip():
                    hooks[name] = command.strip()

        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(),
            hooks=hooks,
            default_latest_query=_get_str(data, "default_latest_query") or DEFAULT_LATEST_QUERY,
            tool_versions_filename=_get_str(data, "tool_versions_filename")
            or DEFAULT_TOOL_VERSIONS_FILENAME,
        )

    def with_env(self, environ: Mapping[str, str]) -> Config:
        """Apply environment overrides on top of file values."""
        data_dir = environ.get(ENV_DATA_DIR, "").strip()
        if not data_dir:
            return self
        return Config(
            data_dir=Path(data_dir).expanduser(),
            hooks=self.hooks,
            default_latest_query=self.default_latest_query,
            tool_versions_filename=self.tool_versions_filename,
        )


def _get_str(table: Mapping[str, object], key: str) -> str | None:
    """String value stripped of whitespace; None if missing, not a str or empty."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Location of the config file, honouring $ASDF_CONFIG_FILE."""
    env = os.environ if environ is None else environ
    override = env.get(ENV_CONFIG_FILE, "").strip()
    if override:
        return Path(override).expanduser()
    return user_config_dir() / "config.toml"


def _parse_toml(path: Path) -> Result[dict[str, object], ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    try:
        data: dict[str, object] = tomllib.loads(path.read_text(encoding="utf-8"))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Result[Config, ConfigError]:
    """Load configuration, applying environment overrides.

    A missing file is not an error: defaults are used. A file that exists
    but cannot be parsed is.

    Args:
        path: Config file (default: ``config_path()``)
        environ: Environment mapping (default: ``os.environ``)

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    env = os.environ if environ is None else environ
    path = path or config_path(env)

    if not path.exists():
        return Ok(Config().with_env(env))

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = Config.from_dict(result.value)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
    return Ok(config.with_env(env))


def load_config_or_default(path: Path | None = None) -> Config:
    """Load config, falling back to defaults when it cannot be read."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config().with_env(os.environ)
