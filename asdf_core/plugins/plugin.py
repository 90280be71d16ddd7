"""Plugins and the plugins directory.

Plugins live in ``<data_dir>/plugins/<name>``, one git checkout each. This
module names them, checks them and adds, lists, removes or updates them.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from asdf_core.core.config import Config
from asdf_core.core.result import Err, Ok, Result
from asdf_core.output.console import ConsoleProtocol, NullConsole, Style

from .git import GitError, PluginGit, PluginRepository

__all__ = [
    "InvalidPluginName",
    "Plugin",
    "PluginAlreadyExists",
    "PluginError",
    "PluginIOError",
    "PluginNotFound",
    "add_plugin",
    "list_plugins",
    "plugin_directory",
    "plugin_exists",
    "remove_plugin",
    "update_plugin",
    "validate_plugin_name",
]

_PLUGIN_NAME = re.compile(r"[a-z0-9_-]+")

type GitFactory = Callable[[Path], PluginGit]


@dataclass(frozen=True, slots=True)
class InvalidPluginName:
    name: str

    @property
    def message(self) -> str:
        return (
            f"'{self.name}' is invalid. Name may only contain lowercase letters, "
            "numbers, '_', and '-'"
        )


@dataclass(frozen=True, slots=True)
class PluginNotFound:
    name: str

    @property
    def message(self) -> str:
        return f"no such plugin: {self.name}"


@dataclass(frozen=True, slots=True)
class PluginAlreadyExists:
    name: str

    @property
    def message(self) -> str:
        return f"plugin named '{self.name}' already added"


@dataclass(frozen=True, slots=True)
class PluginIOError:
    path: Path
    detail: str

    @property
    def message(self) -> str:
        return f"{self.detail}: {self.path}"


type PluginError = InvalidPluginName | PluginNotFound | PluginAlreadyExists | PluginIOError | GitError


@dataclass(frozen=True, slots=True)
class Plugin:
    """A plugin by name and checkout location.

    Attributes:
        name: Plugin name (also the tool name in declaration files)
        dir: Checkout directory
        ref: HEAD commit, filled only when listing with refs
        url: origin URL, filled only when listing with URLs
    """

    name: str
    dir: Path
    ref: str = ""
    url: str = ""

    @classmethod
    def for_name(cls, config: Config, name: str) -> Plugin:
        return cls(name=name, dir=plugin_directory(config.data_dir, name))

    def exists(self) -> Result[None, PluginNotFound]:
        if self.dir.is_dir():
            return Ok(None)
        return Err(PluginNotFound(self.name))

    def callback_path(self, callback: str) -> Path:
        return self.dir / "bin" / callback


def plugin_directory(data_dir: Path, name: str) -> Path:
    return data_dir / "plugins" / name


def plugin_exists(data_dir: Path, name: str) -> bool:
    return plugin_directory(data_dir, name).is_dir()


def validate_plugin_name(name: str) -> Result[None, InvalidPluginName]:
    if _PLUGIN_NAME.fullmatch(name):
        return Ok(None)
    return Err(InvalidPluginName(name))


def list_plugins(
    config: Config,
    *,
    urls: bool = False,
    refs: bool = False,
    git: GitFactory = PluginRepository,
) -> Result[list[Plugin], PluginError]:
    """Installed plugins sorted by name.

    ``urls``/``refs`` additionally read each checkout's origin URL and HEAD;
    the first git failure aborts the listing.
    """
    plugins_dir = config.plugins_dir
    if not plugins_dir.is_dir():
        return Ok([])

    plugins: list[Plugin] = []
    for entry in sorted(plugins_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_dir():
            continue

        url = ""
        ref = ""
        if urls or refs:
            repo = git(entry)
            if refs:
                head = repo.head()
                if isinstance(head, Err):
                    return head
                ref = head.value
            if urls:
                remote = repo.remote_url()
                if isinstance(remote, Err):
                    return remote
                url = remote.value

        plugins.append(Plugin(name=entry.name, dir=entry, ref=ref, url=url))

    return Ok(plugins)


def add_plugin(
    config: Config,
    name: str,
    url: str,
    *,
    git: GitFactory = PluginRepository,
    console: ConsoleProtocol | None = None,
) -> Result[Plugin, PluginError]:
    """Clone ``url`` as plugin ``name``."""
    console = console or NullConsole()

    valid = validate_plugin_name(name)
    if isinstance(valid, Err):
        return valid

    if plugin_exists(config.data_dir, name):
        return Err(PluginAlreadyExists(name))

    plugin = Plugin.for_name(config, name)
    console.print(f"clone {url} -> {plugin.dir}", Style.DIM)
    cloned = git(plugin.dir).clone(url)
    if isinstance(cloned, Err):
        return cloned
    return Ok(plugin)


def remove_plugin(config: Config, name: str) -> Result[None, PluginError]:
    """Delete the checkout of plugin ``name``."""
    valid = validate_plugin_name(name)
    if isinstance(valid, Err):
        return valid

    if not plugin_exists(config.data_dir, name):
        return Err(PluginNotFound(name))

    directory = plugin_directory(config.data_dir, name)
    try:
        shutil.rmtree(directory)
    except OSError as e:
        return Err(PluginIOError(directory, f"unable to remove plugin: {e}"))
    return Ok(None)


def update_plugin(
    config: Config,
    name: str,
    ref: str = "",
    *,
    git: GitFactory = PluginRepository,
    console: ConsoleProtocol | None = None,
) -> Result[str, PluginError]:
    """Move plugin ``name`` to ``ref`` (or its current branch) and return HEAD."""
    console = console or NullConsole()

    valid = validate_plugin_name(name)
    if isinstance(valid, Err):
        return valid

    if not plugin_exists(config.data_dir, name):
        return Err(PluginNotFound(name))

    directory = plugin_directory(config.data_dir, name)
    console.print(f"update {name} to {ref or 'current branch'}", Style.DIM)
    return git(directory).update(ref)
