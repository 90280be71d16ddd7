"""Version installation through plugin callbacks.

Installing a version is a fixed pipeline; the first failing step ends it
and nothing is cleaned up afterwards, so a half-populated download or
install directory stays on disk for inspection:

    1. plugin name must be valid and the plugin must exist
    2. "system" and "latest" are refused
    3. install dir must not exist yet
    4. create download dir
    5. pre_asdf_download_<plugin> hook
    6. download callback (optional)
    7. pre_asdf_install_<plugin> hook
    8. create install dir
    9. install callback (required)
   10. post_asdf_install_<plugin> hook

There is no locking: two processes installing the same plugin and version
race on these directories.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Literal, TextIO

from asdf_core.core.config import Config
from asdf_core.core.result import Err, Ok, Result
from asdf_core.hooks import HookRunner, ShellHookRunner
from asdf_core.output.console import ConsoleProtocol, NullConsole, Style
from asdf_core.plugins.callbacks import (
    CallbackFailed,
    CallbackMissing,
    CallbackOk,
    CallbackRunner,
    ScriptCallbackRunner,
)
from asdf_core.plugins.plugin import Plugin, validate_plugin_name
from asdf_core.versions.sets import intersect
from asdf_core.versions.spec import parse

from .errors import (
    AlreadyInstalled,
    DirectoryError,
    InstallError,
    ListingFailed,
    NotImplementedVersion,
    StageFailed,
    UninstallableVersion,
)

__all__ = ["InstallEnvironment", "InstallService", "download_path", "install_path"]

SYSTEM_VERSION = "system"
LATEST_VERSION = "latest"


@dataclass(frozen=True, slots=True)
class InstallEnvironment:
    """Variables every install-time callback receives."""

    install_type: str
    install_version: str
    install_path: Path
    download_path: Path

    def as_env(self) -> dict[str, str]:
        return {
            "ASDF_INSTALL_TYPE": self.install_type,
            "ASDF_INSTALL_VERSION": self.install_version,
            "ASDF_INSTALL_PATH": str(self.install_path),
            "ASDF_DOWNLOAD_PATH": str(self.download_path),
        }


def _version_parts(fs_version: str) -> list[str]:
    """Segments of a filesystem-formatted version, minus any root and ``..``.

    ``path:/opt/lua-src`` formats to ``/opt/lua-src``, which must land at
    ``<plugin>/opt/lua-src`` rather than replace the data directory.
    """
    version = PurePath(fs_version)
    parts = version.parts[1:] if version.anchor else version.parts
    return [part for part in parts if part != ".."]


def download_path(config: Config, plugin: Plugin, fs_version: str) -> Path:
    """``<data_dir>/downloads/<plugin>/<version>``, always inside the data dir."""
    return config.downloads_dir.joinpath(plugin.name, *_version_parts(fs_version))


def install_path(config: Config, plugin: Plugin, fs_version: str) -> Path:
    """``<data_dir>/installs/<plugin>/<version>``, always inside the data dir."""
    return config.installs_dir.joinpath(plugin.name, *_version_parts(fs_version))


def _split_versions(output: str) -> list[str]:
    return output.split()


class InstallService:
    """Installs versions and queries available versions of a plugin's tool.

    Hooks and callbacks are collaborators so tests can substitute fakes.
    """

    def __init__(
        self,
        *,
        config: Config,
        hooks: HookRunner | None = None,
        callbacks: CallbackRunner | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._config = config
        self._hooks = hooks or ShellHookRunner(config.hooks)
        self._callbacks = callbacks or ScriptCallbackRunner()
        self._console = console or NullConsole()

    def install_one_version(
        self,
        plugin: Plugin,
        version: str,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> Result[Path, InstallError]:
        """Install ``version`` of ``plugin``'s tool.

        Returns:
            Ok(install dir) on success, Err naming the failed step otherwise
        """
        valid = validate_plugin_name(plugin.name)
        if isinstance(valid, Err):
            return valid

        exists = plugin.exists()
        if isinstance(exists, Err):
            return exists

        if version == SYSTEM_VERSION:
            return Err(UninstallableVersion(version))

        if version == LATEST_VERSION:
            # TODO: resolve "latest" via InstallService.latest() once a
            # fallback over list_all() exists for plugins without latest-stable.
            return Err(NotImplementedVersion(version))

        spec = parse(version)
        fs_version = spec.for_filesystem()
        download_dir = download_path(self._config, plugin, fs_version)
        install_dir = install_path(self._config, plugin, fs_version)

        if install_dir.exists():
            return Err(AlreadyInstalled(plugin=plugin.name, version=spec.value, path=install_dir))

        env = InstallEnvironment(
            install_type=str(spec.kind),
            install_version=spec.value,
            install_path=install_dir,
            download_path=download_dir,
        ).as_env()

        made = _make_dir(download_dir, "download")
        if isinstance(made, Err):
            return made

        hook_args = [spec.value]
        sinks = {"stdout": stdout, "stderr": stderr}

        self._console.print(f"pre_asdf_download_{plugin.name}", Style.DIM)
        hook = self._hooks.run(f"pre_asdf_download_{plugin.name}", hook_args, **sinks)
        if isinstance(hook, Err):
            return Err(StageFailed("pre-download hook", hook.error.message))

        self._console.print(f"{plugin.name} download {spec.value}", Style.DIM)
        match self._callbacks.run(plugin, "download", [], env, **sinks):
            case CallbackFailed() as failed:
                return Err(StageFailed("download callback", failed.message))
            case CallbackMissing() | CallbackOk():
                pass

        self._console.print(f"pre_asdf_install_{plugin.name}", Style.DIM)
        hook = self._hooks.run(f"pre_asdf_install_{plugin.name}", hook_args, **sinks)
        if isinstance(hook, Err):
            return Err(StageFailed("pre-install hook", hook.error.message))

        made = _make_dir(install_dir, "install")
        if isinstance(made, Err):
            return made

        self._console.print(f"{plugin.name} install {spec.value}", Style.DIM)
        match self._callbacks.run(plugin, "install", [], env, **sinks):
            case CallbackFailed() | CallbackMissing() as failed:
                return Err(StageFailed("install callback", failed.message))
            case CallbackOk():
                pass

        self._console.print(f"post_asdf_install_{plugin.name}", Style.DIM)
        hook = self._hooks.run(f"post_asdf_install_{plugin.name}", hook_args, **sinks)
        if isinstance(hook, Err):
            return Err(StageFailed("post-install hook", hook.error.message))

        return Ok(install_dir)

    def list_all(self, plugin: Plugin) -> Result[list[str], ListingFailed]:
        """Every version the plugin's ``list-all`` callback reports."""
        return self._list("list-all", plugin, [])

    def latest(self, plugin: Plugin, query: str = "") -> Result[list[str], ListingFailed]:
        """Output of the plugin's ``latest-stable`` callback for ``query``.

        An empty query uses ``Config.default_latest_query``. A plugin without
        ``latest-stable`` yields an empty list.
        """
        return self._list("latest-stable", plugin, [query or self._config.default_latest_query])

    def list_installed(self, plugin: Plugin) -> list[str]:
        """Directory names under ``installs/<plugin>``, sorted."""
        root = self._config.installs_dir / plugin.name
        if not root.is_dir():
            return []
        return sorted(entry.name for entry in root.iterdir() if entry.is_dir())

    def installed_of(self, plugin: Plugin, declared: list[str]) -> list[str]:
        """Declared versions that are installed, in declaration order."""
        installed = self.list_installed(plugin)
        return intersect([parse(v).for_filesystem() for v in declared], installed)

    def _list(
        self, callback: str, plugin: Plugin, args: list[str]
    ) -> Result[list[str], ListingFailed]:
        match self._callbacks.run(plugin, callback, args, {}):
            case CallbackOk(stdout=output):
                return Ok(_split_versions(output))
            case CallbackMissing():
                return Ok([])
            case CallbackFailed() as failed:
                return Err(ListingFailed(callback=callback, detail=failed.message))


def _make_dir(path: Path, purpose: Literal["download", "install"]) -> Result[None, DirectoryError]:
    try:
        path.mkdir(mode=0o777, parents=True, exist_ok=True)
    except OSError as e:
        return Err(DirectoryError(purpose, path, str(e)))
    return Ok(None)
