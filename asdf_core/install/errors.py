from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from asdf_core.plugins.plugin import InvalidPluginName, PluginNotFound

__all__ = [
    "AlreadyInstalled",
    "DirectoryError",
    "InstallError",
    "InvalidPluginName",
    "ListingFailed",
    "NotImplementedVersion",
    "PluginNotFound",
    "StageFailed",
    "UninstallableVersion",
]

Stage = Literal[
    "pre-download hook",
    "download callback",
    "pre-install hook",
    "install callback",
    "post-install hook",
]


@dataclass(frozen=True, slots=True)
class UninstallableVersion:
    version: str = "system"

    @property
    def message(self) -> str:
        return f"uninstallable version: {self.version}"


@dataclass(frozen=True, slots=True)
class NotImplementedVersion:
    version: str

    @property
    def message(self) -> str:
        return f"installing '{self.version}' is not implemented: resolve it to a concrete version first"


@dataclass(frozen=True, slots=True)
class AlreadyInstalled:
    plugin: str
    version: str
    path: Path

    @property
    def message(self) -> str:
        return f"version {self.version} of {self.plugin} is already installed"


@dataclass(frozen=True, slots=True)
class DirectoryError:
    purpose: Literal["download", "install"]
    path: Path
    detail: str

    @property
    def message(self) -> str:
        return f"unable to create {self.purpose} dir: {self.detail}"


@dataclass(frozen=True, slots=True)
class StageFailed:
    stage: Stage
    detail: str

    @property
    def message(self) -> str:
        return f"failed to run {self.stage}: {self.detail}"


@dataclass(frozen=True, slots=True)
class ListingFailed:
    callback: str
    detail: str

    @property
    def message(self) -> str:
        return self.detail


InstallError = (
    InvalidPluginName
    | PluginNotFound
    | UninstallableVersion
    | NotImplementedVersion
    | AlreadyInstalled
    | DirectoryError
    | StageFailed
)
