"""Plugin callbacks: executables under ``<plugin dir>/bin``.

A callback is run with a fixed set of environment variables on top of the
current environment. A plugin is free not to ship optional callbacks, so a
missing executable is its own outcome, distinct from a failure:

    match runner.run(plugin, "download", [], env):
        case CallbackOk(stdout):
            ...
        case CallbackMissing():
            ...  # fine for optional callbacks
        case CallbackFailed(returncode=rc, stderr=stderr):
            ...
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TextIO

from asdf_core.core.result import Err, Ok
from asdf_core.platform.process import run as run_process

if TYPE_CHECKING:
    from .plugin import Plugin

__all__ = [
    "CallbackFailed",
    "CallbackMissing",
    "CallbackOk",
    "CallbackOutcome",
    "CallbackRunner",
    "ScriptCallbackRunner",
]


@dataclass(frozen=True, slots=True)
class CallbackOk:
    """Callback exited 0; ``stdout`` is what it printed."""

    stdout: str


@dataclass(frozen=True, slots=True)
class CallbackMissing:
    """Plugin does not provide the callback."""

    plugin: str
    callback: str

    @property
    def message(self) -> str:
        return f"plugin {self.plugin} has no {self.callback} callback"


@dataclass(frozen=True, slots=True)
class CallbackFailed:
    """Callback could not be started or exited non-zero."""

    plugin: str
    callback: str
    returncode: int
    stderr: str

    @property
    def message(self) -> str:
        detail = self.stderr.strip()
        base = f"{self.plugin} {self.callback} callback failed (exit {self.returncode})"
        return f"{base}: {detail}" if detail else base


type CallbackOutcome = CallbackOk | CallbackMissing | CallbackFailed


class CallbackRunner(Protocol):
    """Runs a named callback of a plugin."""

    def run(
        self,
        plugin: Plugin,
        callback: str,
        args: Sequence[str],
        env: Mapping[str, str],
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> CallbackOutcome: ...


class ScriptCallbackRunner:
    """Executes ``<plugin dir>/bin/<callback>`` as a child process."""

    def run(
        self,
        plugin: Plugin,
        callback: str,
        args: Sequence[str],
        env: Mapping[str, str],
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> CallbackOutcome:
        script = plugin.callback_path(callback)
        if not script.is_file():
            return CallbackMissing(plugin=plugin.name, callback=callback)

        result = run_process(
            [str(script), *args],
            cwd=plugin.dir,
            env={**os.environ, **env},
            stdout=stdout,
            stderr=stderr,
        )
        match result:
            case Err(e):
                return CallbackFailed(
                    plugin=plugin.name,
                    callback=callback,
                    returncode=e.returncode,
                    stderr=e.stderr,
                )
            case Ok(output):
                return CallbackOk(stdout=output)
