"""User-configured hooks.

Hooks are shell commands keyed by event name in the ``[hooks]`` table of
the config file. The install pipeline fires ``pre_asdf_download_<plugin>``,
``pre_asdf_install_<plugin>`` and ``post_asdf_install_<plugin>`` with the
version as argument. Events nobody configured succeed without running
anything.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO

from asdf_core.core.result import Err, Ok, Result
from asdf_core.platform.process import run as run_process

__all__ = ["HookError", "HookRunner", "ShellHookRunner"]


@dataclass(frozen=True, slots=True)
class HookError:
    """A configured hook exited non-zero or could not be started."""

    event: str
    command: str
    returncode: int
    stderr: str

    @property
    def message(self) -> str:
        detail = self.stderr.strip()
        base = f"hook {self.event} ({self.command}) failed (exit {self.returncode})"
        return f"{base}: {detail}" if detail else base


class HookRunner(Protocol):
    """Runs the hook configured for an event, if any.

    An event without a configured command succeeds without doing anything.
    """

    def run(
        self,
        event: str,
        args: Sequence[str],
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> Result[None, HookError]:
        """Run the hook for ``event`` with ``args`` as positional parameters.

        Args:
            event: Hook name, e.g. ``pre_asdf_install_lua``
            args: Arguments appended to the command
            stdout: Sink for the hook's standard output
            stderr: Sink for the hook's standard error

        Returns:
            Ok(None) when the hook succeeded or is not configured
        """
        ...


class ShellHookRunner:
    """Runs hooks through ``sh -c``, passing arguments as ``"$@"``."""

    def __init__(self, hooks: Mapping[str, str], *, cwd: Path | None = None) -> None:
        self._hooks = dict(hooks)
        self._cwd = cwd

    def command_for(self, event: str) -> str | None:
        return self._hooks.get(event)

    def run(
        self,
        event: str,
        args: Sequence[str],
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> Result[None, HookError]:
        command = self.command_for(event)
        if command is None:
            return Ok(None)

        result = run_process(
            ["sh", "-c", f'{command} "$@"', event, *args],
            cwd=self._cwd or Path.cwd(),
            env=dict(os.environ),
            stdout=stdout,
            stderr=stderr,
        )
        if isinstance(result, Err):
            return Err(
                HookError(
                    event=event,
                    command=command,
                    returncode=result.error.returncode,
                    stderr=result.error.stderr,
                )
            )
        return Ok(None)
