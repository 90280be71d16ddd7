from __future__ import annotations

from dataclasses import dataclass

import typer

from asdf_core.core.config import Config, load_config
from asdf_core.core.errors import ErrorCode
from asdf_core.core.result import Err
from asdf_core.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole()
    config_result = load_config()
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    return CLIContext(config=config_result.value, console=console)
