"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from asdf_core.core.errors import ErrorCode
from asdf_core.core.result import Err, Ok, Result
from asdf_core.install.errors import (
    AlreadyInstalled,
    DirectoryError,
    ListingFailed,
    NotImplementedVersion,
    StageFailed,
    UninstallableVersion,
)
from asdf_core.plugins.git import GitError
from asdf_core.plugins.plugin import (
    InvalidPluginName,
    PluginAlreadyExists,
    PluginIOError,
    PluginNotFound,
)
from asdf_core.versions.toolversions import ToolVersionsError

if TYPE_CHECKING:
    from asdf_core.cli.context import CLIContext


def exit_code_for(error: object) -> ErrorCode:
    """Map a domain error to the process exit code."""
    match error:
        case InvalidPluginName() | UninstallableVersion():
            return ErrorCode.USER_ERROR
        case PluginNotFound() | ToolVersionsError(kind="not_found"):
            return ErrorCode.NOT_FOUND
        case AlreadyInstalled() | PluginAlreadyExists():
            return ErrorCode.CONFLICT
        case GitError() | StageFailed() | ListingFailed():
            return ErrorCode.PROCESS_ERROR
        case NotImplementedVersion():
            return ErrorCode.NOT_IMPLEMENTED
        case DirectoryError() | PluginIOError() | ToolVersionsError():
            return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def unwrap_or_exit[T, E](result: Result[T, E], ctx: CLIContext) -> T:
    """Return the value of ``result`` or print its error and exit.

    Error objects are expected to have a ``message`` attribute.
    """
    match result:
        case Ok(value):
            return value
        case Err(error):
            message: str = getattr(error, "message", str(error))
            ctx.console.error(message)
            raise typer.Exit(code=int(exit_code_for(error)))
