"""Version commands: install, list-all, latest and current."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from asdf_core.cli.commands._helpers import unwrap_or_exit
from asdf_core.cli.context import CLIContext, build_context
from asdf_core.core.errors import ErrorCode
from asdf_core.core.result import Err, Ok
from asdf_core.install.service import InstallService
from asdf_core.output.console import Style
from asdf_core.platform.paths import home
from asdf_core.plugins.plugin import Plugin, validate_plugin_name
from asdf_core.versions.spec import VersionKind, parse, parse_from_argument
from asdf_core.versions.toolversions import find_declaration_files, resolve_versions


def _service(ctx: CLIContext) -> InstallService:
    return InstallService(config=ctx.config, console=ctx.console)


def _plugin(ctx: CLIContext, name: str) -> Plugin:
    unwrap_or_exit(validate_plugin_name(name), ctx)
    plugin = Plugin.for_name(ctx.config, name)
    unwrap_or_exit(plugin.exists(), ctx)
    return plugin


def install(
    name: str = typer.Argument(..., help="Plugin name."),
    version: str = typer.Argument(..., help="Version, ref:<ref>, path:<dir> or latest[:filter]."),
) -> None:
    """Install one version of a tool."""
    ctx = build_context()
    plugin = _plugin(ctx, name)
    service = _service(ctx)

    spec = parse_from_argument(version)
    if spec.kind is VersionKind.LATEST:
        candidates = unwrap_or_exit(service.latest(plugin, spec.filter), ctx)
        if not candidates:
            ctx.console.error(f"no latest version found for {name}")
            raise typer.Exit(code=int(ErrorCode.NOT_IMPLEMENTED))
        version = candidates[-1]
        ctx.console.info(f"latest {name} is {version}")

    installed = unwrap_or_exit(
        service.install_one_version(plugin, version, stdout=sys.stdout, stderr=sys.stderr),
        ctx,
    )
    ctx.console.success(f"{name} {version} installed to {installed}")


def list_all(name: str = typer.Argument(..., help="Plugin name.")) -> None:
    """List every version a plugin can install."""
    ctx = build_context()
    plugin = _plugin(ctx, name)
    for version in unwrap_or_exit(_service(ctx).list_all(plugin), ctx):
        ctx.console.print(version)


def latest(
    name: str = typer.Argument(..., help="Plugin name."),
    query: str = typer.Argument("", help="Filter handed to the latest-stable callback."),
) -> None:
    """Show the latest stable version of a tool."""
    ctx = build_context()
    plugin = _plugin(ctx, name)
    versions = unwrap_or_exit(_service(ctx).latest(plugin, query), ctx)
    if not versions:
        ctx.console.warning(f"{name} does not report a latest version")
        return
    ctx.console.print(versions[-1])


def current(
    name: str = typer.Argument(..., help="Plugin name."),
    directory: Path = typer.Option(Path("."), "--dir", help="Directory to resolve from."),
) -> None:
    """Show the versions declared for a tool and which are installed."""
    ctx = build_context()
    plugin = _plugin(ctx, name)
    files = find_declaration_files(
        directory.resolve(), ctx.config.tool_versions_filename, home=home()
    )

    match resolve_versions(files, name):
        case Err(e):
            ctx.console.error(e.message)
            raise typer.Exit(code=int(ErrorCode.IO_ERROR))
        case Ok(None):
            ctx.console.warning(f"no version set for {name}")
            raise typer.Exit(code=int(ErrorCode.NOT_FOUND))
        case Ok((path, declared)):
            installed = set(_service(ctx).installed_of(plugin, declared))
            for version in declared:
                spec_dir = parse(version).for_filesystem()
                marker = "" if spec_dir in installed else "  (not installed)"
                ctx.console.print(f"{name} {version}{marker}")
            ctx.console.print(str(path), Style.DIM)
