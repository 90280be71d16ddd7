from __future__ import annotations

import typer

from asdf_core.cli.commands._helpers import unwrap_or_exit
from asdf_core.cli.context import build_context
from asdf_core.output.console import Style
from asdf_core.plugins.plugin import add_plugin, list_plugins, remove_plugin, update_plugin

plugin_app = typer.Typer(no_args_is_help=True, help="Manage plugins.")


@plugin_app.command("add")
def add(
    name: str = typer.Argument(..., help="Plugin name (lowercase letters, digits, '_' and '-')."),
    url: str = typer.Argument(..., help="Git URL of the plugin repository."),
) -> None:
    """Clone a plugin into the data directory."""
    ctx = build_context()
    plugin = unwrap_or_exit(add_plugin(ctx.config, name, url, console=ctx.console), ctx)
    ctx.console.success(f"added {plugin.name}")


@plugin_app.command("list")
def list_cmd(
    urls: bool = typer.Option(False, "--urls", help="Show the origin URL of each plugin."),
    refs: bool = typer.Option(False, "--refs", help="Show the checked out commit of each plugin."),
) -> None:
    """List installed plugins."""
    ctx = build_context()
    plugins = unwrap_or_exit(list_plugins(ctx.config, urls=urls, refs=refs), ctx)
    if not plugins:
        ctx.console.print("no plugins installed", Style.DIM)
        return
    for plugin in plugins:
        columns = [plugin.name]
        if urls:
            columns.append(plugin.url)
        if refs:
            columns.append(plugin.ref)
        ctx.console.print("  ".join(columns))


@plugin_app.command("remove")
def remove(name: str = typer.Argument(..., help="Plugin name.")) -> None:
    """Delete a plugin checkout."""
    ctx = build_context()
    unwrap_or_exit(remove_plugin(ctx.config, name), ctx)
    ctx.console.success(f"removed {name}")


@plugin_app.command("update")
def update(
    name: str = typer.Argument(..., help="Plugin name."),
    ref: str = typer.Argument("", help="Branch, tag or commit (default: current branch)."),
) -> None:
    """Fetch and check out a plugin ref."""
    ctx = build_context()
    sha = unwrap_or_exit(update_plugin(ctx.config, name, ref, console=ctx.console), ctx)
    ctx.console.success(f"{name} at {sha}")
