from __future__ import annotations

import typer

from asdf_core import __version__
from asdf_core.cli.commands.plugin import plugin_app
from asdf_core.cli.commands.versions import current, install, latest, list_all

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    invoke_without_command=True,
    rich_markup_mode="rich",
)

# Commands
app.command()(install)
app.command("list-all")(list_all)
app.command()(latest)
app.command()(current)

# Sub-apps
app.add_typer(plugin_app, name="plugin")


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    show_version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
