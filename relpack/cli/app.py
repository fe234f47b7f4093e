from __future__ import annotations

import typer

from relpack import __version__
from relpack.cli.commands.release_cmd import release, release_linux, release_windows
from relpack.cli.commands.targets_cmd import targets


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(release)
app.command("release-linux")(release_linux)
app.command("release-windows")(release_windows)
app.command()(targets)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Build, archive and publish release binaries for Linux and Windows."""


def main() -> None:
    app()
