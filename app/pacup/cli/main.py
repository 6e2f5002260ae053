"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pacup import __version__
from pacup.cli.commands import check, config, upgrade, vcs
from pacup.utils.logging_config import setup_logging

app = typer.Typer(
    name="pacup",
    help="Find and install pacman repository and AUR upgrades.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pacup version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """pacup - Upgrade pacman repository and AUR packages in one pass."""
    setup_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


app.add_typer(upgrade.app, name="upgrade")
app.add_typer(check.app, name="check")
app.add_typer(vcs.app, name="vcs")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
