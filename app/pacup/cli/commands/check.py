"""Check command implementation.

Lists pending upgrades without installing anything.
"""

import json
from typing import Annotated

import typer

from pacup.cli.commands.upgrade import apply_overrides, search_upgrades
from pacup.cli.display import print_upgrades
from pacup.cli.types import OutputFormat, load_config_or_exit
from pacup.models.upgrade import UpgradeReport, sort_upgrades
from pacup.utils.formatting import console, print_info

app = typer.Typer(
    help="List pending upgrades without installing them.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def check_upgrades(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    devel: Annotated[
        bool | None,
        typer.Option(
            "--devel/--no-devel",
            help="Check VCS packages for new upstream commits.",
        ),
    ] = None,
    time_update: Annotated[
        bool | None,
        typer.Option(
            "--timeupdate/--no-timeupdate",
            help="Treat AUR packages modified after their local build as outdated.",
        ),
    ] = None,
) -> None:
    """Search for upgrades and print them.

    Examples:
        pacup check                     # Numbered listing
        pacup check --format json       # Machine-readable report
    """
    if ctx.invoked_subcommand is not None:
        return

    config = apply_overrides(load_config_or_exit(), devel=devel, time_update=time_update)

    if output_format == OutputFormat.JSON:
        # Progress lines would corrupt the document on stdout
        with console.capture():
            lists = search_upgrades(config)
        report = UpgradeReport(
            repo=sort_upgrades(lists.repo),
            aur=lists.aur,
            errors=lists.errors,
        )
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return

    lists = search_upgrades(config)
    if lists.is_empty:
        print_info("\nThere is nothing to do")
        return
    print_upgrades(sort_upgrades(lists.repo), lists.aur)
