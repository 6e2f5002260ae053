"""VCS tracking commands.

Manage the development packages whose upgrades follow upstream commits.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from pacup.models.vcs import TrackedPackage
from pacup.sources.vcs import VcsStore, VcsStoreError
from pacup.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Track development packages for upstream commits.",
    no_args_is_help=True,
)


@app.command("list")
def list_tracked() -> None:
    """List tracked VCS packages."""
    store = VcsStore()
    try:
        entries = store.tracked()
    except VcsStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not entries:
        print_info("No VCS packages tracked.")
        return

    table = Table(title="Tracked VCS Packages", show_lines=False)
    table.add_column("Package", style="package.name")
    table.add_column("Branch")
    table.add_column("Commit", style="number")
    table.add_column("URL", style="muted")
    for entry in entries:
        table.add_row(
            escape(entry.name),
            escape(entry.branch),
            entry.short_sha or "-",
            escape(entry.url),
        )
    console.print(table)


@app.command()
def track(
    name: Annotated[str, typer.Argument(help="Installed package name.")],
    url: Annotated[str, typer.Argument(help="Git URL of the upstream source.")],
    branch: Annotated[
        str,
        typer.Option("--branch", "-b", help="Upstream branch to follow."),
    ] = "HEAD",
    sha: Annotated[
        str | None,
        typer.Option(
            "--sha",
            help="Commit currently installed. Defaults to the current upstream head.",
        ),
    ] = None,
) -> None:
    """Start tracking a VCS package.

    Examples:
        pacup vcs track neovim-git https://github.com/neovim/neovim.git
        pacup vcs track foo-git https://example.org/foo.git --branch main --sha 1a2b3c
    """
    store = VcsStore()
    try:
        entry = TrackedPackage(name=name, url=url, branch=branch, sha=sha or "")
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if sha is None:
        head = store.remote_head(entry)
        if head is None:
            print_error(f"Cannot resolve {branch} of {url}. Pass --sha explicitly.")
            raise typer.Exit(code=1)
        entry = TrackedPackage(name=name, url=url, branch=branch, sha=head)

    try:
        store.track(entry)
    except VcsStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Tracking {name} at {entry.short_sha} ({branch})")


@app.command()
def forget(
    names: Annotated[list[str], typer.Argument(help="Package names to stop tracking.")],
) -> None:
    """Stop tracking VCS packages."""
    store = VcsStore()
    try:
        known = {entry.name for entry in store.tracked()}
        store.remove(names)
    except VcsStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for name in names:
        if name in known:
            print_success(f"Stopped tracking {name}")
        else:
            print_info(f"{name} was not tracked")
