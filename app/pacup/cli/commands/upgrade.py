"""Upgrade command implementation.

Searches the sync repositories and the AUR for upgrades, lets the user
skip some of them, and hands the rest to the installers.
"""

from typing import Annotated

import typer

from pacup.cli.display import print_targets, print_upgrades
from pacup.cli.types import build_aggregator, create_aur_client, load_config_or_exit
from pacup.core.aggregator import UpgradeCheckError, UpgradeLists
from pacup.core.config import PacupConfig
from pacup.core.selection import Exclusions, compute_exclusions, select_targets
from pacup.models.upgrade import sort_upgrades
from pacup.operators.aur import AurHelperOperator
from pacup.operators.base import InstallResult
from pacup.operators.pacman import PacmanOperator
from pacup.utils.formatting import (
    console,
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from pacup.utils.shell import command_exists

app = typer.Typer(
    help="Upgrade repository and AUR packages.",
    invoke_without_command=True,
)


def apply_overrides(
    config: PacupConfig,
    *,
    yes: bool = False,
    devel: bool | None = None,
    time_update: bool | None = None,
    split: int | None = None,
) -> PacupConfig:
    """Merge command-line flags over the loaded configuration.

    Flags left at None keep the configured value.
    """
    update: dict[str, object] = {}
    if yes:
        update["no_confirm"] = True
    if devel is not None:
        update["devel"] = devel
    if time_update is not None:
        update["time_update"] = time_update
    if split is not None:
        update["request_split_n"] = split
    return config.model_copy(update=update)


def search_upgrades(config: PacupConfig) -> UpgradeLists:
    """Run the upgrade search, exiting if no source could be checked."""
    if not command_exists("pacman"):
        print_error("pacman is not available on this system.")
        raise typer.Exit(code=1)

    print_step("Searching databases for updates...")
    print_step("Searching AUR for updates...")
    if config.devel:
        print_step("Checking development packages...")

    with create_aur_client(config) as client:
        try:
            lists = build_aggregator(config, client).collect()
        except UpgradeCheckError as e:
            print_error(f"Upgrade check failed: {e}")
            raise typer.Exit(code=1) from e

    if lists.errors:
        print_warning("Some sources could not be checked, the list may be incomplete.")
    return lists


def _prompt_exclusions(aur_count: int, repo_count: int) -> Exclusions:
    """Ask which upgrades to skip.

    Raises:
        typer.Abort: If input cannot be read (EOF or interrupt).
    """
    console.print("[success]Enter packages you don't want to upgrade.[/]")
    console.print("[muted]e.g. '1 2 3', '1-3' or '^4' (only upgrade 4)[/]")
    line = typer.prompt("Numbers", default="", show_default=False)
    return compute_exclusions(line, aur_count, repo_count)


def _install_repo(targets: list[str], config: PacupConfig, dry_run: bool) -> InstallResult | None:
    if not targets:
        return None
    operator = PacmanOperator(dry_run=dry_run, no_confirm=config.no_confirm)
    return operator.install(targets)


def _install_aur(targets: list[str], config: PacupConfig, dry_run: bool) -> InstallResult | None:
    if not targets:
        return None
    operator = AurHelperOperator(
        config.aur_helper_args,
        dry_run=dry_run,
        no_confirm=config.no_confirm,
    )
    if not operator.is_available():
        print_warning("No AUR helper configured (set 'aur_helper' in config.toml).")
        print_info(f"Build these AUR packages manually: {' '.join(targets)}")
        return None
    return operator.install(targets)


def _report(result: InstallResult | None) -> bool:
    """Print one transaction outcome. Returns False on failure."""
    if result is None:
        return True
    if result.success:
        print_success(result.message or "Done.")
        return True
    print_error(result.error or "Installation failed")
    return False


@app.callback(invoke_without_command=True)
def upgrade_packages(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            "--noconfirm",
            help="Upgrade everything without asking which packages to skip.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be upgraded without making changes.",
        ),
    ] = False,
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
    split: Annotated[
        int | None,
        typer.Option(
            "--split",
            min=1,
            max=500,
            help="Maximum number of packages per AUR request.",
        ),
    ] = None,
) -> None:
    """Search for upgrades, choose which to skip, and install the rest.

    Packages are numbered in the listing. At the prompt, enter the numbers
    or ranges to skip ('1 3 5-7'). Prefix with '^' to keep a package
    instead; '^' entries on their own upgrade ONLY those packages.

    Examples:
        pacup upgrade                   # Interactive upgrade
        pacup upgrade --yes             # Upgrade everything
        pacup upgrade --devel           # Include VCS packages
        pacup upgrade --dry-run         # Preview the transaction
    """
    if ctx.invoked_subcommand is not None:
        return

    config = apply_overrides(
        load_config_or_exit(),
        yes=yes,
        devel=devel,
        time_update=time_update,
        split=split,
    )

    lists = search_upgrades(config)
    if lists.is_empty:
        print_info("\nThere is nothing to do")
        return

    # Selection indices refer to the lists exactly as displayed
    repo = sort_upgrades(lists.repo)
    aur = lists.aur
    print_upgrades(repo, aur)

    exclusions = Exclusions() if config.no_confirm else _prompt_exclusions(len(aur), len(repo))

    repo_targets = [u.name for u in select_targets(repo, exclusions.repo)]
    aur_targets = [u.name for u in select_targets(aur, exclusions.aur)]

    if not repo_targets and not aur_targets:
        print_info("\nThere is nothing to do")
        return

    print_targets(repo_targets, aur_targets)
    if dry_run:
        print_info("Dry-run mode: No changes will be made.")

    try:
        results = [
            _install_repo(repo_targets, config, dry_run),
            _install_aur(aur_targets, config, dry_run),
        ]
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    outcomes = [_report(result) for result in results]
    if not all(outcomes):
        raise typer.Exit(code=1)
