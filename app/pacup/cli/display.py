"""Rich display of pending upgrades.

The listing is numbered the way the selection prompt expects: the
repository list is printed first with the highest numbers, the AUR list
last, each counting down to its first element.
"""

from rich.markup import escape
from rich.table import Table

from pacup.core.theme import REPO_PALETTE_SIZE
from pacup.core.version import InvalidVersionError, parse_complete_version
from pacup.models.upgrade import Upgrade
from pacup.utils.formatting import console

INVALID_VERSION = "[error]Invalid Version[/]"


def repository_style(repository: str) -> str:
    """Pick a stable label color for a repository name (djb2 hash)."""
    value = 5381
    for byte in repository.encode("utf-8"):
        value = (value * 33 + byte) & 0xFFFFFFFF
    return f"repo_{value % REPO_PALETTE_SIZE}"


def format_versions(upgrade: Upgrade) -> tuple[str, str]:
    """Format the installed and available versions with Rich markup.

    When only the pkgrel changed it is highlighted, otherwise the version
    is. Unparseable versions show as "Invalid Version"; devel packages
    have no comparable version and are shown as-is.

    Returns:
        Tuple of (installed, available) markup.
    """
    if upgrade.is_devel:
        return (
            f"[muted]{escape(upgrade.local_version)}[/]",
            f"[new_version]{escape(upgrade.remote_version)}[/]",
        )

    try:
        old = parse_complete_version(upgrade.local_version)
    except InvalidVersionError:
        old = None
    try:
        new = parse_complete_version(upgrade.remote_version)
    except InvalidVersionError:
        new = None

    same_version = old is not None and new is not None and old.full_version == new.full_version

    if old is None:
        left = INVALID_VERSION
    elif same_version:
        left = f"{escape(old.full_version)}-[old_version]{escape(old.pkgrel)}[/]"
    else:
        left = f"[old_version]{escape(old.full_version)}[/]-{escape(old.pkgrel)}"

    if new is None:
        right = INVALID_VERSION
    elif same_version:
        right = f"{escape(new.full_version)}-[new_version]{escape(new.pkgrel)}[/]"
    else:
        right = f"[new_version_bold]{escape(new.full_version)}[/]-{escape(new.pkgrel)}"

    return left, right


def format_upgrade_row(upgrade: Upgrade, number: int) -> tuple[str, str, str, str, str]:
    """Format an upgrade as a table row.

    Returns:
        Tuple of (number, package, installed, arrow, available) markup.
    """
    style = repository_style(upgrade.repository)
    package = f"[{style}]{escape(upgrade.repository)}[/]/[package.name]{escape(upgrade.name)}[/]"
    left, right = format_versions(upgrade)
    return (f"[number]{number}[/]", package, left, "->", right)


def create_upgrade_table(repo: list[Upgrade], aur: list[Upgrade]) -> Table:
    """Create the numbered upgrade listing.

    Args:
        repo: Repository upgrades, already sorted for display.
        aur: AUR and devel upgrades.

    Returns:
        Rich Table with one row per upgrade.
    """
    table = Table(
        box=None,
        show_header=False,
        pad_edge=False,
    )
    table.add_column("#", justify="right")
    table.add_column("Package", no_wrap=True)
    table.add_column("Installed", justify="right")
    table.add_column("", justify="center")
    table.add_column("Available")

    for upgrades, start in ((repo, len(aur) + 1), (aur, 1)):
        for offset, upgrade in enumerate(upgrades):
            number = len(upgrades) + start - offset - 1
            table.add_row(*format_upgrade_row(upgrade, number))

    return table


def print_upgrades(repo: list[Upgrade], aur: list[Upgrade]) -> None:
    """Print the header line and the numbered upgrade listing."""
    total = len(repo) + len(aur)
    console.print(f"[info]::[/] {total} [bold]Packages to upgrade.[/]")
    console.print(create_upgrade_table(repo, aur))


def print_targets(repo_targets: list[str], aur_targets: list[str]) -> None:
    """Print the package names that will be upgraded."""
    if repo_targets:
        console.print(f"[header]Repository:[/] {escape(' '.join(repo_targets))}")
    if aur_targets:
        console.print(f"[header]AUR:[/] {escape(' '.join(aur_targets))}")
