"""Upgrade candidate construction.

Turns an installed/available version pair into at most one Upgrade,
honouring the ignore list.
"""

import logging
from collections.abc import Callable

from pacup.core.version import VersionComparator, is_newer, vercmp
from pacup.models.upgrade import Upgrade, UpgradeSource

logger = logging.getLogger(__name__)

# Returns True for package names whose upgrades must be suppressed
IgnorePredicate = Callable[[str], bool]


def never_ignore(name: str) -> bool:
    """Ignore predicate that lets every package through."""
    return False


def warn_ignored(name: str, local_version: str, remote_version: str) -> None:
    """Log the warning emitted for a suppressed upgrade."""
    logger.warning("%s: ignoring package upgrade (%s => %s)", name, local_version, remote_version)


def build_upgrade(
    name: str,
    local_version: str,
    remote_version: str,
    *,
    source: UpgradeSource,
    repository: str,
    ignored: bool,
    comparator: VersionComparator = vercmp,
    force: bool = False,
) -> Upgrade | None:
    """Build an upgrade candidate if the available version is worth installing.

    Args:
        name: Package name.
        local_version: Installed version.
        remote_version: Version offered by the source.
        source: Source offering the version.
        repository: Origin label for display.
        ignored: Whether the package is on the ignore list.
        comparator: Version ordering used to decide "newer".
        force: Treat the package as outdated regardless of versions (used
            when the AUR copy was modified after the local build).

    Returns:
        The Upgrade, or None when the package is up to date or ignored.
    """
    if not force and not is_newer(local_version, remote_version, comparator):
        return None

    if ignored:
        warn_ignored(name, local_version, remote_version)
        return None

    return Upgrade(
        name=name,
        source=source,
        local_version=local_version,
        remote_version=remote_version,
        repository=repository,
    )
