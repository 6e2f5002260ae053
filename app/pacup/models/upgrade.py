"""Upgrade candidate models.

This module defines the Upgrade record produced by the resolution core,
the ordering used to group upgrades for display, and the report model
used for JSON export.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from functools import cmp_to_key
from typing import Any


class UpgradeSource(Enum):
    """Where an upgrade candidate was found."""

    REPO = "repo"
    AUR = "aur"
    DEVEL = "devel"


# Placeholder remote version for VCS packages: there is no concrete
# version until the package is rebuilt
DEVEL_VERSION = "git"

# Repository label used for AUR and devel candidates
AUR_REPOSITORY = "aur"
DEVEL_REPOSITORY = "devel"


@dataclass(frozen=True, slots=True)
class Upgrade:
    """A package proposed for upgrade.

    Attributes:
        name: Package name.
        source: Source that proposed the upgrade.
        local_version: Installed version (short commit for devel packages).
        remote_version: Version that would be installed.
        repository: Origin label shown to the user ('core', 'aur', 'devel', ...).
    """

    name: str
    source: UpgradeSource
    local_version: str
    remote_version: str
    repository: str

    def __post_init__(self) -> None:
        """Validate upgrade data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def is_devel(self) -> bool:
        """Check if this is a VCS package refresh."""
        return self.source == UpgradeSource.DEVEL

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "source": self.source.value,
            "repository": self.repository,
            "local_version": self.local_version,
            "remote_version": self.remote_version,
        }


def compare_repositories(left: str, right: str) -> int:
    """Order two repository labels, descending.

    Characters are compared case-insensitively first, then case-sensitively
    as a tie-break. When one label is a prefix of the other they compare
    equal.

    Returns:
        Negative if ``left`` sorts first, positive if ``right`` does, 0 if equal.
    """
    for lc, rc in zip(left, right, strict=False):
        ll, rl = lc.lower(), rc.lower()
        if ll != rl:
            return -1 if ll > rl else 1
        if lc != rc:
            return -1 if lc > rc else 1
    return 0


def sort_upgrades(upgrades: list[Upgrade]) -> list[Upgrade]:
    """Return upgrades grouped by repository for display.

    The sort is stable, so packages of one repository keep their order.
    """
    return sorted(
        upgrades,
        key=cmp_to_key(lambda a, b: compare_repositories(a.repository, b.repository)),
    )


@dataclass(frozen=True, slots=True)
class UpgradeReport:
    """Pending upgrades for JSON export.

    Attributes:
        repo: Upgrades from the sync repositories.
        aur: Upgrades from the AUR and devel tracking.
        errors: Messages of the sources that failed.
        timestamp: ISO format timestamp of the check.
    """

    repo: list[Upgrade]
    aur: list[Upgrade]
    errors: list[str] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        from pacup import __version__

        return {
            "timestamp": self.timestamp,
            "pacup_version": __version__,
            "repo": [u.to_dict() for u in self.repo],
            "aur": [u.to_dict() for u in self.aur],
            "errors": list(self.errors),
            "total": len(self.repo) + len(self.aur),
        }
