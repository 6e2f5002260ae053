"""Package models for the local database, sync repositories and the AUR.

These are the shapes the source adapters hand to the upgrade core.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LocalPackage:
    """An installed package from the local pacman database.

    Attributes:
        name: Package name.
        version: Installed version string ([epoch:]version-pkgrel).
        build_date: Build time as a Unix timestamp (0 if unknown).
        foreign: True if no sync repository provides the package, which
            makes it an AUR (or hand-built) package.
    """

    name: str
    version: str
    build_date: int = 0
    foreign: bool = False

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class SyncPackage:
    """A package available from a configured sync repository.

    Attributes:
        name: Package name.
        version: Available version string.
        repository: Name of the repository providing it (e.g. 'extra').
    """

    name: str
    version: str
    repository: str


@dataclass(frozen=True, slots=True)
class RegistryPackage:
    """A package as reported by the AUR info endpoint.

    Attributes:
        name: Package name.
        version: Latest version in the AUR.
        last_modified: Last modification time as a Unix timestamp.
    """

    name: str
    version: str
    last_modified: int = 0
