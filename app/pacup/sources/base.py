"""Abstract base classes for package sources.

The upgrade core talks to pacman, the AUR and the VCS store only through
these interfaces, so each can be swapped or faked independently.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pacup.models.package import LocalPackage, RegistryPackage, SyncPackage
from pacup.models.vcs import TrackedPackage


class SourceError(RuntimeError):
    """Raised when a package source cannot deliver its data."""


class RegistryError(SourceError):
    """Raised when an AUR request fails."""


class LocalDatabase(ABC):
    """The database of installed packages.

    Example:
        >>> db = PacmanLocalDatabase()
        >>> if db.is_available():
        ...     foreign = [p for p in db.packages() if p.foreign]
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the database can be queried on this system."""

    @abstractmethod
    def packages(self) -> list[LocalPackage]:
        """Return every installed package, ordered by name.

        Raises:
            SourceError: If the database cannot be read.
        """


class SyncDatabase(ABC):
    """The configured sync repositories."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the sync databases can be queried on this system."""

    @abstractmethod
    def find(self, name: str) -> SyncPackage | None:
        """Return the package the repositories would install for ``name``.

        Raises:
            SourceError: If the sync databases cannot be read.
        """


class RegistryClient(ABC):
    """A remote package registry queried by name."""

    @abstractmethod
    def info(self, names: Sequence[str]) -> list[RegistryPackage]:
        """Look up a batch of packages.

        Results follow the order of ``names``; names unknown to the
        registry are simply absent.

        Raises:
            RegistryError: If the request fails.
        """


class RevisionStore(ABC):
    """Persistent revision state of tracked VCS packages."""

    @abstractmethod
    def tracked(self) -> list[TrackedPackage]:
        """Return every tracked package.

        Raises:
            SourceError: If the store cannot be read.
        """

    @abstractmethod
    def needs_update(self, entry: TrackedPackage) -> bool:
        """Check if upstream moved past the recorded revision."""

    @abstractmethod
    def remove(self, names: Sequence[str]) -> None:
        """Stop tracking the given packages.

        Raises:
            SourceError: If the store cannot be written.
        """
