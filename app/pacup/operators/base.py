"""Abstract base class for upgrade installers.

An operator receives the package names that survived selection and hands
them to the tool that actually performs the transaction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of one install transaction.

    Attributes:
        packages: Package names passed to the installer.
        success: Whether the installer reported success.
        message: Optional success message or additional information.
        error: Optional error message if the transaction failed.
    """

    packages: tuple[str, ...]
    success: bool
    message: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the transaction failed."""
        return not self.success


class Operator(ABC):
    """Abstract base class for all installers.

    Attributes:
        dry_run: If True, only show what would be installed.
        no_confirm: If True, ask the installer not to prompt.

    Example:
        >>> operator = PacmanOperator(dry_run=True)
        >>> if operator.is_available():
        ...     result = operator.install(["linux", "mesa"])
    """

    def __init__(self, dry_run: bool = False, no_confirm: bool = False) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only simulate the transaction.
            no_confirm: If True, pass the installer's non-interactive flag.
        """
        self._dry_run = dry_run
        self._no_confirm = no_confirm

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @property
    def no_confirm(self) -> bool:
        """Check if operator runs non-interactively."""
        return self._no_confirm

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the installer can be used on this system."""

    @abstractmethod
    def install(self, packages: list[str]) -> InstallResult:
        """Install or upgrade the given packages in one transaction.

        Raises:
            RuntimeError: If the installer is not available.
        """
