"""pacman operator implementation.

Upgrades repository packages with ``pacman -S``.
"""

import logging

from pacup.operators.base import InstallResult, Operator
from pacup.utils.shell import command_exists, run_interactive

logger = logging.getLogger(__name__)


class PacmanOperator(Operator):
    """Operator for sync repository packages.

    pacman runs attached to the terminal so it can show its own
    transaction summary and questions. Requires sudo privileges unless
    dry_run is set, in which case ``--print`` lists the targets.
    """

    def is_available(self) -> bool:
        """Check if pacman is available."""
        return command_exists("pacman")

    def build_command(self, packages: list[str]) -> list[str]:
        """Build the pacman invocation for the given targets."""
        if self.dry_run:
            args = ["pacman", "-S", "--print"]
        else:
            args = ["sudo", "pacman", "-S", "--needed"]
            if self.no_confirm:
                args.append("--noconfirm")
        args.extend(packages)
        return args

    def install(self, packages: list[str]) -> InstallResult:
        """Upgrade packages with pacman.

        Raises:
            RuntimeError: If pacman is not available.
        """
        if not self.is_available():
            msg = "pacman is not available on this system"
            raise RuntimeError(msg)

        if not packages:
            return InstallResult(packages=(), success=True, message="Nothing to install")

        args = self.build_command(packages)
        logger.info("Running %s", " ".join(args))
        returncode = run_interactive(args)

        if returncode == 0:
            message = "Dry-run completed" if self.dry_run else "Upgrade completed"
            return InstallResult(packages=tuple(packages), success=True, message=message)
        return InstallResult(
            packages=tuple(packages),
            success=False,
            error=f"pacman exited with status {returncode}",
        )
