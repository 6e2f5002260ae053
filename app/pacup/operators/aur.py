"""AUR helper operator implementation.

Building AUR packages is left to an external helper (paru, yay, aurutils,
...) configured with ``aur_helper``.
"""

import logging

from pacup.operators.base import InstallResult, Operator
from pacup.utils.shell import command_exists, run_interactive

logger = logging.getLogger(__name__)


class AurHelperOperator(Operator):
    """Operator delegating AUR targets to a helper command.

    Attributes:
        helper: Helper command and its fixed arguments, e.g. ["paru", "-S"].
    """

    def __init__(
        self,
        helper: list[str],
        dry_run: bool = False,
        no_confirm: bool = False,
    ) -> None:
        super().__init__(dry_run=dry_run, no_confirm=no_confirm)
        self.helper = list(helper)

    def is_available(self) -> bool:
        """Check if a helper is configured and installed."""
        return bool(self.helper) and command_exists(self.helper[0])

    def build_command(self, packages: list[str]) -> list[str]:
        """Build the helper invocation for the given targets."""
        args = [*self.helper]
        if self.no_confirm:
            args.append("--noconfirm")
        args.extend(packages)
        return args

    def install(self, packages: list[str]) -> InstallResult:
        """Build and install AUR packages with the helper.

        In dry-run mode the command is only reported.

        Raises:
            RuntimeError: If no usable helper is configured.
        """
        if not self.is_available():
            msg = "No AUR helper is configured or it is not installed"
            raise RuntimeError(msg)

        if not packages:
            return InstallResult(packages=(), success=True, message="Nothing to install")

        args = self.build_command(packages)
        if self.dry_run:
            return InstallResult(
                packages=tuple(packages),
                success=True,
                message=f"Would run: {' '.join(args)}",
            )

        logger.info("Running %s", " ".join(args))
        returncode = run_interactive(args)
        if returncode == 0:
            return InstallResult(packages=tuple(packages), success=True, message="Build completed")
        return InstallResult(
            packages=tuple(packages),
            success=False,
            error=f"{self.helper[0]} exited with status {returncode}",
        )
