"""pacman database adapters.

Reads the local database with ``pacman -Qi`` / ``pacman -Qqm`` and the sync
databases with ``pacman -Sl``. All commands run under the C locale so the
field labels and dates are parseable.
"""

import logging
import subprocess
from datetime import datetime

from pacup.models.package import LocalPackage, SyncPackage
from pacup.sources.base import LocalDatabase, SourceError, SyncDatabase
from pacup.utils.shell import C_LOCALE, CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# strftime("%c") in the C locale, after collapsing repeated spaces
_BUILD_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"

# Reading every package's info can take a while on large systems
_PACMAN_TIMEOUT: float = 120.0


def _query(args: list[str], timeout: float | None = _PACMAN_TIMEOUT) -> CommandResult:
    """Run a read-only pacman query.

    Raises:
        SourceError: If pacman cannot be started or does not finish in time.
    """
    try:
        return run_command(args, env=C_LOCALE, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        msg = f"{' '.join(args)} timed out after {e.timeout:g}s"
        raise SourceError(msg) from e
    except OSError as e:
        msg = f"{' '.join(args)} could not be run: {e}"
        raise SourceError(msg) from e


def parse_build_date(value: str) -> int:
    """Parse a pacman build date into a Unix timestamp.

    Returns:
        The timestamp, or 0 if the date cannot be parsed.
    """
    try:
        return int(datetime.strptime(" ".join(value.split()), _BUILD_DATE_FORMAT).timestamp())
    except ValueError:
        logger.debug("Unparseable build date: %r", value)
        return 0


def parse_info_output(output: str, foreign: set[str]) -> list[LocalPackage]:
    """Parse ``pacman -Qi`` output into packages.

    Args:
        output: Blank-line separated package blocks.
        foreign: Names of packages missing from every sync repository.

    Returns:
        The packages, in output order. Blocks without a name or version
        are skipped.
    """
    packages: list[LocalPackage] = []

    for block in output.split("\n\n"):
        fields: dict[str, str] = {}
        for line in block.splitlines():
            key, sep, value = line.partition(":")
            # Continuation lines of multi-value fields start with spaces
            if not sep or line.startswith(" "):
                continue
            fields[key.strip()] = value.strip()

        name = fields.get("Name")
        version = fields.get("Version")
        if not name or not version:
            if block.strip():
                logger.debug("Skipping malformed pacman block: %r", block[:100])
            continue

        packages.append(
            LocalPackage(
                name=name,
                version=version,
                build_date=parse_build_date(fields.get("Build Date", "")),
                foreign=name in foreign,
            )
        )

    return packages


def parse_sync_list(output: str) -> dict[str, SyncPackage]:
    """Parse ``pacman -Sl`` output into the newest package per name.

    pacman lists repositories in pacman.conf order and installs from the
    first one carrying a package, so the first occurrence wins.
    """
    packages: dict[str, SyncPackage] = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 3:
            continue
        repository, name, version = parts[0], parts[1], parts[2]
        if name not in packages:
            packages[name] = SyncPackage(name=name, version=version, repository=repository)
    return packages


class PacmanLocalDatabase(LocalDatabase):
    """Installed packages as reported by pacman."""

    def is_available(self) -> bool:
        """Check if pacman is installed."""
        return command_exists("pacman")

    def packages(self) -> list[LocalPackage]:
        """Return every installed package.

        Raises:
            SourceError: If pacman is missing or a query fails.
        """
        if not self.is_available():
            msg = "pacman is not available on this system"
            raise SourceError(msg)

        foreign = self._foreign_names()
        result = _query(["pacman", "-Qi"])
        if not result.success:
            msg = f"pacman -Qi failed: {result.stderr.strip() or 'unknown error'}"
            raise SourceError(msg)

        packages = parse_info_output(result.stdout, foreign)
        packages.sort(key=lambda p: p.name)
        return packages

    def _foreign_names(self) -> set[str]:
        """Names of installed packages no sync repository provides.

        Raises:
            SourceError: If the query fails.
        """
        result = _query(["pacman", "-Qqm"], timeout=60.0)
        # pacman exits 1 when there are no foreign packages
        if not result.success and result.stderr.strip():
            msg = f"pacman -Qqm failed: {result.stderr.strip()}"
            raise SourceError(msg)
        return {line.strip() for line in result.stdout.splitlines() if line.strip()}


class PacmanSyncDatabase(SyncDatabase):
    """Packages available from the configured repositories.

    The listing is loaded once, on first lookup.
    """

    def __init__(self) -> None:
        self._packages: dict[str, SyncPackage] | None = None

    def is_available(self) -> bool:
        """Check if pacman is installed."""
        return command_exists("pacman")

    def find(self, name: str) -> SyncPackage | None:
        """Return the repository package for ``name``.

        Raises:
            SourceError: If the sync databases cannot be listed.
        """
        if self._packages is None:
            self._packages = self._load()
        return self._packages.get(name)

    def _load(self) -> dict[str, SyncPackage]:
        if not self.is_available():
            msg = "pacman is not available on this system"
            raise SourceError(msg)

        result = _query(["pacman", "-Sl"])
        if not result.success:
            msg = f"pacman -Sl failed: {result.stderr.strip() or 'unknown error'}"
            raise SourceError(msg)

        packages = parse_sync_list(result.stdout)
        logger.debug("Loaded %d packages from sync databases", len(packages))
        return packages
