"""Development package tracking.

VCS packages carry no meaningful version: they are outdated when upstream
has commits newer than the one they were built from. The revision store
knows the recorded commit; this module turns stale entries into upgrades.
"""

import logging
from collections.abc import Iterator, Mapping

from pacup.core.builder import IgnorePredicate, never_ignore, warn_ignored
from pacup.models.package import LocalPackage
from pacup.models.upgrade import DEVEL_REPOSITORY, DEVEL_VERSION, Upgrade, UpgradeSource
from pacup.sources.base import RevisionStore, SourceError

logger = logging.getLogger(__name__)


class DevelTracker:
    """Finds tracked VCS packages with new upstream commits."""

    def __init__(self, store: RevisionStore, *, ignore: IgnorePredicate = never_ignore) -> None:
        self._store = store
        self._ignore = ignore

    def check(self, installed: Mapping[str, LocalPackage]) -> Iterator[Upgrade]:
        """Yield an upgrade for every stale tracked package.

        Tracked packages that are no longer installed are dropped from the
        store once the scan is complete.

        Args:
            installed: Installed packages eligible for devel upgrades, by name.

        Yields:
            Upgrade with the sentinel remote version for each stale package.

        Raises:
            SourceError: If the store cannot be read.
        """
        gone: list[str] = []

        for entry in self._store.tracked():
            if not self._store.needs_update(entry):
                continue

            pkg = installed.get(entry.name)
            if pkg is None:
                logger.info("%s is tracked but not installed, forgetting it", entry.name)
                gone.append(entry.name)
                continue

            if self._ignore(pkg.name):
                warn_ignored(pkg.name, pkg.version, DEVEL_VERSION)
                continue

            yield Upgrade(
                name=entry.name,
                source=UpgradeSource.DEVEL,
                local_version=entry.short_sha,
                remote_version=DEVEL_VERSION,
                repository=DEVEL_REPOSITORY,
            )

        if gone:
            try:
                self._store.remove(gone)
            except SourceError as e:
                logger.error("Failed to update VCS store: %s", e)
