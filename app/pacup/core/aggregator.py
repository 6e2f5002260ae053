"""Upgrade aggregation across package sources.

Two independent units of work run side by side: the sync repository check
and the AUR check (batched registry queries plus devel tracking). A unit
that fails is reported but never cancels the other one; only when both
fail is the check as a whole considered failed.
"""

import logging
import queue
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import TypeVar

from pacup.core.builder import IgnorePredicate, build_upgrade, never_ignore
from pacup.core.correlator import RegistryCorrelator
from pacup.core.devel import DevelTracker
from pacup.core.version import VersionComparator, vercmp
from pacup.models.package import LocalPackage
from pacup.models.upgrade import Upgrade, UpgradeSource
from pacup.sources.base import (
    LocalDatabase,
    RegistryClient,
    RevisionStore,
    SourceError,
    SyncDatabase,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Capacity of the hand-off queue between AUR producers and the collector
DEFAULT_QUEUE_SIZE = 64

# Concurrent AUR requests
DEFAULT_MAX_WORKERS = 8


class UpgradeCheckError(Exception):
    """Raised when no source could be checked for upgrades."""


@dataclass(frozen=True, slots=True)
class UpgradeLists:
    """Upgrades found per source.

    Attributes:
        repo: Upgrades from the sync repositories, in local database order.
        aur: Upgrades from the AUR and devel tracking, in arrival order.
        errors: Messages of failed units and failed AUR batches.
    """

    repo: list[Upgrade] = field(default_factory=list)
    aur: list[Upgrade] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of upgrades across both lists."""
        return len(self.repo) + len(self.aur)

    @property
    def is_empty(self) -> bool:
        """Check if there is nothing to upgrade."""
        return self.total == 0


@dataclass(frozen=True, slots=True)
class _Done:
    """Completion marker posted by every AUR producer."""

    error: str | None = None


Producer = Callable[[], Iterable[Upgrade]]


class UpgradeAggregator:
    """Collects upgrade candidates from every configured source.

    Example:
        >>> aggregator = UpgradeAggregator(local_db, sync_db, AurClient())
        >>> lists = aggregator.collect()
        >>> print(len(lists.repo), len(lists.aur))
    """

    def __init__(
        self,
        local_db: LocalDatabase,
        sync_db: SyncDatabase,
        registry: RegistryClient,
        *,
        ignore: IgnorePredicate = never_ignore,
        comparator: VersionComparator = vercmp,
        revision_store: RevisionStore | None = None,
        devel: bool = False,
        split_n: int = 150,
        time_update: bool = False,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._local_db = local_db
        self._sync_db = sync_db
        self._ignore = ignore
        self._comparator = comparator
        self._correlator = RegistryCorrelator(
            registry,
            ignore=ignore,
            comparator=comparator,
            split_n=split_n,
            time_update=time_update,
        )
        self._tracker = (
            DevelTracker(revision_store, ignore=ignore)
            if devel and revision_store is not None
            else None
        )
        self._queue_size = queue_size
        self._max_workers = max_workers

    def collect(self) -> UpgradeLists:
        """Check every source and gather the upgrades.

        Returns:
            UpgradeLists with partial results if one unit failed.

        Raises:
            UpgradeCheckError: If the local database is unreadable or both
                units failed.
        """
        try:
            packages = self._local_db.packages()
        except SourceError as e:
            raise UpgradeCheckError(f"Cannot read local package database: {e}") from e

        native = [pkg for pkg in packages if not pkg.foreign]
        foreign = [pkg for pkg in packages if pkg.foreign]
        logger.debug("%d native and %d foreign packages installed", len(native), len(foreign))

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="pacup-source") as executor:
            repo_future = executor.submit(self.check_repo, native)
            aur_future = executor.submit(self.check_aur, foreign)
            wait([repo_future, aur_future])

        errors: list[str] = []
        repo, repo_error = _unit_outcome(repo_future, "sync databases")
        aur_result, aur_error = _unit_outcome(aur_future, "AUR")

        if repo_error is not None and aur_error is not None:
            raise UpgradeCheckError(f"{repo_error}; {aur_error}")

        if repo_error is not None:
            errors.append(repo_error)
        if aur_error is not None:
            errors.append(aur_error)

        aur: list[Upgrade] = []
        if aur_result is not None:
            aur, batch_errors = aur_result
            errors.extend(batch_errors)

        return UpgradeLists(repo=repo or [], aur=aur, errors=errors)

    def check_repo(self, packages: Sequence[LocalPackage]) -> list[Upgrade]:
        """Compare installed native packages with the sync repositories.

        Raises:
            SourceError: If the sync databases cannot be read.
        """
        upgrades: list[Upgrade] = []
        for pkg in packages:
            candidate = self._sync_db.find(pkg.name)
            if candidate is None:
                continue
            upgrade = build_upgrade(
                pkg.name,
                pkg.version,
                candidate.version,
                source=UpgradeSource.REPO,
                repository=candidate.repository,
                ignored=self._ignore(pkg.name),
                comparator=self._comparator,
            )
            if upgrade is not None:
                upgrades.append(upgrade)
        return upgrades

    def check_aur(self, packages: Sequence[LocalPackage]) -> tuple[list[Upgrade], list[str]]:
        """Check foreign packages against the AUR and the devel tracker.

        Every batch request and the devel scan run as separate producers
        feeding a bounded queue. Upgrades are merged as they arrive; the
        first producer to report a package name wins.

        Returns:
            The upgrades and the errors of the producers that failed.

        Raises:
            SourceError: If every producer failed.
        """
        producers: list[Producer] = [
            _batch_producer(self._correlator, batch)
            for batch in self._correlator.batches(packages)
        ]
        if self._tracker is not None:
            installed = {pkg.name: pkg for pkg in packages}
            tracker = self._tracker
            producers.append(lambda: tracker.check(installed))

        if not producers:
            return [], []

        handoff: queue.Queue[Upgrade | _Done] = queue.Queue(maxsize=self._queue_size)

        with ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="pacup-aur",
        ) as executor:
            for producer in producers:
                executor.submit(_produce, producer, handoff)
            upgrades, errors = _consume(handoff, len(producers))

        if len(errors) == len(producers):
            raise SourceError("; ".join(errors))
        return upgrades, errors


def _batch_producer(correlator: RegistryCorrelator, batch: Sequence[LocalPackage]) -> Producer:
    return lambda: correlator.check_batch(batch)


def _produce(producer: Producer, handoff: "queue.Queue[Upgrade | _Done]") -> None:
    """Run one producer, always finishing with a completion marker."""
    error: str | None = None
    try:
        for upgrade in producer():
            handoff.put(upgrade)
    except SourceError as e:
        logger.warning("%s", e)
        error = str(e)
    except Exception as e:
        # Any escape must still be counted, or the collector waits forever
        logger.exception("Unexpected failure while checking the AUR")
        error = f"unexpected error: {e}"
    finally:
        handoff.put(_Done(error))


def _consume(
    handoff: "queue.Queue[Upgrade | _Done]",
    producers: int,
) -> tuple[list[Upgrade], list[str]]:
    """Collect upgrades until every producer has reported completion."""
    upgrades: list[Upgrade] = []
    errors: list[str] = []
    seen: set[str] = set()
    done = 0

    while done < producers:
        item = handoff.get()
        if isinstance(item, _Done):
            done += 1
            if item.error is not None:
                errors.append(item.error)
            continue
        if item.name in seen:
            logger.debug("Skipping duplicate upgrade for %s from %s", item.name, item.repository)
            continue
        seen.add(item.name)
        upgrades.append(item)

    return upgrades, errors


def _unit_outcome(future: Future[T], label: str) -> tuple[T | None, str | None]:
    """Unpack a finished unit into (result, error message)."""
    error = future.exception()
    if error is None:
        return future.result(), None
    if not isinstance(error, SourceError):
        logger.error("Unexpected failure while checking %s", label, exc_info=error)
    else:
        logger.error("Failed to check %s: %s", label, error)
    return None, f"{label}: {error}"
