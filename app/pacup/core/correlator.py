"""Batched AUR correlation.

The AUR info endpoint accepts a bounded number of names per request, so
foreign packages are checked in batches. Each batch's response is matched
back against the local packages in a single forward pass.
"""

import logging
from collections.abc import Sequence
from typing import TypeVar

from pacup.core.builder import IgnorePredicate, build_upgrade, never_ignore
from pacup.core.version import VersionComparator, vercmp
from pacup.models.package import LocalPackage, RegistryPackage
from pacup.models.upgrade import AUR_REPOSITORY, Upgrade, UpgradeSource
from pacup.sources.base import RegistryClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def split_batches(items: Sequence[T], size: int) -> list[Sequence[T]]:
    """Split items into contiguous batches of at most ``size``.

    Batches are cut from the end of the sequence, so the first batch
    holds the last ``size`` items and a short remainder lands at the front.

    Args:
        items: Items to split.
        size: Maximum batch size.

    Returns:
        The batches, last slice first.

    Raises:
        ValueError: If size is not positive.
    """
    if size < 1:
        msg = f"Batch size must be positive, got {size}"
        raise ValueError(msg)

    batches: list[Sequence[T]] = []
    end = len(items)
    while end > 0:
        start = max(end - size, 0)
        batches.append(items[start:end])
        end = start
    return batches


def correlate_batch(
    local: Sequence[LocalPackage],
    results: Sequence[RegistryPackage],
    *,
    ignore: IgnorePredicate = never_ignore,
    comparator: VersionComparator = vercmp,
    time_update: bool = False,
) -> list[Upgrade]:
    """Match one batch's registry results back to the local packages.

    ``results`` must keep the order of ``local`` and may only lack names,
    never add or reorder them. A local package whose name does not sit at
    the expected result position is absent from the registry; every such
    miss shifts the expected position by one.

    Args:
        local: Local packages of the batch, in query order.
        results: Registry answer for the batch.
        ignore: Ignore predicate.
        comparator: Version ordering.
        time_update: Also flag packages modified in the AUR after they
            were built locally.

    Returns:
        Upgrades found in this batch, in local order.
    """
    upgrades: list[Upgrade] = []
    missing = 0

    for index, pkg in enumerate(local):
        cursor = index - missing
        if cursor >= len(results):
            break

        remote = results[cursor]
        if remote.name != pkg.name:
            missing += 1
            continue

        modified = time_update and remote.last_modified > pkg.build_date
        upgrade = build_upgrade(
            pkg.name,
            pkg.version,
            remote.version,
            source=UpgradeSource.AUR,
            repository=AUR_REPOSITORY,
            ignored=ignore(pkg.name),
            comparator=comparator,
            force=modified,
        )
        if upgrade is not None:
            upgrades.append(upgrade)

    return upgrades


class RegistryCorrelator:
    """Checks foreign packages against the AUR, one batch per request.

    Attributes:
        split_n: Maximum number of names per request.
    """

    def __init__(
        self,
        client: RegistryClient,
        *,
        ignore: IgnorePredicate = never_ignore,
        comparator: VersionComparator = vercmp,
        split_n: int = 150,
        time_update: bool = False,
    ) -> None:
        self._client = client
        self._ignore = ignore
        self._comparator = comparator
        self._time_update = time_update
        self.split_n = split_n

    def batches(self, packages: Sequence[LocalPackage]) -> list[Sequence[LocalPackage]]:
        """Split packages into request-sized batches."""
        return split_batches(packages, self.split_n)

    def check_batch(self, batch: Sequence[LocalPackage]) -> list[Upgrade]:
        """Query the registry for one batch and correlate the answer.

        Raises:
            RegistryError: If the request fails.
        """
        results = self._client.info([pkg.name for pkg in batch])
        logger.debug("AUR returned %d of %d packages", len(results), len(batch))
        return correlate_batch(
            batch,
            results,
            ignore=self._ignore,
            comparator=self._comparator,
            time_update=self._time_update,
        )
