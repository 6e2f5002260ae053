"""In-memory package sources for tests."""

from collections.abc import Sequence

from pacup.models.package import LocalPackage, RegistryPackage, SyncPackage
from pacup.models.vcs import TrackedPackage
from pacup.sources.base import (
    LocalDatabase,
    RegistryClient,
    RegistryError,
    RevisionStore,
    SourceError,
    SyncDatabase,
)


class FakeLocalDatabase(LocalDatabase):
    """In-memory local database."""

    def __init__(self, packages: list[LocalPackage], error: str | None = None) -> None:
        self._packages = packages
        self._error = error

    def is_available(self) -> bool:
        return True

    def packages(self) -> list[LocalPackage]:
        if self._error is not None:
            raise SourceError(self._error)
        return sorted(self._packages, key=lambda p: p.name)


class FakeSyncDatabase(SyncDatabase):
    """In-memory sync databases."""

    def __init__(self, packages: list[SyncPackage], error: str | None = None) -> None:
        self._packages = {p.name: p for p in packages}
        self._error = error

    def is_available(self) -> bool:
        return True

    def find(self, name: str) -> SyncPackage | None:
        if self._error is not None:
            raise SourceError(self._error)
        return self._packages.get(name)


class FakeRegistry(RegistryClient):
    """In-memory AUR that records every request."""

    def __init__(
        self,
        packages: list[RegistryPackage],
        failing: Sequence[str] = (),
    ) -> None:
        self._packages = {p.name: p for p in packages}
        self._failing = set(failing)
        self.requests: list[list[str]] = []

    def info(self, names: Sequence[str]) -> list[RegistryPackage]:
        self.requests.append(list(names))
        if self._failing.intersection(names):
            raise RegistryError("AUR request failed: boom")
        return [self._packages[name] for name in names if name in self._packages]


class FakeRevisionStore(RevisionStore):
    """In-memory VCS store; ``stale`` names report new upstream commits."""

    def __init__(self, entries: list[TrackedPackage], stale: Sequence[str] = ()) -> None:
        self.entries = {e.name: e for e in entries}
        self.stale = set(stale)
        self.removed: list[str] = []

    def tracked(self) -> list[TrackedPackage]:
        return sorted(self.entries.values(), key=lambda e: e.name)

    def needs_update(self, entry: TrackedPackage) -> bool:
        return entry.name in self.stale

    def remove(self, names: Sequence[str]) -> None:
        for name in names:
            self.entries.pop(name, None)
            self.removed.append(name)

