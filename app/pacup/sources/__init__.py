"""Package sources consulted for upgrades.

This module exports the source interfaces and their pacman, AUR and VCS
implementations.
"""

from pacup.sources.aur import AurClient
from pacup.sources.base import (
    LocalDatabase,
    RegistryClient,
    RegistryError,
    RevisionStore,
    SourceError,
    SyncDatabase,
)
from pacup.sources.ignore import IgnoreList
from pacup.sources.pacman import PacmanLocalDatabase, PacmanSyncDatabase
from pacup.sources.vcs import VcsStore, VcsStoreError

__all__ = [
    "AurClient",
    "IgnoreList",
    "LocalDatabase",
    "PacmanLocalDatabase",
    "PacmanSyncDatabase",
    "RegistryClient",
    "RegistryError",
    "RevisionStore",
    "SourceError",
    "SyncDatabase",
    "VcsStore",
    "VcsStoreError",
]
