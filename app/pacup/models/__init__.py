"""Data models for pacup.

This module exports the core data structures used throughout the application.
"""

from pacup.models.package import LocalPackage, RegistryPackage, SyncPackage
from pacup.models.upgrade import (
    DEVEL_VERSION,
    Upgrade,
    UpgradeReport,
    UpgradeSource,
    sort_upgrades,
)
from pacup.models.vcs import TrackedPackage

__all__ = [
    "DEVEL_VERSION",
    "LocalPackage",
    "RegistryPackage",
    "SyncPackage",
    "TrackedPackage",
    "Upgrade",
    "UpgradeReport",
    "UpgradeSource",
    "sort_upgrades",
]
