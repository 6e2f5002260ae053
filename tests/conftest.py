"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from fakes import FakeLocalDatabase, FakeRegistry, FakeSyncDatabase
from pacup.models.package import LocalPackage, RegistryPackage, SyncPackage


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Restore root logger handlers and level after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config and cache directories into tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    return tmp_path


@pytest.fixture
def mock_pacman_qi_output() -> str:
    """Sample ``pacman -Qi`` output for testing."""
    return """Name            : linux
Version         : 6.9.1.arch1-1
Description     : The Linux kernel and modules
Depends On      : coreutils  kmod
                  mkinitcpio
Build Date      : Sat May 18 10:12:43 2024
Install Reason  : Explicitly installed

Name            : neovim-git
Version         : 0.10.0.r120.g7f1c0a9-1
Description     : Fork of Vim aiming to improve user experience
Build Date      : Mon Jan  8 09:00:00 2024

Name            : yay
Version         : 12.3.5-1
Build Date      : not a date
"""


@pytest.fixture
def mock_pacman_sl_output() -> str:
    """Sample ``pacman -Sl`` output for testing."""
    return """core linux 6.9.3.arch1-1 [installed: 6.9.1.arch1-1]
core pacman 6.1.0-3 [installed]
extra linux 6.9.9.arch1-1
extra firefox 127.0-1
"""


@pytest.fixture
def local_db() -> FakeLocalDatabase:
    """Local database with native and foreign packages."""
    return FakeLocalDatabase(
        [
            LocalPackage(name="linux", version="6.9.1.arch1-1"),
            LocalPackage(name="pacman", version="6.1.0-3"),
            LocalPackage(name="paru", version="2.0.1-1", foreign=True),
            LocalPackage(name="yay", version="12.3.5-1", foreign=True),
            LocalPackage(name="neovim-git", version="0.10.0.r1-1", foreign=True),
        ]
    )


@pytest.fixture
def sync_db() -> FakeSyncDatabase:
    """Sync databases with one pending repository upgrade."""
    return FakeSyncDatabase(
        [
            SyncPackage(name="linux", version="6.9.3.arch1-1", repository="core"),
            SyncPackage(name="pacman", version="6.1.0-3", repository="core"),
        ]
    )


@pytest.fixture
def registry() -> FakeRegistry:
    """AUR with one pending upgrade."""
    return FakeRegistry(
        [
            RegistryPackage(name="paru", version="2.0.3-1"),
            RegistryPackage(name="yay", version="12.3.5-1"),
        ]
    )
