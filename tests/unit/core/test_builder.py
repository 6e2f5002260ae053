"""Unit tests for upgrade candidate construction."""

import logging

import pytest
from pacup.core.builder import build_upgrade, never_ignore
from pacup.models.upgrade import UpgradeSource


class TestBuildUpgrade:
    """Tests for build_upgrade."""

    def test_newer_version(self) -> None:
        """A newer remote version yields an upgrade."""
        upgrade = build_upgrade(
            "linux",
            "6.9.1-1",
            "6.9.3-1",
            source=UpgradeSource.REPO,
            repository="core",
            ignored=False,
        )

        assert upgrade is not None
        assert upgrade.name == "linux"
        assert upgrade.repository == "core"
        assert upgrade.local_version == "6.9.1-1"
        assert upgrade.remote_version == "6.9.3-1"

    def test_same_version(self) -> None:
        """Up-to-date packages yield nothing."""
        upgrade = build_upgrade(
            "linux",
            "6.9.1-1",
            "6.9.1-1",
            source=UpgradeSource.REPO,
            repository="core",
            ignored=False,
        )
        assert upgrade is None

    def test_older_remote(self) -> None:
        """Downgrades are never proposed."""
        upgrade = build_upgrade(
            "linux",
            "6.9.3-1",
            "6.9.1-1",
            source=UpgradeSource.REPO,
            repository="core",
            ignored=False,
        )
        assert upgrade is None

    def test_force(self) -> None:
        """force proposes the package even when versions match."""
        upgrade = build_upgrade(
            "paru",
            "2.0.1-1",
            "2.0.1-1",
            source=UpgradeSource.AUR,
            repository="aur",
            ignored=False,
            force=True,
        )
        assert upgrade is not None

    def test_ignored_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Ignored upgrades are suppressed with a warning."""
        with caplog.at_level(logging.WARNING, logger="pacup.core.builder"):
            upgrade = build_upgrade(
                "linux",
                "6.9.1-1",
                "6.9.3-1",
                source=UpgradeSource.REPO,
                repository="core",
                ignored=True,
            )

        assert upgrade is None
        assert "linux: ignoring package upgrade (6.9.1-1 => 6.9.3-1)" in caplog.text

    def test_ignored_up_to_date_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        """No warning when an ignored package has no upgrade anyway."""
        with caplog.at_level(logging.WARNING, logger="pacup.core.builder"):
            build_upgrade(
                "linux",
                "1.0-1",
                "1.0-1",
                source=UpgradeSource.REPO,
                repository="core",
                ignored=True,
            )
        assert caplog.text == ""

    def test_custom_comparator(self) -> None:
        """The comparator decides what counts as newer."""
        upgrade = build_upgrade(
            "foo",
            "2.0-1",
            "1.0-1",
            source=UpgradeSource.REPO,
            repository="extra",
            ignored=False,
            comparator=lambda left, right: -1,
        )
        assert upgrade is not None

    def test_never_ignore(self) -> None:
        """never_ignore lets everything through."""
        assert never_ignore("anything") is False
