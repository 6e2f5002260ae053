"""Unit tests for package and VCS tracking models."""

import pytest
from pacup.models.package import LocalPackage, RegistryPackage
from pacup.models.vcs import TrackedPackage


class TestLocalPackage:
    """Tests for LocalPackage."""

    def test_defaults(self) -> None:
        """Build date and foreign flag have defaults."""
        pkg = LocalPackage(name="linux", version="6.9.1-1")
        assert pkg.build_date == 0
        assert pkg.foreign is False

    def test_empty_name_rejected(self) -> None:
        """LocalPackage requires a name."""
        with pytest.raises(ValueError, match="cannot be empty"):
            LocalPackage(name="", version="1.0-1")

    def test_frozen(self) -> None:
        """Packages are immutable."""
        pkg = RegistryPackage(name="paru", version="2.0.3-1")
        with pytest.raises(AttributeError):
            pkg.version = "3.0-1"  # type: ignore[misc]


class TestTrackedPackage:
    """Tests for TrackedPackage."""

    def test_short_sha(self) -> None:
        """short_sha keeps the first six characters."""
        entry = TrackedPackage(name="foo-git", url="https://x/foo.git", sha="7f1c0a9e44")
        assert entry.short_sha == "7f1c0a"

    def test_requires_url(self) -> None:
        """A tracked package needs a source URL."""
        with pytest.raises(ValueError, match="needs a source URL"):
            TrackedPackage(name="foo-git", url="")

    def test_from_dict_defaults(self) -> None:
        """Missing branch and sha fall back to defaults."""
        entry = TrackedPackage.from_dict("foo-git", {"url": "https://x/foo.git"})
        assert entry.branch == "HEAD"
        assert entry.sha == ""

    def test_from_dict_missing_url(self) -> None:
        """Entries without a URL raise KeyError."""
        with pytest.raises(KeyError):
            TrackedPackage.from_dict("foo-git", {"sha": "abc"})

    def test_dict_round_trip(self) -> None:
        """to_dict output is accepted by from_dict."""
        entry = TrackedPackage(name="foo-git", url="u", branch="main", sha="abc")
        assert TrackedPackage.from_dict("foo-git", entry.to_dict()) == entry
