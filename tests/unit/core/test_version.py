"""Unit tests for version comparison and parsing."""

import pytest
from pacup.core.version import (
    CompleteVersion,
    InvalidVersionError,
    is_newer,
    parse_complete_version,
    vercmp,
)


class TestVercmp:
    """Tests for vercmp ordering."""

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            ("1.0-1", "1.0-1", 0),
            ("1.0-1", "1.1-1", -1),
            ("1.10-1", "1.9-1", 1),
            ("1.0-1", "1.0-2", -1),
            ("1:1.0-1", "2.0-1", 1),
            ("1.0", "1.0-5", 0),
            ("1.0alpha-1", "1.0-1", -1),
            ("1.0.1-1", "1.0-1", 1),
            ("1.0a-1", "1.0b-1", -1),
            ("1.0-1", "1.0a-1", 1),
            ("1.0", "1.0.a", -1),
            ("1.0.a", "1.0", 1),
            ("1.0-1", "1.0..1-1", -1),
        ],
    )
    def test_ordering(self, left: str, right: str, expected: int) -> None:
        """vercmp follows pacman's ordering rules."""
        assert vercmp(left, right) == expected

    def test_antisymmetric(self) -> None:
        """Swapping operands flips the sign."""
        assert vercmp("2.0-1", "1.0-1") == -vercmp("1.0-1", "2.0-1")


class TestIsNewer:
    """Tests for is_newer."""

    def test_newer(self) -> None:
        """A higher available version is newer."""
        assert is_newer("1.0-1", "1.0-2") is True

    def test_equal_or_older(self) -> None:
        """Equal and older versions are not upgrades."""
        assert is_newer("1.0-1", "1.0-1") is False
        assert is_newer("2.0-1", "1.0-1") is False

    def test_vcs_suffix_is_newer(self) -> None:
        """A revision suffix after a separator beats the bare release."""
        assert is_newer("0.10.0-1", "0.10.0.r120.g7f1c0a9-1") is True
        assert is_newer("0.10.0.r120.g7f1c0a9-1", "0.10.0-1") is False

    def test_custom_comparator(self) -> None:
        """A custom comparator replaces vercmp."""
        assert is_newer("b", "a", comparator=lambda left, right: -1) is True


class TestParseCompleteVersion:
    """Tests for parse_complete_version."""

    def test_plain(self) -> None:
        """Version without epoch."""
        assert parse_complete_version("6.9.1.arch1-1") == CompleteVersion("", "6.9.1.arch1", "1")

    def test_epoch(self) -> None:
        """Epoch is kept in full_version."""
        version = parse_complete_version("2:1.4-3")
        assert version.epoch == "2"
        assert version.full_version == "2:1.4"
        assert version.pkgrel == "3"

    def test_dotted_pkgrel(self) -> None:
        """Rebuild releases like 1.1 are valid."""
        assert parse_complete_version("1.0-1.1").pkgrel == "1.1"

    @pytest.mark.parametrize(
        "value",
        ["1.0", "x:1.0-1", "-1", "1.0-a", "1.0 beta-1"],
    )
    def test_invalid(self, value: str) -> None:
        """Incomplete or malformed versions raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError):
            parse_complete_version(value)
