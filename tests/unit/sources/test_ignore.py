"""Unit tests for ignore list handling."""

from pathlib import Path

from pacup.sources.ignore import IgnoreList, parse_ignore_pkg

PACMAN_CONF = """
[options]
HoldPkg     = pacman glibc
IgnorePkg   = linux nvidia*  # pinned
#IgnorePkg  = commented
IgnorePkg = mesa

[core]
IgnorePkg = not-an-option
Include = /etc/pacman.d/mirrorlist
"""


class TestParseIgnorePkg:
    """Tests for parse_ignore_pkg."""

    def test_options_section_only(self) -> None:
        """IgnorePkg is collected from [options] across repeated lines."""
        assert parse_ignore_pkg(PACMAN_CONF) == ["linux", "nvidia*", "mesa"]

    def test_empty(self) -> None:
        """No IgnorePkg means no patterns."""
        assert parse_ignore_pkg("[options]\nColor\n") == []


class TestIgnoreList:
    """Tests for IgnoreList."""

    def test_exact_and_glob(self) -> None:
        """Exact names and globs both match."""
        ignore = IgnoreList(["linux", "nvidia*"])

        assert ignore("linux") is True
        assert ignore("nvidia-utils") is True
        assert ignore("linux-lts") is False
        assert len(ignore) == 2

    def test_generator_patterns(self) -> None:
        """Patterns from a one-shot iterator keep both exact names and globs."""
        ignore = IgnoreList(p for p in ["linux", "nvidia*"])

        assert ignore("linux") is True
        assert ignore("nvidia-dkms") is True
        assert len(ignore) == 2

    def test_case_sensitive(self) -> None:
        """Matching is case-sensitive like pacman."""
        assert IgnoreList(["Linux*"])("linux") is False

    def test_from_pacman_conf(self, tmp_path: Path) -> None:
        """Patterns from pacman.conf and extra patterns are combined."""
        conf = tmp_path / "pacman.conf"
        conf.write_text(PACMAN_CONF)

        ignore = IgnoreList.from_pacman_conf(conf, extra=["zoom"])

        assert ignore.patterns == ["linux", "mesa", "nvidia*", "zoom"]

    def test_missing_pacman_conf(self, tmp_path: Path) -> None:
        """A missing pacman.conf leaves only the extra patterns."""
        ignore = IgnoreList.from_pacman_conf(tmp_path / "missing.conf", extra=["zoom"])
        assert ignore.patterns == ["zoom"]
