"""Ignore list handling.

Packages matching pacman.conf's ``IgnorePkg`` or a configured pattern are
never proposed for upgrade.
"""

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_ignore_pkg(text: str) -> list[str]:
    """Extract ``IgnorePkg`` patterns from pacman.conf content.

    Only the ``[options]`` section is read; the directive may repeat and
    lists space-separated globs.
    """
    patterns: list[str] = []
    section = ""

    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1].strip()
            continue
        if section != "options":
            continue
        key, sep, value = line.partition("=")
        if sep and key.strip() == "IgnorePkg":
            patterns.extend(value.split())

    return patterns


class IgnoreList:
    """Predicate telling whether a package's upgrades are suppressed.

    Instances are read-only after construction and safe to share between
    threads.

    Example:
        >>> ignore = IgnoreList(["linux*", "nvidia"])
        >>> ignore("linux-lts")
        True
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        patterns = list(patterns)
        self._exact: frozenset[str] = frozenset(p for p in patterns if not _is_glob(p))
        self._globs: tuple[str, ...] = tuple(p for p in patterns if _is_glob(p))

    @classmethod
    def from_pacman_conf(cls, path: Path, extra: Iterable[str] = ()) -> "IgnoreList":
        """Build the list from pacman.conf plus extra patterns.

        An unreadable pacman.conf is logged and treated as empty.
        """
        patterns = list(extra)
        try:
            patterns.extend(parse_ignore_pkg(path.read_text(encoding="utf-8")))
        except FileNotFoundError:
            logger.debug("No pacman.conf at %s", path)
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
        return cls(patterns)

    @property
    def patterns(self) -> list[str]:
        """Return all patterns, sorted."""
        return sorted(self._exact | set(self._globs))

    def __call__(self, name: str) -> bool:
        if name in self._exact:
            return True
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self._globs)

    def __len__(self) -> int:
        return len(self._exact) + len(self._globs)


def _is_glob(pattern: str) -> bool:
    return any(ch in pattern for ch in "*?[")
