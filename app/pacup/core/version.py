"""Package version comparison and parsing.

pacman versions have the form ``[epoch:]pkgver[-pkgrel]``. Ordering follows
pacman's vercmp: epochs compare numerically, then pkgver and pkgrel are
compared segment by segment, where a segment is a run of digits or a run
of letters. The upgrade core only ever sees the ``VersionComparator``
protocol, so callers can plug in a different ordering.
"""

import re
from dataclasses import dataclass
from typing import Protocol


class VersionComparator(Protocol):
    """Three-way ordering of two version strings."""

    def __call__(self, left: str, right: str) -> int:
        """Return <0 if left is older, 0 if equal, >0 if left is newer."""
        ...


class InvalidVersionError(ValueError):
    """Raised when a version string cannot be parsed for display."""


_SEPARATOR_RE = re.compile(r"[^0-9A-Za-z]*")
_DIGITS_RE = re.compile(r"[0-9]+")
_ALPHA_RE = re.compile(r"[A-Za-z]+")
# Characters makepkg accepts in pkgver
_PKGVER_RE = re.compile(r"^[A-Za-z0-9._+~]+$")
_PKGREL_RE = re.compile(r"^\d+(\.\d+)?$")


def _split_evr(version: str) -> tuple[str, str, str | None]:
    """Split ``[epoch:]pkgver[-pkgrel]`` into its parts.

    A missing epoch is returned as "0".
    """
    epoch = "0"
    rest = version
    head, sep, tail = version.partition(":")
    if sep and head.isdigit():
        epoch, rest = head, tail
    pkgver, sep, pkgrel = rest.rpartition("-")
    if not sep:
        return epoch, rest, None
    return epoch, pkgver, pkgrel


def _compare_segments(left: str, right: str) -> int:
    """Compare two version fragments the way rpm/pacman do.

    Both strings are walked together. Separator runs are skipped (a longer
    run wins), then one digit or letter segment is taken from each side.

    Returns:
        -1 if left < right, 0 if equal, 1 if left > right.
    """
    if left == right:
        return 0

    li = ri = 0
    while li < len(left) and ri < len(right):
        lstart = _SEPARATOR_RE.match(left, li).end()
        rstart = _SEPARATOR_RE.match(right, ri).end()
        if lstart >= len(left) or rstart >= len(right):
            li, ri = lstart, rstart
            break
        if lstart - li != rstart - ri:
            return -1 if lstart - li < rstart - ri else 1

        numeric = left[lstart].isdigit()
        pattern = _DIGITS_RE if numeric else _ALPHA_RE
        lmatch = pattern.match(left, lstart)
        rmatch = pattern.match(right, rstart)
        if lmatch is None or rmatch is None:
            # Numeric segments are newer than alphabetic ones
            return 1 if numeric else -1

        ls, rs = lmatch.group(), rmatch.group()
        if numeric:
            ln, rn = int(ls), int(rs)
            if ln != rn:
                return -1 if ln < rn else 1
        elif ls != rs:
            return -1 if ls < rs else 1
        li, ri = lmatch.end(), rmatch.end()

    left_rest, right_rest = left[li:], right[ri:]
    if not left_rest and not right_rest:
        return 0

    # A bare letter suffix marks a pre-release (1.0alpha < 1.0), while a
    # segment after a separator makes the longer version newer (1.0 < 1.0.a)
    if (not left_rest and not right_rest[0].isalpha()) or left_rest[:1].isalpha():
        return -1
    return 1


def vercmp(left: str, right: str) -> int:
    """Compare two full package versions.

    The pkgrel is only taken into account when both sides carry one.

    Returns:
        -1 if left is older, 0 if equal, 1 if left is newer.
    """
    if left == right:
        return 0

    left_epoch, left_ver, left_rel = _split_evr(left)
    right_epoch, right_ver, right_rel = _split_evr(right)

    result = _compare_segments(left_epoch, right_epoch)
    if result != 0:
        return result

    result = _compare_segments(left_ver, right_ver)
    if result != 0:
        return result

    if left_rel is not None and right_rel is not None:
        return _compare_segments(left_rel, right_rel)
    return 0


def is_newer(installed: str, available: str, comparator: VersionComparator = vercmp) -> bool:
    """Check if ``available`` is strictly newer than ``installed``."""
    return comparator(installed, available) < 0


@dataclass(frozen=True, slots=True)
class CompleteVersion:
    """A version split into the parts shown in the upgrade listing.

    Attributes:
        epoch: Epoch, "" when the version has none.
        version: The pkgver part.
        pkgrel: The release part.
    """

    epoch: str
    version: str
    pkgrel: str

    @property
    def full_version(self) -> str:
        """Return the version with its epoch, without pkgrel."""
        if self.epoch:
            return f"{self.epoch}:{self.version}"
        return self.version


def parse_complete_version(value: str) -> CompleteVersion:
    """Parse a complete ``[epoch:]pkgver-pkgrel`` version for display.

    Args:
        value: The version string.

    Returns:
        The parsed CompleteVersion.

    Raises:
        InvalidVersionError: If the string is not a complete pacman version.
    """
    epoch = ""
    rest = value
    if ":" in value:
        epoch, _, rest = value.partition(":")
        if not epoch.isdigit():
            raise InvalidVersionError(f"invalid epoch in version {value!r}")

    pkgver, sep, pkgrel = rest.rpartition("-")
    if not sep:
        raise InvalidVersionError(f"missing pkgrel in version {value!r}")
    if not pkgver or not _PKGVER_RE.match(pkgver):
        raise InvalidVersionError(f"invalid pkgver in version {value!r}")
    if not _PKGREL_RE.match(pkgrel):
        raise InvalidVersionError(f"invalid pkgrel in version {value!r}")

    return CompleteVersion(epoch=epoch, version=pkgver, pkgrel=pkgrel)
