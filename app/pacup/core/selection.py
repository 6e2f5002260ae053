"""Interactive upgrade selection.

The upgrade listing numbers every candidate: ``1..R`` address the AUR list
and ``R+1..R+L`` the repository list, each counted from its last element.
The operator answers with whitespace-separated tokens:

- ``N`` or ``N-M``: skip these upgrades.
- ``^N`` or ``^N-M``: keep these upgrades. Given on their own, without any
  plain token, they flip the default so that ONLY these are upgraded.

Anything else is ignored.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

T = TypeVar("T")

_TOKEN_RE = re.compile(r"^(\^)?(\d+)(?:-(\d+))?$")


class ListKind(Enum):
    """The two numbered upgrade lists."""

    AUR = "aur"
    REPO = "repo"


@dataclass(frozen=True, slots=True)
class SelectionToken:
    """One parsed word of operator input.

    Attributes:
        negated: True for ``^`` tokens.
        low: First display number of the range.
        high: Last display number of the range (equal to ``low`` for one number).
    """

    negated: bool
    low: int
    high: int


@dataclass(frozen=True, slots=True)
class Exclusions:
    """Internal indices to leave out of the upgrade, per list.

    Attributes:
        aur: Excluded indices into the AUR list.
        repo: Excluded indices into the repository list.
    """

    aur: frozenset[int] = frozenset()
    repo: frozenset[int] = frozenset()


def parse_token(word: str) -> SelectionToken | None:
    """Parse one word of operator input.

    Reversed ranges (``5-2``) cover the same numbers as ``2-5``.

    Returns:
        The token, or None if the word is not a selection token.
    """
    match = _TOKEN_RE.match(word)
    if match is None:
        return None

    negated = match.group(1) is not None
    low = int(match.group(2))
    high = int(match.group(3)) if match.group(3) is not None else low
    if high < low:
        low, high = high, low
    return SelectionToken(negated=negated, low=low, high=high)


def parse_selection(line: str) -> list[SelectionToken]:
    """Parse a whole input line, dropping words that are not tokens."""
    tokens: list[SelectionToken] = []
    for word in line.split():
        token = parse_token(word)
        if token is not None:
            tokens.append(token)
    return tokens


def display_to_index(
    number: int,
    aur_count: int,
    repo_count: int,
) -> tuple[ListKind, int] | None:
    """Map a display number to the list and internal index it designates.

    Display numbers ``1..aur_count`` run backwards over the AUR list, the
    following ``repo_count`` numbers backwards over the repository list.

    Args:
        number: Number typed by the operator.
        aur_count: Length of the AUR list.
        repo_count: Length of the repository list.

    Returns:
        (list, index) or None when the number is out of range.
    """
    total = aur_count + repo_count
    if number < 1 or number > total:
        return None
    if number <= aur_count:
        return ListKind.AUR, aur_count - number
    return ListKind.REPO, total - number


def compute_exclusions(line: str, aur_count: int, repo_count: int) -> Exclusions:
    """Turn operator input into the indices to skip.

    Args:
        line: Raw input line.
        aur_count: Length of the AUR list.
        repo_count: Length of the repository list.

    Returns:
        Exclusions for both lists.
    """
    excluded: dict[ListKind, set[int]] = {ListKind.AUR: set(), ListKind.REPO: set()}
    protected: dict[ListKind, set[int]] = {ListKind.AUR: set(), ListKind.REPO: set()}

    total = aur_count + repo_count
    for token in parse_selection(line):
        target = protected if token.negated else excluded
        # Clamp so a huge range does not iterate past the listing
        for number in range(max(token.low, 1), min(token.high, total) + 1):
            resolved = display_to_index(number, aur_count, repo_count)
            if resolved is None:
                continue
            kind, index = resolved
            target[kind].add(index)

    only_protect_tokens = not any(excluded.values()) and any(protected.values())
    if only_protect_tokens:
        excluded[ListKind.AUR] = set(range(aur_count))
        excluded[ListKind.REPO] = set(range(repo_count))

    return Exclusions(
        aur=frozenset(excluded[ListKind.AUR] - protected[ListKind.AUR]),
        repo=frozenset(excluded[ListKind.REPO] - protected[ListKind.REPO]),
    )


def select_targets(items: Sequence[T], excluded: frozenset[int]) -> list[T]:
    """Keep every item whose index is not excluded, in list order."""
    return [item for index, item in enumerate(items) if index not in excluded]
