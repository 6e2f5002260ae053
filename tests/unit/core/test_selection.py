"""Unit tests for interactive upgrade selection."""

import pytest
from pacup.core.selection import (
    Exclusions,
    ListKind,
    SelectionToken,
    compute_exclusions,
    display_to_index,
    parse_selection,
    parse_token,
    select_targets,
)


class TestParseToken:
    """Tests for parse_token."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("3", SelectionToken(negated=False, low=3, high=3)),
            ("2-5", SelectionToken(negated=False, low=2, high=5)),
            ("^4", SelectionToken(negated=True, low=4, high=4)),
            ("^1-2", SelectionToken(negated=True, low=1, high=2)),
            ("5-2", SelectionToken(negated=False, low=2, high=5)),
        ],
    )
    def test_valid(self, word: str, expected: SelectionToken) -> None:
        """Numbers, ranges and their negated forms parse."""
        assert parse_token(word) == expected

    @pytest.mark.parametrize("word", ["abc", "-3", "3-", "^", "1,2", "^^1", "1-2-3", ""])
    def test_invalid(self, word: str) -> None:
        """Anything else is not a token."""
        assert parse_token(word) is None

    def test_parse_selection_drops_garbage(self) -> None:
        """Non-token words are silently discarded."""
        tokens = parse_selection("1 foo ^3  2-3 bar")
        assert [(t.negated, t.low, t.high) for t in tokens] == [
            (False, 1, 1),
            (True, 3, 3),
            (False, 2, 3),
        ]


class TestDisplayToIndex:
    """Tests for display_to_index."""

    def test_mapping(self) -> None:
        """1..R address the AUR list, R+1..R+L the repo list, both reversed."""
        # R=3 AUR upgrades, L=2 repository upgrades
        assert display_to_index(1, 3, 2) == (ListKind.AUR, 2)
        assert display_to_index(3, 3, 2) == (ListKind.AUR, 0)
        assert display_to_index(4, 3, 2) == (ListKind.REPO, 1)
        assert display_to_index(5, 3, 2) == (ListKind.REPO, 0)

    @pytest.mark.parametrize("number", [0, 6, 100])
    def test_out_of_range(self, number: int) -> None:
        """Numbers outside 1..R+L designate nothing."""
        assert display_to_index(number, 3, 2) is None


class TestComputeExclusions:
    """Tests for compute_exclusions."""

    def test_empty_input(self) -> None:
        """No input excludes nothing."""
        assert compute_exclusions("", 3, 2) == Exclusions()

    def test_plain_numbers(self) -> None:
        """Plain tokens exclude their packages."""
        exclusions = compute_exclusions("1 4", 3, 2)
        assert exclusions.aur == frozenset({2})
        assert exclusions.repo == frozenset({1})

    def test_range_across_lists(self) -> None:
        """A range may span both lists."""
        exclusions = compute_exclusions("3-4", 3, 2)
        assert exclusions.aur == frozenset({0})
        assert exclusions.repo == frozenset({1})

    def test_only_protect_flips_mode(self) -> None:
        """Only ^ tokens exclude everything except the protected packages."""
        exclusions = compute_exclusions("^2", 3, 0)
        assert exclusions.aur == frozenset({0, 2})
        assert exclusions.repo == frozenset()

    def test_protect_overrides_exclusion(self) -> None:
        """A protected number is removed from the exclusions."""
        exclusions = compute_exclusions("1 ^3", 4, 0)
        assert exclusions.aur == frozenset({3})

    def test_protect_within_excluded_range(self) -> None:
        """^ carves a hole into a plain range."""
        exclusions = compute_exclusions("1-5 ^4", 3, 2)
        assert exclusions.aur == frozenset({0, 1, 2})
        assert exclusions.repo == frozenset({0})

    def test_garbage_and_out_of_range(self) -> None:
        """Garbage and out-of-range numbers are ignored."""
        assert compute_exclusions("foo 0 99 -", 3, 2) == Exclusions()

    def test_huge_range_clamped(self) -> None:
        """Ranges beyond the listing are clamped."""
        exclusions = compute_exclusions("2-999999999", 2, 1)
        assert exclusions.aur == frozenset({0})
        assert exclusions.repo == frozenset({0})


class TestSelectTargets:
    """Tests for select_targets."""

    def test_keeps_order(self) -> None:
        """Remaining items keep their list order."""
        assert select_targets(["a", "b", "c", "d"], frozenset({1, 3})) == ["a", "c"]

    def test_nothing_excluded(self) -> None:
        """Without exclusions every item is a target."""
        assert select_targets(["a", "b"], frozenset()) == ["a", "b"]
