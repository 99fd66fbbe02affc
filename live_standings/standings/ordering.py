"""
Tie-Break Ordering

Ranking policies are written as ordered lists of SortKey entries and applied
lexicographically by a single comparator. Each chain ends with the team name,
so two entries only compare equal when they belong to identically named teams.
"""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SortKey:
    """One step of a tie-break chain: a value extractor and its direction."""

    extract: Callable[[Any], Any]
    descending: bool = False


def team_name_key(name: str) -> tuple[str, str]:
    """Case-insensitive alphabetical key, with the exact name as a final tie-break."""
    return (name.casefold(), name)


def compare_by_keys(a: T, b: T, keys: Sequence[SortKey]) -> int:
    """
    Compare two items under a tie-break chain.

    Returns:
        Negative if `a` ranks ahead of `b`, positive if behind, 0 if every key ties
    """
    for key in keys:
        value_a = key.extract(a)
        value_b = key.extract(b)
        if value_a == value_b:
            continue
        ahead = value_a > value_b if key.descending else value_a < value_b
        return -1 if ahead else 1
    return 0


def sort_by_keys(items: Iterable[T], keys: Sequence[SortKey]) -> list[T]:
    """Return a new list ordered best-first by `keys` (stable for full ties)."""
    return sorted(items, key=cmp_to_key(lambda a, b: compare_by_keys(a, b, keys)))


# Running leaderboard: total score, elimination score, final tournament placement, name
CUMULATIVE_ORDER: tuple[SortKey, ...] = (
    SortKey(lambda e: e.totals.total_score, descending=True),
    SortKey(lambda e: e.totals.elimination_score, descending=True),
    SortKey(lambda e: e.team.placement),
    SortKey(lambda e: team_name_key(e.team.team_name)),
)

# Single match: match score, elimination score, in-game placement, name
MATCH_ORDER: tuple[SortKey, ...] = (
    SortKey(lambda e: e.detail.score, descending=True),
    SortKey(lambda e: e.detail.elimination_score, descending=True),
    SortKey(lambda e: e.detail.placement),
    SortKey(lambda e: team_name_key(e.team.team_name)),
)
