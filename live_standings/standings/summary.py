"""
Standings Summaries

Resolves a requested game into a display-ready summary: heading label,
paged standings and team totals. Unknown or out-of-range game numbers give
an explicit "unknown" summary instead of an error.

Usage:
    from live_standings.standings.summary import create_match_standings_summary
    summary = create_match_standings_summary(results, "3")
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence, TypeVar

from live_standings.config import (
    DEFAULT_MATCH_HEADING_LABEL,
    DEFAULT_STANDINGS_CHUNK_SIZE,
    FALLBACK_TOTAL_MATCHES_LABEL,
    MATCH_HEADING_TEMPLATE,
    UNKNOWN_MATCH_DISPLAY,
)
from live_standings.standings.models import (
    CumulativeStandingEntry,
    MatchPlacementEntry,
    MatchPlacementsTimeline,
    StandingsTimeline,
    TeamResult,
)
from live_standings.standings.timeline import (
    build_cumulative_standings_timeline,
    build_match_placements_timeline,
    timeline_entry,
)
from live_standings.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

T = TypeVar("T")

_MATCH_NUMBER_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class StandingsSummary:
    """Overall leaderboard as of one game (the latest by default)."""

    heading_label: str = DEFAULT_MATCH_HEADING_LABEL
    match_display_number: str = UNKNOWN_MATCH_DISPLAY
    match_index: Optional[int] = None
    total_matches: int = 0
    total_matches_label: str = FALLBACK_TOTAL_MATCHES_LABEL
    total_teams: int = 0
    standings: list[CumulativeStandingEntry] = field(default_factory=list)
    chunked_standings: list[list[CumulativeStandingEntry]] = field(default_factory=list)


@dataclass(frozen=True)
class MatchStandingsSummary:
    """Ranking of a single game."""

    heading_label: str = DEFAULT_MATCH_HEADING_LABEL
    match_display_number: str = UNKNOWN_MATCH_DISPLAY
    match_index: Optional[int] = None
    total_teams: int = 0
    match_standings: list[MatchPlacementEntry] = field(default_factory=list)
    chunked_standings: list[list[MatchPlacementEntry]] = field(default_factory=list)


def chunk_array(items: Sequence[T], size: int = DEFAULT_STANDINGS_CHUNK_SIZE) -> list[list[T]]:
    """
    Split items into consecutive chunks of `size`, keeping order.

    The last chunk holds the remainder. An empty input gives no chunks.

    Raises:
        ValueError: If size is not a positive integer
    """
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise ValueError(f"Chunk size must be a positive integer, got {size!r}")
    return [list(items[start:start + size]) for start in range(0, len(items), size)]


def resolve_match_number(value) -> Optional[int]:
    """
    Parse a human-facing (1-based) game number.

    Accepts positive ints and strings of ASCII digits. Anything else
    ("0", "abc", "1.5", -1, None, booleans) resolves to None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if not _MATCH_NUMBER_RE.fullmatch(text):
            return None
        number = int(text)
        return number if number > 0 else None
    return None


def format_match_heading(match_number: Optional[int]) -> str:
    if match_number is None:
        return DEFAULT_MATCH_HEADING_LABEL
    return MATCH_HEADING_TEMPLATE.format(number=match_number)


def _resolve_index(timeline: Sequence, match_param) -> Optional[int]:
    """Timeline slot for a requested game number, None when it does not exist."""
    match_number = resolve_match_number(match_param)
    if match_number is None:
        return None
    index = match_number - 1
    return index if timeline_entry(timeline, index) is not None else None


def summarize_standings_timeline(
    timeline: StandingsTimeline,
    match_param=None,
    chunk_size: int = DEFAULT_STANDINGS_CHUNK_SIZE,
) -> StandingsSummary:
    """
    Summarize a cumulative standings timeline.

    Args:
        timeline: Output of build_cumulative_standings_timeline
        match_param: 1-based game number to show; None shows the latest game
        chunk_size: Rows per chunk

    Returns:
        StandingsSummary (the "unknown" summary if the game does not exist)
    """
    total_matches = len(timeline)
    total_matches_label = str(total_matches) if total_matches else FALLBACK_TOTAL_MATCHES_LABEL

    if match_param is None:
        index = total_matches - 1 if total_matches else None
    else:
        index = _resolve_index(timeline, match_param)

    if index is None:
        if match_param is not None:
            logger.debug(f"Unknown game requested for overall standings: {match_param!r}")
        return StandingsSummary(total_matches=total_matches, total_matches_label=total_matches_label)

    standings = list(timeline[index])
    return StandingsSummary(
        heading_label=format_match_heading(index + 1),
        match_display_number=str(index + 1),
        match_index=index,
        total_matches=total_matches,
        total_matches_label=total_matches_label,
        total_teams=len(standings),
        standings=standings,
        chunked_standings=chunk_array(standings, chunk_size),
    )


def summarize_match_timeline(
    timeline: MatchPlacementsTimeline,
    match_param,
    chunk_size: int = DEFAULT_STANDINGS_CHUNK_SIZE,
) -> MatchStandingsSummary:
    """
    Summarize one game of a match placements timeline.

    Args:
        timeline: Output of build_match_placements_timeline
        match_param: 1-based game number (int or digit string)
        chunk_size: Rows per chunk

    Returns:
        MatchStandingsSummary (the "unknown" summary if the game does not exist)
    """
    index = _resolve_index(timeline, match_param)
    if index is None:
        logger.debug(f"Unknown game requested: {match_param!r}")
        return MatchStandingsSummary()

    standings = list(timeline[index])
    return MatchStandingsSummary(
        heading_label=format_match_heading(index + 1),
        match_display_number=str(index + 1),
        match_index=index,
        total_teams=len(standings),
        match_standings=standings,
        chunked_standings=chunk_array(standings, chunk_size),
    )


def create_standings_summary(
    results: Sequence[TeamResult],
    match_param=None,
    chunk_size: int = DEFAULT_STANDINGS_CHUNK_SIZE,
) -> StandingsSummary:
    """Build the cumulative timeline for `results` and summarize it."""
    return summarize_standings_timeline(
        build_cumulative_standings_timeline(results), match_param, chunk_size
    )


def create_match_standings_summary(
    results: Sequence[TeamResult],
    match_param,
    chunk_size: int = DEFAULT_STANDINGS_CHUNK_SIZE,
) -> MatchStandingsSummary:
    """Build the match placements timeline for `results` and summarize one game."""
    return summarize_match_timeline(
        build_match_placements_timeline(results), match_param, chunk_size
    )
