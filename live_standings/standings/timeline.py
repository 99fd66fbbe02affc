"""
Standings Timeline Builder

This module turns a tournament's team records into ranked timelines:
- Cumulative standings: one leaderboard per game, ranked on running totals,
  with each team's rank change against the previous game
- Match placements: one ranking per game, using that game's score alone

All functions are pure. Input records are never modified and every snapshot
holds fresh entry objects.

Usage:
    from live_standings.standings.timeline import (
        build_cumulative_standings_timeline,
        build_match_placements_timeline,
    )
"""

from dataclasses import replace
from typing import Mapping, Optional, Sequence, TypeVar

from live_standings.standings.models import (
    CumulativeStandingEntry,
    CumulativeTotals,
    MatchDetail,
    MatchPlacementEntry,
    MatchRankingSnapshots,
    MatchPlacementsSnapshot,
    MatchPlacementsTimeline,
    StandingsSnapshot,
    StandingsTimeline,
    TeamKey,
    TeamResult,
)
from live_standings.standings.ordering import CUMULATIVE_ORDER, MATCH_ORDER, sort_by_keys
from live_standings.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

S = TypeVar("S")


def get_match_count(teams: Sequence[TeamResult]) -> int:
    """Number of games in the tournament: the longest `detail_scores` of any team."""
    return max((team.match_count for team in teams), default=0)


def _build_totals(
    played: int,
    score: float,
    placement_score: float,
    elimination_score: float,
    eliminations: float,
    placement_sum: float,
) -> CumulativeTotals:
    if played == 0:
        return CumulativeTotals()
    return CumulativeTotals(
        matches_played=played,
        total_score=score,
        placement_score=placement_score,
        elimination_score=elimination_score,
        eliminations=eliminations,
        avg_placement=placement_sum / played,
        avg_eliminations=eliminations / played,
    )


def cumulative_totals(team: TeamResult, match_index: int) -> CumulativeTotals:
    """
    Aggregate a team's results over games 0..match_index inclusive.

    Games the team did not play contribute nothing; averages are taken over
    the games actually played. A team with no games yet gets all-zero totals.
    """
    upper_bound = min(team.match_count, match_index + 1)
    played = [d for d in team.detail_scores[:max(upper_bound, 0)] if d is not None]

    return _build_totals(
        len(played),
        sum(d.score for d in played),
        sum(d.placement_score for d in played),
        sum(d.elimination_score for d in played),
        sum(d.eliminations for d in played),
        sum(d.placement for d in played),
    )


def running_totals(team: TeamResult, total_matches: int) -> list[CumulativeTotals]:
    """
    Cumulative totals for every game index in one pass.

    Equivalent to `[cumulative_totals(team, i) for i in range(total_matches)]`.
    """
    played = 0
    score = placement_score = elimination_score = eliminations = placement_sum = 0
    history = []

    for match_index in range(total_matches):
        detail = team.detail_at(match_index)
        if detail is not None:
            played += 1
            score += detail.score
            placement_score += detail.placement_score
            elimination_score += detail.elimination_score
            eliminations += detail.eliminations
            placement_sum += detail.placement
        history.append(
            _build_totals(played, score, placement_score, elimination_score, eliminations, placement_sum)
        )

    return history


def advance_standings(
    rows: Sequence[tuple[TeamResult, CumulativeTotals]],
    match_index: int,
    previous_placements: Mapping[TeamKey, int],
) -> tuple[StandingsSnapshot, dict[TeamKey, int]]:
    """
    Rank one game's cumulative totals and compute rank changes.

    One step of the standings fold: the previous game's placements go in,
    this game's snapshot and placements come out.

    Args:
        rows: (team, totals as of this game) for every team
        match_index: 0-based game index; rank changes are 0 for game 0
        previous_placements: team key -> placement in the previous snapshot

    Returns:
        Tuple of (ranked snapshot, team key -> placement for this game)
    """
    provisional = [
        CumulativeStandingEntry(
            team_key=team.key,
            placement=0,
            rank_change=0,
            totals=totals,
            team=team,
        )
        for team, totals in rows
    ]

    snapshot = []
    placements = {}
    for position, entry in enumerate(sort_by_keys(provisional, CUMULATIVE_ORDER), start=1):
        previous = previous_placements.get(entry.team_key)
        rank_change = previous - position if previous is not None and match_index > 0 else 0
        snapshot.append(replace(entry, placement=position, rank_change=rank_change))
        placements[entry.team_key] = position

    return snapshot, placements


def build_cumulative_standings_timeline(teams: Sequence[TeamResult]) -> StandingsTimeline:
    """
    Build the running leaderboard for every game of the tournament.

    Args:
        teams: Normalized team records

    Returns:
        One ranked snapshot per game index, in game order (empty if there are
        no teams or no games)
    """
    total_matches = get_match_count(teams)
    if total_matches == 0:
        return []

    history = [running_totals(team, total_matches) for team in teams]

    timeline = []
    placements: dict[TeamKey, int] = {}
    for match_index in range(total_matches):
        rows = [(team, totals[match_index]) for team, totals in zip(teams, history)]
        snapshot, placements = advance_standings(rows, match_index, placements)
        timeline.append(snapshot)

    logger.debug(f"Built cumulative standings: {total_matches} games, {len(teams)} teams")
    return timeline


def rank_match(teams: Sequence[TeamResult], match_index: int) -> MatchPlacementsSnapshot:
    """Rank the teams that played game `match_index` on that game's result alone."""
    entries = []
    for team in teams:
        detail: Optional[MatchDetail] = team.detail_at(match_index)
        if detail is None:
            continue
        entries.append(
            MatchPlacementEntry(
                team_key=team.key,
                match_index=match_index,
                rank=0,
                detail=detail,
                team=team,
            )
        )

    return [
        replace(entry, rank=position)
        for position, entry in enumerate(sort_by_keys(entries, MATCH_ORDER), start=1)
    ]


def build_match_placements_timeline(teams: Sequence[TeamResult]) -> MatchPlacementsTimeline:
    """
    Build the per-game ranking for every game of the tournament.

    Teams with no result for a game are left out of that game's snapshot.
    """
    total_matches = get_match_count(teams)
    if total_matches == 0:
        return []

    timeline = [rank_match(teams, match_index) for match_index in range(total_matches)]

    logger.debug(f"Built match placements: {total_matches} games, {len(teams)} teams")
    return timeline


def timeline_entry(timeline: Sequence[S], index: Optional[int]) -> Optional[S]:
    """Return `timeline[index]`, or None when `index` is out of range (no negative indexing)."""
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    if 0 <= index < len(timeline):
        return timeline[index]
    return None


def build_match_ranking_snapshots(teams: Sequence[TeamResult], match_index: int) -> MatchRankingSnapshots:
    """
    Snapshots on both sides of a game boundary.

    Returns the cumulative standings and match placements for `match_index`
    and `match_index + 1`. Out-of-range slots are None.
    """
    overall_timeline = build_cumulative_standings_timeline(teams)
    match_timeline = build_match_placements_timeline(teams)
    valid_index = isinstance(match_index, int) and not isinstance(match_index, bool)
    next_index = match_index + 1 if valid_index else None

    return MatchRankingSnapshots(
        overall_standings=(
            timeline_entry(overall_timeline, match_index),
            timeline_entry(overall_timeline, next_index),
        ),
        match_placements=(
            timeline_entry(match_timeline, match_index),
            timeline_entry(match_timeline, next_index),
        ),
    )
