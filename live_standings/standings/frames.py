"""
Tabular Standings Views

pandas views over standings snapshots and timelines, plus the small label
helpers shared by the dashboard and the CLI report.
"""

import pandas as pd

from live_standings.config import (
    MEMBERS_SEPARATOR,
    RANK_DOWN_SYMBOL,
    RANK_SAME_SYMBOL,
    RANK_UP_SYMBOL,
)
from live_standings.standings.models import (
    MatchPlacementsSnapshot,
    StandingsSnapshot,
    StandingsTimeline,
    TeamResult,
)

STANDINGS_COLUMNS = [
    'placement', 'team_name', 'members', 'rank_change', 'matches_played',
    'total_score', 'placement_score', 'elimination_score', 'eliminations',
    'avg_placement', 'avg_eliminations',
]

MATCH_COLUMNS = [
    'rank', 'team_name', 'members', 'score', 'placement_score',
    'elimination_score', 'eliminations', 'match_placement',
]

HISTORY_COLUMNS = [
    'match_number', 'team_key', 'team_label', 'team_name', 'player_name',
    'placement', 'rank_change', 'matches_played', 'total_score',
    'placement_score', 'elimination_score', 'eliminations',
    'avg_placement', 'avg_eliminations',
]


def members_label(team: TeamResult) -> str:
    """Team members joined for display, falling back to the player name for solo entries."""
    if team.members:
        return MEMBERS_SEPARATOR.join(team.members)
    return team.player_name


def format_rank_change(change: int) -> str:
    """Arrow-style rank change: ▲2, ▼1, or - when unchanged."""
    if change > 0:
        return f"{RANK_UP_SYMBOL}{change}"
    if change < 0:
        return f"{RANK_DOWN_SYMBOL}{abs(change)}"
    return RANK_SAME_SYMBOL


def placement_range_label(total: int, limit: int, page: int = 0) -> str:
    """Placement range shown on one page, e.g. '1-10'; '0-0' when there are no rows."""
    start = page * limit
    if total <= 0 or start >= total:
        return "0-0"
    return f"{start + 1}-{min(start + limit, total)}"


def standings_to_frame(snapshot: StandingsSnapshot) -> pd.DataFrame:
    """One row per team of a cumulative standings snapshot, best first."""
    rows = [
        {
            'placement': entry.placement,
            'team_name': entry.team.team_name,
            'members': members_label(entry.team),
            'rank_change': entry.rank_change,
            'matches_played': entry.totals.matches_played,
            'total_score': entry.totals.total_score,
            'placement_score': entry.totals.placement_score,
            'elimination_score': entry.totals.elimination_score,
            'eliminations': entry.totals.eliminations,
            'avg_placement': round(entry.totals.avg_placement, 2),
            'avg_eliminations': round(entry.totals.avg_eliminations, 2),
        }
        for entry in snapshot
    ]
    return pd.DataFrame(rows, columns=STANDINGS_COLUMNS)


def match_placements_to_frame(snapshot: MatchPlacementsSnapshot) -> pd.DataFrame:
    """One row per team of a single game's ranking, best first."""
    rows = [
        {
            'rank': entry.rank,
            'team_name': entry.team.team_name,
            'members': members_label(entry.team),
            'score': entry.detail.score,
            'placement_score': entry.detail.placement_score,
            'elimination_score': entry.detail.elimination_score,
            'eliminations': entry.detail.eliminations,
            'match_placement': entry.detail.placement,
        }
        for entry in snapshot
    ]
    return pd.DataFrame(rows, columns=MATCH_COLUMNS)


def timeline_to_frame(timeline: StandingsTimeline) -> pd.DataFrame:
    """
    Long-format standings history, one row per team per game.

    Args:
        timeline: Output of build_cumulative_standings_timeline

    Returns:
        DataFrame with HISTORY_COLUMNS sorted by match_number then placement.
        `team_label` is the team name, or the full team key where two teams
        share a name.
    """
    rows = []
    for match_index, snapshot in enumerate(timeline):
        for entry in snapshot:
            rows.append({
                'match_number': match_index + 1,
                'team_key': str(entry.team_key),
                'team_label': entry.team.team_name,
                'team_name': entry.team.team_name,
                'player_name': entry.team.player_name,
                'placement': entry.placement,
                'rank_change': entry.rank_change,
                'matches_played': entry.totals.matches_played,
                'total_score': entry.totals.total_score,
                'placement_score': entry.totals.placement_score,
                'elimination_score': entry.totals.elimination_score,
                'eliminations': entry.totals.eliminations,
                'avg_placement': entry.totals.avg_placement,
                'avg_eliminations': entry.totals.avg_eliminations,
            })

    history_df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    if history_df.empty:
        return history_df

    keys_per_name = history_df.groupby('team_name')['team_key'].transform('nunique')
    shared = keys_per_name > 1
    history_df.loc[shared, 'team_label'] = history_df.loc[shared, 'team_key']

    return history_df.sort_values(['match_number', 'placement']).reset_index(drop=True)


def rank_progression_frame(timeline: StandingsTimeline) -> pd.DataFrame:
    """Placement per game (rows) for each team (columns), for rank progression charts."""
    history_df = timeline_to_frame(timeline)
    if history_df.empty:
        return pd.DataFrame()

    progression = history_df.pivot_table(
        index='match_number', columns='team_label', values='placement', aggfunc='first'
    )
    progression.columns.name = None
    return progression
