"""
Standings Data Model

Typed, immutable records for tournament score data and the ranked views
derived from it. Raw records enter through `TeamResult.from_dict`, which is
the only place loosely-typed JSON values are coerced.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, NamedTuple, Optional


def _as_number(value: Any, default: float = 0) -> float:
    """Coerce a JSON value into a finite number, falling back to `default`."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        # Integers beyond float range cannot be averaged
        try:
            float(value)
        except OverflowError:
            return default
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
        if not math.isfinite(number):
            return default
        return int(number) if number.is_integer() else number
    return default


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


class TeamKey(NamedTuple):
    """Identity of a team across snapshots: (team name, player name)."""

    team_name: str
    player_name: str

    def __str__(self) -> str:
        return f"{self.team_name}::{self.player_name}"


@dataclass(frozen=True)
class MatchDetail:
    """One team's result in a single match."""

    placement: float = 0
    score: float = 0
    placement_score: float = 0
    elimination_score: float = 0
    eliminations: float = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchDetail":
        return cls(
            placement=_as_number(data.get("placement")),
            score=_as_number(data.get("score")),
            placement_score=_as_number(data.get("placementScore")),
            elimination_score=_as_number(data.get("eliminationScore")),
            eliminations=_as_number(data.get("eliminations")),
        )


@dataclass(frozen=True)
class TeamResult:
    """
    One team's full tournament record.

    `detail_scores` is indexed by match number (index 0 = game 1). A `None`
    slot means the team did not play that match; the sequence may also simply
    be shorter than the tournament's match count.

    The running totals, final `placement` and `count_vr` come from the score
    source as-is and are only forwarded.
    """

    team_name: str = ""
    player_name: str = ""
    members: tuple[str, ...] = ()
    detail_scores: tuple[Optional[MatchDetail], ...] = ()
    placement: float = 0
    total_score: float = 0
    placement_score: float = 0
    elimination_score: float = 0
    eliminations: float = 0
    avg_eliminations: float = 0
    avg_placement: float = 0
    num_of_matches: float = 0
    count_vr: float = 0

    @property
    def key(self) -> TeamKey:
        return TeamKey(self.team_name, self.player_name)

    @property
    def match_count(self) -> int:
        return len(self.detail_scores)

    def detail_at(self, match_index: int) -> Optional[MatchDetail]:
        """Return this team's detail for `match_index`, or None if it did not play."""
        if 0 <= match_index < len(self.detail_scores):
            return self.detail_scores[match_index]
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TeamResult":
        """
        Build a TeamResult from one decoded score record.

        Missing or invalid numbers become 0, missing strings become "", and
        non-object entries in `detailScores` become empty slots.
        """
        raw_members = data.get("members")
        members = tuple(_as_text(m) for m in raw_members) if isinstance(raw_members, list) else ()

        raw_details = data.get("detailScores")
        details = ()
        if isinstance(raw_details, list):
            details = tuple(
                MatchDetail.from_dict(d) if isinstance(d, dict) else None
                for d in raw_details
            )

        # The score source spells this key "avgAliminations"
        avg_eliminations = data.get("avgEliminations", data.get("avgAliminations"))

        return cls(
            team_name=_as_text(data.get("teamName")),
            player_name=_as_text(data.get("playerName")),
            members=members,
            detail_scores=details,
            placement=_as_number(data.get("placement")),
            total_score=_as_number(data.get("totalScore")),
            placement_score=_as_number(data.get("placementScore")),
            elimination_score=_as_number(data.get("eliminationScore")),
            eliminations=_as_number(data.get("eliminations")),
            avg_eliminations=_as_number(avg_eliminations),
            avg_placement=_as_number(data.get("avgPlacement")),
            num_of_matches=_as_number(data.get("numOfMatches")),
            count_vr=_as_number(data.get("countVR")),
        )


@dataclass(frozen=True)
class CumulativeTotals:
    """Running totals for one team over matches 0..index inclusive."""

    matches_played: int = 0
    total_score: float = 0
    placement_score: float = 0
    elimination_score: float = 0
    eliminations: float = 0
    avg_placement: float = 0
    avg_eliminations: float = 0


@dataclass(frozen=True)
class CumulativeStandingEntry:
    team_key: TeamKey
    placement: int
    rank_change: int
    totals: CumulativeTotals
    team: TeamResult = field(repr=False)


@dataclass(frozen=True)
class MatchPlacementEntry:
    team_key: TeamKey
    match_index: int
    rank: int
    detail: MatchDetail
    team: TeamResult = field(repr=False)


StandingsSnapshot = list[CumulativeStandingEntry]
MatchPlacementsSnapshot = list[MatchPlacementEntry]
StandingsTimeline = list[StandingsSnapshot]
MatchPlacementsTimeline = list[MatchPlacementsSnapshot]


@dataclass(frozen=True)
class MatchRankingSnapshots:
    """Snapshots around a match boundary: (at match_index, at match_index + 1)."""

    overall_standings: tuple[Optional[StandingsSnapshot], Optional[StandingsSnapshot]]
    match_placements: tuple[Optional[MatchPlacementsSnapshot], Optional[MatchPlacementsSnapshot]]
