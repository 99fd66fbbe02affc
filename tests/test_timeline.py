"""
Tests for the standings timeline builder.
"""

import pytest

from live_standings.standings.models import CumulativeTotals, MatchDetail, TeamKey, TeamResult
from live_standings.standings.timeline import (
    advance_standings,
    build_cumulative_standings_timeline,
    build_match_placements_timeline,
    build_match_ranking_snapshots,
    cumulative_totals,
    get_match_count,
    rank_match,
    running_totals,
    timeline_entry,
)


def detail(score, placement=1, placement_score=0, elimination_score=0, eliminations=0):
    return MatchDetail(
        placement=placement,
        score=score,
        placement_score=placement_score,
        elimination_score=elimination_score,
        eliminations=eliminations,
    )


def team(name, details, placement=0, player=""):
    return TeamResult(team_name=name, player_name=player, detail_scores=tuple(details), placement=placement)


def names(snapshot):
    return [entry.team.team_name for entry in snapshot]


class TestMatchCount:
    """Tests for get_match_count."""

    def test_no_teams(self):
        assert get_match_count([]) == 0

    def test_longest_detail_scores_wins(self):
        teams = [team("A", [detail(1)]), team("B", [detail(1), detail(2), detail(3)])]
        assert get_match_count(teams) == 3


class TestCumulativeTotals:
    """Tests for cumulative_totals and running_totals."""

    def test_sums_and_averages(self):
        t = team("A", [
            detail(30, placement=1, placement_score=20, elimination_score=10, eliminations=5),
            detail(20, placement=3, placement_score=12, elimination_score=8, eliminations=4),
        ])
        totals = cumulative_totals(t, 1)
        assert totals == CumulativeTotals(
            matches_played=2,
            total_score=50,
            placement_score=32,
            elimination_score=18,
            eliminations=9,
            avg_placement=2.0,
            avg_eliminations=4.5,
        )

    def test_only_counts_games_up_to_index(self):
        t = team("A", [detail(30), detail(20), detail(10)])
        assert cumulative_totals(t, 0).total_score == 30
        assert cumulative_totals(t, 1).total_score == 50

    def test_index_past_last_game_uses_all_games(self):
        t = team("A", [detail(30)])
        totals = cumulative_totals(t, 5)
        assert totals.matches_played == 1
        assert totals.total_score == 30

    def test_no_games_gives_zero_totals(self):
        assert cumulative_totals(team("A", []), 0) == CumulativeTotals()

    def test_skipped_slot_contributes_nothing(self):
        t = team("A", [detail(30, placement=2), None, detail(10, placement=4)])
        totals = cumulative_totals(t, 2)
        assert totals.matches_played == 2
        assert totals.total_score == 40
        assert totals.avg_placement == 3.0

    def test_running_totals_match_cumulative_totals(self):
        t = team("A", [detail(30, eliminations=2), None, detail(10, eliminations=1)])
        expected = [cumulative_totals(t, i) for i in range(4)]
        assert running_totals(t, 4) == expected


class TestCumulativeStandingsTimeline:
    """Tests for build_cumulative_standings_timeline."""

    def test_empty_input(self):
        assert build_cumulative_standings_timeline([]) == []

    def test_teams_without_games(self):
        assert build_cumulative_standings_timeline([team("A", []), team("B", [])]) == []

    def test_length_is_max_match_count(self):
        teams = [team("A", [detail(1)] * 2), team("B", [detail(1)] * 5), team("C", [])]
        timeline = build_cumulative_standings_timeline(teams)
        assert len(timeline) == 5
        # Every team appears in every snapshot
        assert all(len(snapshot) == 3 for snapshot in timeline)

    def test_two_team_example(self):
        a = team("A", [detail(30), detail(20)])
        b = team("B", [detail(20), detail(35)])
        timeline = build_cumulative_standings_timeline([a, b])

        first, second = timeline
        assert names(first) == ["A", "B"]
        assert [e.placement for e in first] == [1, 2]
        assert [e.rank_change for e in first] == [0, 0]
        assert [e.totals.total_score for e in first] == [30, 20]

        assert names(second) == ["B", "A"]
        assert [e.placement for e in second] == [1, 2]
        assert [e.rank_change for e in second] == [1, -1]
        assert [e.totals.total_score for e in second] == [55, 50]

    def test_first_game_rank_change_always_zero(self):
        teams = [team(n, [detail(s)]) for n, s in [("A", 5), ("B", 50), ("C", 25)]]
        first = build_cumulative_standings_timeline(teams)[0]
        assert all(entry.rank_change == 0 for entry in first)

    def test_placements_are_permutation(self):
        teams = [
            team("A", [detail(10), detail(10), detail(10)]),
            team("B", [detail(10), detail(5)]),
            team("C", [detail(30)]),
            team("D", [detail(0), detail(0), detail(40)]),
            team("E", []),
        ]
        for snapshot in build_cumulative_standings_timeline(teams):
            assert sorted(e.placement for e in snapshot) == list(range(1, len(snapshot) + 1))

    def test_elimination_score_breaks_total_tie(self):
        teams = [
            team("A", [detail(30, elimination_score=5)]),
            team("B", [detail(30, elimination_score=12)]),
        ]
        assert names(build_cumulative_standings_timeline(teams)[0]) == ["B", "A"]

    def test_final_placement_breaks_tie(self):
        teams = [
            team("A", [detail(30, elimination_score=10)], placement=2),
            team("B", [detail(30, elimination_score=10)], placement=1),
        ]
        assert names(build_cumulative_standings_timeline(teams)[0]) == ["B", "A"]

    def test_team_name_breaks_remaining_tie(self):
        teams = [
            team("Charlie", [detail(30)], placement=1),
            team("alpha", [detail(30)], placement=1),
            team("Bravo", [detail(30)], placement=1),
        ]
        assert names(build_cumulative_standings_timeline(teams)[0]) == ["alpha", "Bravo", "Charlie"]

    def test_deterministic_across_runs_and_input_order(self):
        teams = [team(n, [detail(10), detail(10)], placement=1) for n in ["D", "B", "A", "C"]]
        first = build_cumulative_standings_timeline(teams)
        again = build_cumulative_standings_timeline(list(reversed(teams)))
        assert [names(s) for s in first] == [names(s) for s in again]
        assert names(first[-1]) == ["A", "B", "C", "D"]

    def test_team_missing_later_games_keeps_zero_contribution(self):
        a = team("A", [detail(10)])
        b = team("B", [detail(5), detail(10)])
        timeline = build_cumulative_standings_timeline([a, b])
        assert names(timeline[1]) == ["B", "A"]
        assert timeline[1][1].totals.total_score == 10
        assert timeline[1][1].totals.matches_played == 1

    def test_does_not_mutate_input(self):
        teams = [team("B", [detail(1)]), team("A", [detail(2)])]
        snapshot = list(teams)
        build_cumulative_standings_timeline(teams)
        assert teams == snapshot

    def test_entries_reference_team_and_key(self):
        a = team("A", [detail(1)], player="p1")
        entry = build_cumulative_standings_timeline([a])[0][0]
        assert entry.team is a
        assert entry.team_key == TeamKey("A", "p1")


class TestAdvanceStandings:
    """Tests for the single fold step."""

    def test_rank_change_from_previous_placements(self):
        a = team("A", [])
        b = team("B", [])
        rows = [(a, CumulativeTotals(total_score=10)), (b, CumulativeTotals(total_score=20))]
        previous = {a.key: 1, b.key: 2}

        snapshot, placements = advance_standings(rows, 1, previous)

        assert names(snapshot) == ["B", "A"]
        assert [e.rank_change for e in snapshot] == [1, -1]
        assert placements == {b.key: 1, a.key: 2}
        # Input mapping is left untouched
        assert previous == {a.key: 1, b.key: 2}

    def test_unknown_team_has_zero_change(self):
        a = team("A", [])
        snapshot, _ = advance_standings([(a, CumulativeTotals(total_score=5))], 3, {})
        assert snapshot[0].rank_change == 0

    def test_first_game_ignores_previous(self):
        a = team("A", [])
        snapshot, _ = advance_standings([(a, CumulativeTotals())], 0, {a.key: 7})
        assert snapshot[0].rank_change == 0


class TestMatchPlacementsTimeline:
    """Tests for build_match_placements_timeline."""

    def test_empty_input(self):
        assert build_match_placements_timeline([]) == []

    def test_team_without_game_is_excluded(self):
        a = team("A", [detail(10), detail(10), detail(30)])
        b = team("B", [detail(10), detail(10), detail(40)])
        c = team("C", [detail(10), detail(10)])
        timeline = build_match_placements_timeline([a, b, c])

        assert len(timeline) == 3
        assert names(timeline[2]) == ["B", "A"]
        assert [e.rank for e in timeline[2]] == [1, 2]
        assert all(e.match_index == 2 for e in timeline[2])

    def test_skipped_slot_is_excluded(self):
        a = team("A", [detail(10), None])
        b = team("B", [detail(5), detail(7)])
        timeline = build_match_placements_timeline([a, b])
        assert names(timeline[1]) == ["B"]

    def test_ranked_on_game_score_only(self):
        a = team("A", [detail(50), detail(5)])
        b = team("B", [detail(10), detail(20)])
        timeline = build_match_placements_timeline([a, b])
        assert names(timeline[1]) == ["B", "A"]

    def test_tie_break_chain(self):
        teams = [
            team("A", [detail(20, placement=3, elimination_score=5)]),
            team("B", [detail(20, placement=2, elimination_score=5)]),
            team("C", [detail(20, placement=9, elimination_score=8)]),
            team("D", [detail(20, placement=2, elimination_score=5)]),
        ]
        assert names(rank_match(teams, 0)) == ["C", "B", "D", "A"]

    def test_entry_carries_detail(self):
        d = detail(12, placement=4)
        entry = build_match_placements_timeline([team("A", [d])])[0][0]
        assert entry.detail is d
        assert entry.rank == 1


class TestMatchRankingSnapshots:
    """Tests for build_match_ranking_snapshots."""

    @pytest.fixture
    def teams(self):
        return [
            team("A", [detail(30), detail(20)]),
            team("B", [detail(20), detail(35)]),
        ]

    def test_both_slots_in_range(self, teams):
        snapshots = build_match_ranking_snapshots(teams, 0)
        before, after = snapshots.overall_standings
        assert names(before) == ["A", "B"]
        assert names(after) == ["B", "A"]
        match_before, match_after = snapshots.match_placements
        assert names(match_before) == ["A", "B"]
        assert names(match_after) == ["B", "A"]

    def test_last_game_has_no_next(self, teams):
        snapshots = build_match_ranking_snapshots(teams, 1)
        assert snapshots.overall_standings[0] is not None
        assert snapshots.overall_standings[1] is None
        assert snapshots.match_placements[1] is None

    def test_negative_index(self, teams):
        snapshots = build_match_ranking_snapshots(teams, -1)
        assert snapshots.overall_standings[0] is None
        assert names(snapshots.overall_standings[1]) == ["A", "B"]

    def test_far_out_of_range(self, teams):
        snapshots = build_match_ranking_snapshots(teams, 10)
        assert snapshots.overall_standings == (None, None)
        assert snapshots.match_placements == (None, None)

    def test_no_teams(self):
        snapshots = build_match_ranking_snapshots([], 0)
        assert snapshots.overall_standings == (None, None)


class TestTimelineEntry:
    """Tests for timeline_entry bounds handling."""

    def test_in_range(self):
        assert timeline_entry([["a"], ["b"]], 1) == ["b"]

    def test_negative_is_none(self):
        assert timeline_entry([["a"]], -1) is None

    def test_non_integer_is_none(self):
        assert timeline_entry([["a"]], "0") is None
        assert timeline_entry([["a"]], True) is None
        assert timeline_entry([["a"]], None) is None
