"""
Standings Computation

Modules:
- models: Typed team records and ranked entries
- ordering: Tie-break chains and the total-order comparator
- timeline: Cumulative standings and per-game placement timelines
- summary: Display summaries (heading, paging, totals)
- frames: pandas views and display labels
- report: Command-line standings report
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "build_cumulative_standings_timeline":
        from live_standings.standings.timeline import build_cumulative_standings_timeline
        return build_cumulative_standings_timeline
    if name == "build_match_placements_timeline":
        from live_standings.standings.timeline import build_match_placements_timeline
        return build_match_placements_timeline
    if name == "build_match_ranking_snapshots":
        from live_standings.standings.timeline import build_match_ranking_snapshots
        return build_match_ranking_snapshots
    if name == "create_standings_summary":
        from live_standings.standings.summary import create_standings_summary
        return create_standings_summary
    if name == "create_match_standings_summary":
        from live_standings.standings.summary import create_match_standings_summary
        return create_match_standings_summary
    if name == "chunk_array":
        from live_standings.standings.summary import chunk_array
        return chunk_array
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
