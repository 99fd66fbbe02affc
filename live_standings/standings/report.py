"""
Standings Report

Prints the overall standings of one event, and optionally the ranking of a
single game, from the local event store.

Usage:
    python -m live_standings.standings.report <event_id> [game_number] [--json]
    python -m live_standings.standings.report --list

    --json prints the event detail payload after the report; --list prints
    the events listing payload instead of a report.

    Programmatic usage:
        from live_standings.standings.report import report_event
        result = report_event("abc123", match_param="2")
"""

import json
import sys
from pathlib import Path

from live_standings.ingestion.event_store import (
    EventNotFoundError,
    EventStoreError,
    build_event_detail_payload,
    build_events_listing_payload,
    get_event,
    load_events,
)
from live_standings.ingestion.parser import parse_tournament_results
from live_standings.standings.frames import match_placements_to_frame, standings_to_frame
from live_standings.standings.summary import create_match_standings_summary, create_standings_summary
from live_standings.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

USAGE = "Usage: python -m live_standings.standings.report <event_id> [game_number] [--json] | --list"


def report_event(event_id: str, match_param=None, folder: Path | None = None) -> dict:
    """
    Log the standings tables for one event.

    Args:
        event_id: Event to report on
        match_param: Optional 1-based game number for the per-game table
        folder: Event store folder (default: EVENTS_FOLDER)

    Returns:
        Dictionary with:
            - event: the Event
            - teams: number of team records parsed
            - overall: StandingsSummary for the latest game
            - match: MatchStandingsSummary, or None if no game was requested

    Raises:
        EventNotFoundError: If the event does not exist
        EventStoreError: If the store cannot be read
    """
    event = get_event(event_id, folder)
    results = parse_tournament_results(event.score, {"event_id": event.id})

    result = {
        'event': event,
        'teams': len(results),
        'overall': create_standings_summary(results),
        'match': None,
    }

    overall = result['overall']
    logger.info("=" * 60)
    logger.info(f"{event.title or event.id}: overall standings after {overall.heading_label}")
    logger.info("=" * 60)
    logger.info(f"  Games played: {overall.total_matches_label}")
    logger.info(f"  Total teams: {overall.total_teams}")
    if overall.standings:
        logger.info("\n" + standings_to_frame(overall.standings).to_string(index=False))
    else:
        logger.warning("No score data found for this event")

    if match_param is not None:
        match = create_match_standings_summary(results, match_param)
        result['match'] = match
        logger.info("=" * 60)
        logger.info(f"{event.title or event.id}: {match.heading_label}")
        logger.info("=" * 60)
        logger.info(f"  Total teams: {match.total_teams}")
        if match.match_standings:
            logger.info("\n" + match_placements_to_frame(match.match_standings).to_string(index=False))
        else:
            logger.warning(f"No results for game {match_param!r}")

    return result


def main(argv: list[str] | None = None) -> int:
    """CLI interface for the standings report."""
    args = sys.argv[1:] if argv is None else argv
    as_json = "--json" in args
    args = [arg for arg in args if arg != "--json"]

    if not args:
        print(USAGE)
        return 1

    try:
        if args[0] == "--list":
            print(json.dumps(build_events_listing_payload(load_events()), ensure_ascii=False, indent=2))
            return 0

        event_id = args[0]
        match_param = args[1] if len(args) > 1 else None
        result = report_event(event_id, match_param)
    except EventNotFoundError as e:
        print(f"\nEVENT NOT FOUND: {e}")
        return 1
    except EventStoreError as e:
        print(f"\nEVENT STORE ERROR: {e}")
        return 1

    if as_json:
        print(json.dumps(build_event_detail_payload(result['event']), ensure_ascii=False, indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
