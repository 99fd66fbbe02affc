"""
Data Ingestion

Modules:
- parser: Decode event score payloads into team records
- event_store: Read exported CMS events from disk
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "parse_tournament_results":
        from live_standings.ingestion.parser import parse_tournament_results
        return parse_tournament_results
    if name == "load_events":
        from live_standings.ingestion.event_store import load_events
        return load_events
    if name == "get_event":
        from live_standings.ingestion.event_store import get_event
        return get_event
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
