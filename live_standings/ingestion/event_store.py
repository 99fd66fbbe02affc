"""
Local Event Store

This module reads tournament events exported from the content store
(CMS list or detail responses saved as JSON files) and builds the detail and
listing payloads served to polling clients.

Each JSON file in the events folder holds either a single event object or a
list response of the form {"contents": [...]}. An event carries its score
data as a JSON-encoded string in its "score" field.

Usage:
    from live_standings.ingestion.event_store import get_event, load_events
    event = get_event("abc123")
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from live_standings.config import EVENTS_FOLDER
from live_standings.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class EventStoreError(Exception):
    """Base exception for event store failures"""
    pass


class EventNotFoundError(EventStoreError):
    """Raised when an event id is missing or unknown"""
    pass


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class Event:
    id: str
    title: str = ""
    score: Any = None
    updated_at: Optional[str] = None
    published_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            score=data.get("score"),
            updated_at=_optional_text(data.get("updatedAt")),
            published_at=_optional_text(data.get("publishedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "score": self.score,
            "updatedAt": self.updated_at,
            "publishedAt": self.published_at,
        }


def _read_event_records(json_file: Path) -> list[dict]:
    """Return the raw event objects stored in one JSON file."""
    with open(json_file, encoding="utf-8") as f:
        json_data = json.load(f)

    # Handle list response, single event, or plain list
    if isinstance(json_data, dict) and isinstance(json_data.get("contents"), list):
        records = json_data["contents"]
    elif isinstance(json_data, dict):
        records = [json_data]
    elif isinstance(json_data, list):
        records = json_data
    else:
        logger.warning(f"Skipping {json_file}: unrecognized format")
        return []

    return [r for r in records if isinstance(r, dict)]


def load_events(folder: Path | None = None) -> list[Event]:
    """
    Load every event in the store, newest first.

    Args:
        folder: Folder holding event JSON files (default: EVENTS_FOLDER)

    Returns:
        Events ordered by publishedAt descending (undated events last)

    Raises:
        EventStoreError: If the folder does not exist
    """
    target_folder = folder or EVENTS_FOLDER
    if not target_folder.is_dir():
        raise EventStoreError(f"Event store folder not found: {target_folder}")

    events: dict[str, Event] = {}
    for json_file in sorted(target_folder.glob("*.json")):
        try:
            records = _read_event_records(json_file)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {json_file}: {e}")
            continue

        for record in records:
            if not record.get("id"):
                logger.warning(f"Skipping event without id in {json_file}")
                continue
            event = Event.from_dict(record)
            if event.id in events:
                logger.warning(f"Duplicate event id {event.id} in {json_file}; keeping the first")
                continue
            events[event.id] = event

    logger.debug(f"Loaded {len(events)} events from {target_folder}")

    dated = sorted(
        (e for e in events.values() if e.published_at),
        key=lambda e: e.published_at,
        reverse=True,
    )
    undated = [e for e in events.values() if not e.published_at]
    return dated + undated


def ensure_event_id(value: str | None) -> str:
    """
    Validate a requested event id.

    Raises:
        EventNotFoundError: If the id is empty or missing
    """
    if not value:
        raise EventNotFoundError("Event id is required")
    return value


def get_event(event_id: str | None, folder: Path | None = None) -> Event:
    """
    Look up one event by id.

    Raises:
        EventNotFoundError: If the id is empty or no such event exists
        EventStoreError: If the store cannot be read
    """
    event_id = ensure_event_id(event_id)
    for event in load_events(folder):
        if event.id == event_id:
            return event
    raise EventNotFoundError(f"Event not found: {event_id}")


def build_event_detail_payload(event: Event) -> dict:
    """Detail response body: {"event": ..., "updatedAt": ...}."""
    return {"event": event.to_dict(), "updatedAt": event.updated_at}


def build_events_listing_payload(events: list[Event], fetched_at: datetime | None = None) -> dict:
    """Listing response body: {"events": [...], "fetchedAt": ISO-8601 UTC timestamp}."""
    fetched_at = fetched_at or datetime.now(timezone.utc)
    return {
        "events": [event.to_dict() for event in events],
        "fetchedAt": fetched_at.isoformat(),
    }
