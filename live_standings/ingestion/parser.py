"""
Score Payload Parser

This module decodes the score payload stored on a tournament event (a JSON
array of team records) into typed TeamResult records.

Malformed payloads never raise: a missing, oversized, unparsable or non-array
payload is logged and yields an empty result set, so bad tournament data
cannot take down the display path.

Usage:
    from live_standings.ingestion.parser import parse_tournament_results
    results = parse_tournament_results(event.score, {"event_id": event.id})
"""

import json
from typing import Any, Mapping, Optional

from live_standings.config import MAX_PAYLOAD_SIZE
from live_standings.standings.models import TeamResult
from live_standings.utils import format_context, setup_logging, validate_input_size

# --- Module Logger ---
logger = setup_logging(__name__)


def decode_payload(payload: Any, context: Optional[Mapping[str, Any]] = None) -> Optional[list]:
    """
    Decode a score payload into a list of raw records.

    Args:
        payload: JSON string, already-decoded list, or None
        context: Diagnostic values included in log messages (e.g. event id)

    Returns:
        The decoded list, or None if the payload is absent or malformed
    """
    where = format_context(context)

    if payload is None:
        logger.debug(f"No score payload ({where})")
        return None

    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="replace")

    if isinstance(payload, str):
        if not payload.strip():
            logger.debug(f"Empty score payload ({where})")
            return None
        try:
            validate_input_size(payload, MAX_PAYLOAD_SIZE)
        except ValueError as e:
            logger.warning(f"Score payload rejected ({where}): {e}")
            return None
        try:
            payload = json.loads(payload)
        except (ValueError, RecursionError) as e:
            # Also raised for overlong integer literals and deep nesting
            logger.warning(f"Failed to parse score payload ({where}): {e}")
            return None

    if not isinstance(payload, list):
        logger.warning(f"Score payload is not an array ({where}): got {type(payload).__name__}")
        return None

    return payload


def parse_tournament_results(payload: Any, context: Optional[Mapping[str, Any]] = None) -> list[TeamResult]:
    """
    Parse a score payload into TeamResult records.

    Args:
        payload: JSON-encoded array of team records (or the decoded list, or None)
        context: Diagnostic values included in log messages (e.g. event id)

    Returns:
        List of TeamResult in payload order; empty if the payload is unusable
    """
    records = decode_payload(payload, context)
    if records is None:
        return []

    results = []
    skipped = 0
    for record in records:
        if not isinstance(record, dict):
            skipped += 1
            continue
        results.append(TeamResult.from_dict(record))

    if skipped:
        logger.warning(f"Skipped {skipped} non-object team records ({format_context(context)})")

    return results
