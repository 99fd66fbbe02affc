"""
Central configuration for Live Standings.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

import logging
from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
EVENTS_FOLDER = DATA_FOLDER / "events"

# --- Logging ---
LOG_LEVEL = logging.INFO

# --- Input Validation ---
MAX_PAYLOAD_SIZE = 2_000_000  # Maximum score payload size in characters (~2MB)

# --- Summary Configuration ---
DEFAULT_STANDINGS_CHUNK_SIZE = 10  # Rows per page / slide
MATCH_HEADING_TEMPLATE = "Game {number} Result"
UNKNOWN_MATCH_DISPLAY = "?"
DEFAULT_MATCH_HEADING_LABEL = MATCH_HEADING_TEMPLATE.format(number=UNKNOWN_MATCH_DISPLAY)
FALLBACK_TOTAL_MATCHES_LABEL = "-"

# --- Display Configuration ---
TOP_LIMIT = 10  # Rows shown per standings page
POLL_INTERVAL_SECONDS = 10  # Live refresh interval for the dashboard
MEMBERS_SEPARATOR = " + "
RANK_UP_SYMBOL = "▲"
RANK_DOWN_SYMBOL = "▼"
RANK_SAME_SYMBOL = "-"
