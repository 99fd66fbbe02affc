"""
Live Standings - Core Package

This package contains the core modules for:
- Standings computation (live_standings.standings)
- Score payload ingestion and the local event store (live_standings.ingestion)
- Shared configuration and utilities
"""

from live_standings.config import *

__version__ = "1.0.0"
