"""
Shared utilities for Live Standings.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import logging

from live_standings.config import LOG_LEVEL


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = LOG_LEVEL) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: LOG_LEVEL from config)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- Validation ---
def validate_input_size(text: str, max_size: int) -> None:
    """
    Validate that input text does not exceed maximum size.

    Args:
        text: Input text to validate
        max_size: Maximum allowed size in characters

    Raises:
        ValueError: If input exceeds max_size
    """
    if len(text) > max_size:
        raise ValueError(
            f"Input too large: {len(text):,} characters. "
            f"Maximum allowed: {max_size:,} characters"
        )


def format_context(context) -> str:
    """Render a diagnostic context mapping as `key=value` pairs for log lines."""
    if not context:
        return "no context"
    return ", ".join(f"{key}={value}" for key, value in context.items())


__all__ = [
    # Logging
    'setup_logging',
    'format_context',
    # Validation
    'validate_input_size',
]
