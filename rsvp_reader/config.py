"""Configuration constants, key bindings, and .env loading.

WHY: Reading speed limits, the batch size, the vowel set and the key
bindings are plain data. Keeping them in one module means the pacing
rules can be tuned without touching the loop, and tests can refer to
the same numbers the code uses.

HOW: python-dotenv loads a .env file on import. Constants are defined
at module level. A few values can be overridden through environment
variables; the load_* helpers parse and validate them.

RULES:
- Speed is always kept within [MIN_WPM, MAX_WPM]
- BATCH_LINES bounds how many lines the word source holds at once
- Environment overrides only set initial values; nothing is written back
- Invalid numeric overrides raise ValueError with the variable name
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the working directory (where the reader is started)
load_dotenv()

# ---------------------------------------------------------------------------
# Word source
# ---------------------------------------------------------------------------

BATCH_LINES = 100
"""Number of lines read and tokenized per refill."""

SOURCE_ENCODING = "utf-8"

# ---------------------------------------------------------------------------
# Reading speed
# ---------------------------------------------------------------------------

MIN_WPM = 40.0
MAX_WPM = 1000.0
WPM_STEP = 10.0
DEFAULT_WPM = 200.0

# Words longer than this get extra display time per extra grapheme
LONG_WORD_THRESHOLD = 6

# ---------------------------------------------------------------------------
# Highlighting
# ---------------------------------------------------------------------------

VOWELS: frozenset[str] = frozenset("aeiouäöü")
"""Graphemes eligible for the highlight, lowercase only."""

# ---------------------------------------------------------------------------
# Keys and display
# ---------------------------------------------------------------------------

KEY_QUIT = "q"
KEY_TOGGLE = " "
KEY_FASTER = "+"
KEY_SLOWER = "-"

TERMINAL_SIZE_FALLBACK: tuple[int, int] = (1, 2)
"""(columns, rows) used when the terminal cannot report its size."""

PLAYING_INDICATOR = "> "
PAUSED_INDICATOR = "||"
PIVOT_MARKER = "|"


def clamp_wpm(value: float) -> float:
    """Clamp a words-per-minute value to [MIN_WPM, MAX_WPM]."""
    return max(MIN_WPM, min(MAX_WPM, float(value)))


def load_initial_wpm() -> float:
    """Read the starting speed from RSVP_WPM.

    RULES:
    - Unset or blank means DEFAULT_WPM
    - Values outside the speed limits are clamped
    - Non-numeric values raise ValueError
    """
    raw = os.getenv("RSVP_WPM", "").strip()
    if not raw:
        return DEFAULT_WPM
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(
            "RSVP_WPM must be a number, got {!r}".format(raw)
        ) from None
    return clamp_wpm(value)


def load_highlight_uppercase() -> bool:
    """Whether uppercase vowels may be highlighted (RSVP_HIGHLIGHT_UPPERCASE)."""
    return os.getenv("RSVP_HIGHLIGHT_UPPERCASE", "false").strip().lower() in ("1", "true", "yes")


def load_log_file() -> str | None:
    """Path for log output, or None to log to stderr."""
    path = os.getenv("RSVP_LOG_FILE", "").strip()
    return path or None


def load_log_level() -> int:
    """Logging level from RSVP_LOG_LEVEL (default WARNING)."""
    name = os.getenv("RSVP_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError("Unknown RSVP_LOG_LEVEL {!r}".format(name))
    return level
