"""Playback state and keyboard handling.

WHY: Everything the loop changes between ticks (paused or not, speed,
the word on screen, a sentence counter) has to live somewhere. Keeping
it in one dataclass passed to the loop avoids module-level globals and
makes every transition testable without a terminal.

HOW: PlaybackMode is the three-state machine (running, paused,
terminated). apply_key() maps one key press to a state change and
advance() records a newly fetched word.

RULES:
- words_per_minute never leaves [MIN_WPM, MAX_WPM]
- Unknown keys (and no key) leave the state untouched
- current_word only changes through advance(), which the loop calls
  only while running
- Once terminated, the state no longer reacts to keys
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from rsvp_reader.config import (
    DEFAULT_WPM,
    KEY_FASTER,
    KEY_QUIT,
    KEY_SLOWER,
    KEY_TOGGLE,
    WPM_STEP,
    clamp_wpm,
)


class PlaybackMode(str, enum.Enum):
    """States of the pacing loop."""

    RUNNING = "running"
    PAUSED = "paused"
    TERMINATED = "terminated"


class EndReason(str, enum.Enum):
    """Why the loop stopped."""

    QUIT = "quit"
    EXHAUSTED = "exhausted"


@dataclass
class PlaybackState:
    """Mutable state of one reading session.

    RULES:
    - mode starts as RUNNING
    - sentence_count counts consumed words ending in '.'
    - end_reason is None until the mode becomes TERMINATED
    """

    words_per_minute: float = DEFAULT_WPM
    mode: PlaybackMode = PlaybackMode.RUNNING
    current_word: str = ""
    sentence_count: int = 0
    end_reason: Optional[EndReason] = None

    def __post_init__(self) -> None:
        self.words_per_minute = clamp_wpm(self.words_per_minute)

    @property
    def active(self) -> bool:
        """True while words are advancing."""
        return self.mode is PlaybackMode.RUNNING

    @property
    def terminated(self) -> bool:
        """True once the session has ended, for either reason."""
        return self.mode is PlaybackMode.TERMINATED

    def toggle(self) -> None:
        """Pause a running session or resume a paused one; no effect once terminated."""
        if self.mode is PlaybackMode.RUNNING:
            self.mode = PlaybackMode.PAUSED
        elif self.mode is PlaybackMode.PAUSED:
            self.mode = PlaybackMode.RUNNING

    def faster(self) -> None:
        """Raise the speed by WPM_STEP, up to MAX_WPM."""
        self.words_per_minute = clamp_wpm(self.words_per_minute + WPM_STEP)

    def slower(self) -> None:
        """Lower the speed by WPM_STEP, down to MIN_WPM."""
        self.words_per_minute = clamp_wpm(self.words_per_minute - WPM_STEP)

    def terminate(self, reason: EndReason) -> None:
        """End the session and remember why."""
        self.mode = PlaybackMode.TERMINATED
        self.end_reason = reason

    def advance(self, word: str) -> None:
        """Make ``word`` the word on screen."""
        self.current_word = word
        if word.endswith("."):
            self.sentence_count += 1

    def apply_key(self, key: Optional[str]) -> None:
        """Update the state for one key press (None means no input)."""
        if key is None or self.terminated:
            return
        if key == KEY_QUIT:
            self.terminate(EndReason.QUIT)
        elif key == KEY_TOGGLE:
            self.toggle()
        elif key == KEY_FASTER:
            self.faster()
        elif key == KEY_SLOWER:
            self.slower()
