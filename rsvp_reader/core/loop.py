"""The pacing loop: poll, update, render, sleep.

WHY: The reader has to react to the keyboard while words advance on a
timer. A single thread that polls without blocking just before each
sleep is enough: input lag is at most one word's display time, and
there is no shared state to lock.

HOW: Each tick reads at most one key and drains the rest, clears the
screen, applies the key, fetches the next word if running, computes
the display time for the word on screen, draws the frame and returns
the timeout. run() sleeps for that timeout and ticks again until the
state is terminated.

RULES:
- Exactly one key is acted on per tick; extra buffered keys are dropped
- Exactly one word advance (when running) and one render per tick
- While paused the same word stays on screen; its timeout is recomputed
  against the current speed
- 'q' and running out of words both end the loop; the terminal session
  owned by the caller restores the cursor
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from rsvp_reader.core.source import WordSource
from rsvp_reader.core.state import EndReason, PlaybackState
from rsvp_reader.core.timing import compute_display_time
from rsvp_reader.render import Frame, build_frame
from rsvp_reader.terminal.base import Terminal

logger = logging.getLogger(__name__)


class PacingLoop:
    """Drives one reading session over a WordSource and a Terminal."""

    def __init__(
        self,
        source: WordSource,
        terminal: Terminal,
        state: Optional[PlaybackState] = None,
        sleep: Callable[[float], None] = time.sleep,
        match_uppercase: bool = False,
    ) -> None:
        self.source = source
        self.terminal = terminal
        self.state = state if state is not None else PlaybackState()
        self.match_uppercase = match_uppercase
        self._sleep = sleep

    def tick(self) -> Optional[float]:
        """Run one iteration and return the timeout, or None when finished."""
        key = self.terminal.read_key()
        self.terminal.drain_input()
        self.terminal.clear_screen()

        self.state.apply_key(key)
        if self.state.terminated:
            self.terminal.flush()
            return None

        if self.state.active:
            word = self.source.next_word()
            if word is None:
                self.state.terminate(EndReason.EXHAUSTED)
                self.terminal.flush()
                return None
            self.state.advance(word)

        timeout = compute_display_time(self.state.current_word, self.state.words_per_minute)
        self._draw(build_frame(self.state, self.terminal.size(), self.match_uppercase))
        return timeout

    def run(self) -> PlaybackState:
        """Tick until quit or end of file; return the final state."""
        while True:
            timeout = self.tick()
            if timeout is None:
                break
            self._sleep(timeout)
        logger.info(
            "Stopped (%s) after %d words at %d wpm",
            self.state.end_reason.value, self.source.words_read, int(self.state.words_per_minute),
        )
        return self.state

    def _draw(self, frame: Frame) -> None:
        for row, text in frame.lines:
            self.terminal.move_to(1, row)
            self.terminal.clear_line()
            self.terminal.write(text)
        self.terminal.flush()
