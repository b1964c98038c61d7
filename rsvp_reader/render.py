"""Screen layout for one tick of the pacing loop.

WHY: Where each piece of text goes depends only on the playback state
and the terminal size. Computing the layout as plain data, separate
from writing it, keeps the loop short and lets the tests check exact
positions without decoding escape sequences.

HOW: build_frame() returns a Frame: a list of (row, text) lines, each
drawn starting at column 1. The word is right-padded so that its
highlight grapheme lands on the center column; a red pivot marker sits
on that column one row above and one row below. The status line is on
row 1.

RULES:
- The highlight grapheme always sits at column columns // 2 + 1
- Rows are clamped to at least 1 on tiny or unknown terminals
- A word whose highlight index is out of range is drawn uncolored
- Status line: indicator, sentence count, words per minute (integer)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from colorama import Fore

from rsvp_reader.config import PAUSED_INDICATOR, PIVOT_MARKER, PLAYING_INDICATOR
from rsvp_reader.core.highlight import select_highlight_index, split_graphemes
from rsvp_reader.core.state import PlaybackState

HIGHLIGHT_COLOR = Fore.RED
RESET_COLOR = Fore.RESET


@dataclass
class Frame:
    """Lines to draw for one tick, as (row, text) pairs."""

    lines: List[Tuple[int, str]] = field(default_factory=list)

    def text_at(self, row: int) -> str:
        """Return the text drawn on ``row``, or "" if nothing is."""
        for line_row, text in self.lines:
            if line_row == row:
                return text
        return ""


def status_line(state: PlaybackState) -> str:
    """Format the row 1 status: play/pause indicator, sentences, speed.

    RULES:
    - Fields are tab separated
    - Words per minute is shown as an integer
    """
    indicator = PLAYING_INDICATOR if state.active else PAUSED_INDICATOR
    return "{}\tSentences: {}\tWords per minute: {}".format(
        indicator, state.sentence_count, int(state.words_per_minute)
    )


def highlighted_word(word: str, half_width: int, match_uppercase: bool = False) -> str:
    """Pad ``word`` so its highlight grapheme is at column half_width + 1."""
    graphemes = split_graphemes(word)
    index = select_highlight_index(word, match_uppercase=match_uppercase)
    if index >= len(graphemes):
        return " " * half_width + word
    before = "".join(graphemes[:index])
    pivot = graphemes[index]
    after = "".join(graphemes[index + 1:])
    padding = " " * max(0, half_width - index)
    return "{}{}{}{}{}{}".format(padding, before, HIGHLIGHT_COLOR, pivot, RESET_COLOR, after)


def pivot_line(half_width: int) -> str:
    """Red marker on column half_width + 1, drawn above and below the word."""
    return "{}{}{}{}".format(" " * half_width, HIGHLIGHT_COLOR, PIVOT_MARKER, RESET_COLOR)


def build_frame(state: PlaybackState, size: Tuple[int, int], match_uppercase: bool = False) -> Frame:
    """Lay out the status line, the pivot markers and the current word."""
    columns, rows = size
    half_width = max(0, columns // 2)
    word_row = max(1, rows // 2)

    frame = Frame()
    frame.lines.append((word_row, highlighted_word(state.current_word, half_width, match_uppercase)))
    frame.lines.append((max(1, word_row - 1), pivot_line(half_width)))
    frame.lines.append((word_row + 1, pivot_line(half_width)))
    # Drawn last so it wins if a tiny terminal puts a marker on row 1
    frame.lines.append((1, status_line(state)))
    return frame
