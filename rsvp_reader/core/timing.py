"""Per-word display time.

WHY: A fixed interval per word feels rushed on long words and ignores
the natural pauses at commas and sentence ends. Stretching the interval
for both keeps the average speed close to the target while giving the
reader time where the text needs it.

HOW: Start from 60 / wpm seconds. Words longer than six graphemes get
one fifth of that base per extra grapheme. The trailing grapheme then
adds a pause on top of the length-adjusted time: half of it for a
comma, another half again (x1.5) for '.', '?' or '!'.

RULES:
- Pure function: same inputs, same result
- Length is counted in graphemes, consistent with highlighting
- Only one punctuation rule applies, chosen by the last grapheme
- Punctuation is applied after the length adjustment, not to the base
"""

from __future__ import annotations

from rsvp_reader.config import LONG_WORD_THRESHOLD
from rsvp_reader.core.highlight import split_graphemes

SENTENCE_END_FACTOR = 1.5
SENTENCE_END_MARKS = frozenset(".?!")


def compute_display_time(word: str, words_per_minute: float) -> float:
    """Return how long ``word`` stays on screen, in seconds.

    Raises:
        ValueError: words_per_minute is zero or negative.
    """
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive, got {}".format(words_per_minute))

    base = 60.0 / words_per_minute
    duration = base

    graphemes = split_graphemes(word)
    if len(graphemes) > LONG_WORD_THRESHOLD:
        duration += base / 5 * (len(graphemes) - LONG_WORD_THRESHOLD)

    if graphemes:
        last = graphemes[-1]
        if last == ",":
            duration += duration / 2
        elif last in SENTENCE_END_MARKS:
            duration *= SENTENCE_END_FACTOR

    return duration
