"""RSVP Reader — terminal speed reading, one word at a time.

WHY: Reading a long text word by word at a fixed point on screen removes
eye movement and lets the reader hold a steady pace. A plain terminal is
enough for that; no GUI toolkit or document library is needed.

HOW: Two stages — a lazy word source that reads the file in bounded
batches of lines, and a pacing loop that polls the keyboard, advances
the word, renders it with a highlighted letter and sleeps for a
per-word display time.

RULES:
- The core never writes escape codes directly; it goes through the
  Terminal interface
- The whole input file is never loaded at once
- Playback state lives in one dataclass owned by the loop
"""

__version__ = "0.1.0"
