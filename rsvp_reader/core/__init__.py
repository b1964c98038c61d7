"""Core reading modules: word source, timing, highlighting and the loop.

WHY: These modules hold the reader's behavior. They depend on the
terminal only through the Terminal interface and never touch stdin,
stdout or escape codes directly.

HOW: source.py streams words from a file, timing.py and highlight.py
are pure per-word functions, state.py holds playback state, loop.py
ties them together tick by tick.
"""
