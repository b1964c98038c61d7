"""Error types raised by the reader.

WHY: Only one failure is fatal (the input file cannot be opened). The
others are either handled inside the word source or turned into a clean
exit by the CLI. Distinct types make those decisions explicit at the
catch sites.

RULES:
- FileOpenError aborts startup before the terminal is touched
- LineReadError never escapes the word source; it ends the batch
- Running out of words is not an error (next_word() returns None)
"""

from __future__ import annotations


class ReaderError(Exception):
    """Base class for all reader errors."""


class FileOpenError(ReaderError):
    """The input path is missing, a directory, or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__("Cannot open {}: {}".format(path, reason))
        self.path = path
        self.reason = reason


class LineReadError(ReaderError):
    """Reading a line from the input failed part way through a batch."""


class TerminalUnavailableError(ReaderError):
    """Standard input is not an interactive terminal."""
