"""Lazy word source that reads a text file in bounded batches of lines.

WHY: Books can be arbitrarily large, but the reader only ever needs the
next word. Reading BATCH_LINES lines at a time keeps memory small and
constant, and tokenizing a hundred lines is far faster than the time a
single word stays on screen.

HOW: The source owns an open handle. Files are opened in binary mode and
each line is decoded on its own, so a bad byte costs only the line it
sits on. When the pending batch runs out it reads up to BATCH_LINES
lines, joins them, splits on whitespace and starts over at index zero. A batch shorter than BATCH_LINES means
the end of the file was reached; once that batch is consumed the source
is exhausted for good and never looks at the handle again.

RULES:
- Tokens are split on any whitespace; empty tokens are never returned
- next_word() returns None once exhausted, and keeps returning None
- A failing line read (OSError, bad encoding) ends the batch early and
  makes it final; lines read before it are kept, and the failure is
  logged, not raised
- A full batch without any tokens (only blank lines) triggers another
  refill instead of a false end of file
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterator, List, Optional, Union

from rsvp_reader.config import BATCH_LINES, SOURCE_ENCODING
from rsvp_reader.core.errors import FileOpenError, LineReadError

logger = logging.getLogger(__name__)


class WordSource:
    """Pull-based, non-restartable stream of words from a text handle.

    Use WordSource.open() for files; the constructor also accepts a text
    stream (already decoded lines), which is what most tests use.
    """

    def __init__(self, stream: Union[IO[str], IO[bytes]], batch_lines: int = BATCH_LINES,
                 name: str = "<stream>") -> None:
        if batch_lines < 1:
            raise ValueError("batch_lines must be at least 1")
        self.name = name
        self.batch_lines = batch_lines
        self.lines_read = 0
        self.words_read = 0
        self._stream = stream
        self._pending: List[str] = []
        self._cursor = 0
        self._final = False

    @classmethod
    def open(cls, path: str | Path, batch_lines: int = BATCH_LINES) -> "WordSource":
        """Open ``path`` for buffered reading.

        Raises:
            FileOpenError: The path does not exist, is a directory, or
                cannot be read.
        """
        try:
            stream = open(path, "rb")
        except OSError as exc:
            raise FileOpenError(str(path), exc.strerror or str(exc)) from exc
        logger.info("Opened %s", path)
        return cls(stream, batch_lines=batch_lines, name=str(path))

    @property
    def exhausted(self) -> bool:
        """True once the final batch has been fully consumed."""
        return self._final and self._cursor >= len(self._pending)

    def next_word(self) -> Optional[str]:
        """Return the next token, or None when the file is used up."""
        while self._cursor >= len(self._pending):
            if self._final:
                return None
            self._refill()
        word = self._pending[self._cursor]
        self._cursor += 1
        self.words_read += 1
        return word

    def close(self) -> None:
        """Close the underlying handle."""
        self._stream.close()

    def __enter__(self) -> "WordSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        word = self.next_word()
        if word is None:
            raise StopIteration
        return word

    def _read_line(self, number: int) -> str:
        try:
            line = self._stream.readline()
            if isinstance(line, bytes):
                line = line.decode(SOURCE_ENCODING)
            return line
        except (OSError, UnicodeDecodeError) as exc:
            raise LineReadError("Failed to read line {} of {}".format(number, self.name)) from exc

    def _refill(self) -> None:
        chunks: List[str] = []
        full = True
        for _ in range(self.batch_lines):
            try:
                line = self._read_line(self.lines_read + len(chunks) + 1)
            except LineReadError as exc:
                logger.warning("%s (%s); ending batch early", exc, exc.__cause__)
                full = False
                break
            if not line:
                full = False
                break
            chunks.append(line)
        self.lines_read += len(chunks)
        self._pending = "".join(chunks).split()
        self._cursor = 0
        self._final = not full
        logger.debug(
            "Refilled %s: %d lines, %d words%s",
            self.name, len(chunks), len(self._pending), " (final batch)" if self._final else "",
        )
