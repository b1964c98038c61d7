"""POSIX terminal backend using termios and ANSI escape sequences.

WHY: The reader runs in an ordinary terminal emulator. Raw mode lets a
single key press reach the program without Enter, and ANSI sequences
are enough to position the word and color the highlight.

HOW: termios/tty put stdin into raw mode and restore the saved
attributes afterwards. select() with a zero timeout checks for pending
input so reads never block. Output sequences come from colorama's ansi
helpers and are written to stdout; the caller flushes once per frame.

RULES:
- Only usable when stdin is a TTY (TerminalUnavailableError otherwise)
- Keys are read as single bytes and decoded as latin-1, so any byte
  maps to exactly one character
- restore_mode() is a no-op if raw mode was never entered
"""

from __future__ import annotations

import os
import select
import shutil
import sys
import termios
import tty
from typing import IO, List, Optional, Tuple

from colorama import Cursor, ansi

from rsvp_reader.config import TERMINAL_SIZE_FALLBACK
from rsvp_reader.core.errors import TerminalUnavailableError
from rsvp_reader.terminal.base import Terminal

HIDE_CURSOR = ansi.CSI + "?25l"
SHOW_CURSOR = ansi.CSI + "?25h"


class AnsiTerminal(Terminal):
    """Terminal backed by the process's stdin/stdout."""

    def __init__(self, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._saved_attrs: Optional[List] = None

    @property
    def _fd(self) -> int:
        return self._stdin.fileno()

    def enter_raw_mode(self) -> None:
        """Save the current attributes and switch stdin to raw mode.

        Raises:
            TerminalUnavailableError: stdin is not a TTY.
        """
        if not self._stdin.isatty():
            raise TerminalUnavailableError("Standard input is not a terminal")
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)

    def restore_mode(self) -> None:
        """Put back the attributes saved by enter_raw_mode()."""
        if self._saved_attrs is None:
            return
        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        self._saved_attrs = None

    def _input_ready(self) -> bool:
        readable, _, _ = select.select([self._fd], [], [], 0)
        return bool(readable)

    def read_key(self) -> Optional[str]:
        """Read one pending byte as a character, or return None at once."""
        if not self._input_ready():
            return None
        data = os.read(self._fd, 1)
        if not data:
            return None
        return data.decode("latin-1")

    def drain_input(self) -> None:
        """Read and discard whatever input is still pending."""
        while self._input_ready():
            if not os.read(self._fd, 1024):
                break

    def hide_cursor(self) -> None:
        self._stdout.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._stdout.write(SHOW_CURSOR)

    def move_to(self, column: int, row: int) -> None:
        self._stdout.write(Cursor.POS(column, row))

    def clear_line(self) -> None:
        self._stdout.write(ansi.clear_line())

    def clear_screen(self) -> None:
        self._stdout.write(ansi.clear_screen())

    def write(self, text: str) -> None:
        self._stdout.write(text)

    def flush(self) -> None:
        self._stdout.flush()

    def size(self) -> Tuple[int, int]:
        """Return (columns, rows), using the fallback for unknown or zero sizes."""
        size = shutil.get_terminal_size(fallback=TERMINAL_SIZE_FALLBACK)
        if size.columns <= 0 or size.lines <= 0:
            return TERMINAL_SIZE_FALLBACK
        return size.columns, size.lines
