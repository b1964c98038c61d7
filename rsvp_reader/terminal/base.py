"""Abstract terminal interface used by the pacing loop.

WHY: The loop needs a handful of terminal operations — a non-blocking
key read, cursor control, clearing and writing. Hiding them behind one
small interface keeps escape sequences and termios calls out of the
core, and lets the tests drive the loop with a scripted fake.

HOW: Terminal is an ABC. session() is a context manager that puts the
terminal into raw mode and hides the cursor on entry, and restores both
on exit, whatever the exit path.

RULES:
- Coordinates are 1-based (column, row), like ANSI cursor positioning
- read_key() never blocks; None means nothing was typed
- size() returns TERMINAL_SIZE_FALLBACK when the size is unknown
- Cursor visibility is restored exactly once per session
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple


class Terminal(ABC):
    """Narrow terminal capability consumed by the pacing loop.

    To add another backend:
    1. Subclass Terminal
    2. Implement the abstract methods
    3. Pass an instance to PacingLoop
    """

    @abstractmethod
    def enter_raw_mode(self) -> None:
        """Switch input to unbuffered, unechoed mode."""

    @abstractmethod
    def restore_mode(self) -> None:
        """Undo enter_raw_mode()."""

    @abstractmethod
    def read_key(self) -> Optional[str]:
        """Return one pending key, or None without blocking."""

    @abstractmethod
    def drain_input(self) -> None:
        """Discard any input still buffered."""

    @abstractmethod
    def hide_cursor(self) -> None:
        """Stop drawing the cursor."""

    @abstractmethod
    def show_cursor(self) -> None:
        """Draw the cursor again."""

    @abstractmethod
    def move_to(self, column: int, row: int) -> None:
        """Move the cursor to a 1-based (column, row)."""

    @abstractmethod
    def clear_line(self) -> None:
        """Blank the line under the cursor."""

    @abstractmethod
    def clear_screen(self) -> None:
        """Blank the whole screen."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write text at the cursor without a newline."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered output to the screen."""

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Return (columns, rows)."""

    @contextmanager
    def session(self) -> Iterator["Terminal"]:
        """Raw mode with a hidden cursor for the duration of the block."""
        self.enter_raw_mode()
        try:
            self.hide_cursor()
            self.clear_screen()
            self.move_to(1, 1)
            self.flush()
            yield self
        finally:
            self.show_cursor()
            self.flush()
            self.restore_mode()
