"""Shared test fixtures for the rsvp_reader test suite.

WHY: The loop, the CLI and the renderer all need a terminal, and several
modules need small text files. A scripted fake terminal lets tests drive
the loop tick by tick and inspect what was drawn without a real TTY.

HOW: FakeTerminal implements the Terminal ABC. Its key script holds one
entry per tick: None for no input, or a string whose characters are all
buffered at that tick (read_key() returns the first, drain_input()
drops the rest). Every call is recorded.

RULES:
- File fixtures use tmp_path for isolation
- FakeTerminal never sleeps and never touches the real terminal
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, List, Optional, Tuple

import pytest

from rsvp_reader.terminal.base import Terminal


class FakeTerminal(Terminal):
    """Terminal double with scripted key presses and recorded output."""

    def __init__(self, keys: Iterable[Optional[str]] = (), size: Tuple[int, int] = (80, 24)) -> None:
        self._script = deque(keys)
        self._buffer: List[str] = []
        self._size = size
        self.calls: List[Tuple] = []
        self.dropped_keys: List[str] = []
        self.raw_mode = False

    def enter_raw_mode(self) -> None:
        self.raw_mode = True
        self.calls.append(("enter_raw_mode",))

    def restore_mode(self) -> None:
        self.raw_mode = False
        self.calls.append(("restore_mode",))

    def read_key(self) -> Optional[str]:
        self.calls.append(("read_key",))
        if not self._buffer and self._script:
            entry = self._script.popleft()
            self._buffer = list(entry or "")
        if not self._buffer:
            return None
        return self._buffer.pop(0)

    def drain_input(self) -> None:
        self.calls.append(("drain_input",))
        self.dropped_keys.extend(self._buffer)
        self._buffer = []

    def hide_cursor(self) -> None:
        self.calls.append(("hide_cursor",))

    def show_cursor(self) -> None:
        self.calls.append(("show_cursor",))

    def move_to(self, column: int, row: int) -> None:
        self.calls.append(("move_to", column, row))

    def clear_line(self) -> None:
        self.calls.append(("clear_line",))

    def clear_screen(self) -> None:
        self.calls.append(("clear_screen",))

    def write(self, text: str) -> None:
        self.calls.append(("write", text))

    def flush(self) -> None:
        self.calls.append(("flush",))

    def size(self) -> Tuple[int, int]:
        return self._size

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    @property
    def written(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == "write"]


@pytest.fixture
def fake_terminal_factory():
    """Build a FakeTerminal from a key script."""
    def _make(keys: Iterable[Optional[str]] = (), size: Tuple[int, int] = (80, 24)) -> FakeTerminal:
        return FakeTerminal(keys, size=size)
    return _make


@pytest.fixture
def text_file(tmp_path):
    """Write ``content`` to a UTF-8 file and return its path."""
    def _write(content: str, name: str = "book.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def clean_reader_env(monkeypatch):
    """Keep a developer's RSVP_* variables out of the tests."""
    for name in ("RSVP_WPM", "RSVP_HIGHLIGHT_UPPERCASE", "RSVP_LOG_FILE", "RSVP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
