"""Command-line interface for the RSVP reader.

WHY: Users start a reading session from the shell with a single file
argument. The CLI does the work around the loop: parse the argument,
set up logging away from the display, open the file before touching
the terminal, and turn every way the session can end into a clean exit
code with the terminal restored.

HOW: argparse takes one positional path (plus --help and --version).
The word source is opened first so a bad path fails before raw mode.
The pacing loop runs inside the terminal session context manager, which
restores the cursor and terminal mode on every exit path. Messages for
the user go to stderr after the session has ended.

RULES:
- Positional argument: path of the text file to read
- Exit 0 on 'q' or end of file, 1 if the file or terminal is unusable,
  130 on KeyboardInterrupt
- Logs go to RSVP_LOG_FILE when set, otherwise to stderr (WARNING+)
- Nothing is printed while the terminal is in raw mode; records bound
  for stderr or stdout are held and written once the session has ended
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from logging.handlers import MemoryHandler
from typing import Callable, Iterator, List, Optional

from rsvp_reader import __version__
from rsvp_reader.config import (
    load_highlight_uppercase,
    load_initial_wpm,
    load_log_file,
    load_log_level,
)
from rsvp_reader.core.errors import FileOpenError, TerminalUnavailableError
from rsvp_reader.core.loop import PacingLoop
from rsvp_reader.core.source import WordSource
from rsvp_reader.core.state import EndReason, PlaybackState
from rsvp_reader.terminal import AnsiTerminal, Terminal

logger = logging.getLogger(__name__)

# A session that holds back more records than this writes them out early
HELD_LOG_CAPACITY = 1000


def _status(msg: str) -> None:
    """Print a message for the user to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _configure_logging() -> None:
    """Send log records somewhere that does not overwrite the display."""
    log_file = load_log_file()
    kwargs = {
        "level": load_log_level(),
        "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
    }
    if log_file:
        kwargs["filename"] = log_file
    logging.basicConfig(**kwargs)


@contextmanager
def _hold_console_logs() -> Iterator[None]:
    """Hold back log records bound for the terminal until the block ends.

    WHY: During a session stderr is the raw-mode display. A warning
    written there lands on top of the frame, and without newline
    translation it smears across the screen.

    HOW: Every root handler writing to sys.stderr or sys.stdout is swapped
    for a MemoryHandler that targets it. On exit the original handler is
    put back and the held records are written through it, after the
    terminal session has already been restored.
    """
    root = logging.getLogger()
    consoles = [
        handler for handler in root.handlers
        if isinstance(handler, logging.StreamHandler) and handler.stream in (sys.stderr, sys.stdout)
    ]
    held: List[MemoryHandler] = []
    for console in consoles:
        buffer = MemoryHandler(HELD_LOG_CAPACITY, flushLevel=logging.CRITICAL + 1, target=console)
        buffer.setLevel(console.level)
        root.removeHandler(console)
        root.addHandler(buffer)
        held.append(buffer)
    try:
        yield
    finally:
        for buffer in held:
            console = buffer.target
            root.removeHandler(buffer)
            root.addHandler(console)
            buffer.close()


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="rsvp-reader",
        description="Speed-read a text file one word at a time in the terminal. "
                    "Keys: space pause/resume, + faster, - slower, q quit.",
    )
    parser.add_argument(
        "file",
        help="Path to the plain text file to read.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    return parser


def run_session(source: WordSource, terminal: Terminal, state: PlaybackState,
                match_uppercase: bool = False,
                sleep: Callable[[float], None] = time.sleep) -> PlaybackState:
    """Run the pacing loop inside a terminal session.

    The session context manager restores the cursor and terminal mode
    whether the loop ends normally or raises.
    """
    with terminal.session():
        loop = PacingLoop(source, terminal, state=state, sleep=sleep, match_uppercase=match_uppercase)
        return loop.run()


def main(argv: Optional[List[str]] = None, terminal: Optional[Terminal] = None) -> int:
    """Entry point for the CLI; returns the process exit code.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - terminal=None means the real stdin/stdout terminal
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        _configure_logging()
        state = PlaybackState(words_per_minute=load_initial_wpm())
        match_uppercase = load_highlight_uppercase()
    except ValueError as e:
        _status("Error: {}".format(e))
        return 1

    try:
        source = WordSource.open(args.file)
    except FileOpenError as e:
        logger.error("%s", e)
        _status("Error: {}".format(e))
        return 1

    if terminal is None:
        terminal = AnsiTerminal()

    with source:
        try:
            with _hold_console_logs():
                final = run_session(source, terminal, state, match_uppercase=match_uppercase)
        except TerminalUnavailableError as e:
            _status("Error: {}".format(e))
            return 1
        except KeyboardInterrupt:
            _status("Cancelled by user.")
            return 130
        except Exception:
            logger.exception("Reading session failed")
            raise

    if final.end_reason is EndReason.EXHAUSTED:
        _status("End of file reached: {} words read.".format(source.words_read))
    return 0


if __name__ == "__main__":
    sys.exit(main())
