"""Terminal backends.

WHY: The pacing loop talks to the screen and keyboard only through the
Terminal interface, so the core stays free of termios and escape codes.

HOW: base.py defines the ABC; ansi.py is the POSIX implementation used
by the CLI.
"""

from rsvp_reader.terminal.ansi import AnsiTerminal
from rsvp_reader.terminal.base import Terminal

__all__ = ["AnsiTerminal", "Terminal"]
