"""Package entry point for ``python -m rsvp_reader``.

WHY: Users run the reader as ``python -m rsvp_reader book.txt`` without
installing the console script.

HOW: Delegates to the CLI's main() function.
"""

import sys

from rsvp_reader.cli import main

if __name__ == "__main__":
    sys.exit(main())
