"""
Utilities to put the terminal in raw mode, talk to it with escape
sequences, and read keys from it.

Like the rest of sota this only targets vt100-ish terminals on Unix. We
talk termios directly rather than going through curses: the editor only
needs a handful of escape sequences, and it wants byte-exact control
over what gets written.
"""

from ._errors import TerminalError  # noqa
from ._context import TerminalContext  # noqa
from ._input_reader import InputReader  # noqa
from ._geometry import GeometryProber, parse_cursor_report  # noqa
from ._output import write_bytes  # noqa
