"""
Finding out how big the terminal is.

The direct way is the TIOCGWINSZ ioctl. Not every terminal supports it,
so when it fails we fall back to a trick that works everywhere: move the
cursor to the far bottom-right (the terminal clamps it at the edges) and
ask the terminal where the cursor ended up.
"""

import re
import fcntl  # Unix
import struct
import logging
import termios  # Unix

from . import escapes
from ._errors import TerminalError


logger = logging.getLogger("sota")

# Longest cursor position report we are willing to read
MAX_REPLY_LEN = 32

_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")


def parse_cursor_report(reply: bytes):
    """Parse a cursor position report of the form ``ESC [ row ; col R``.

    Returns (row, col). Raises TerminalError if the reply is malformed.
    """
    if not reply.startswith(b"\x1b["):
        raise TerminalError("cursor position", f"unexpected reply {reply!r}")
    m = _CURSOR_REPORT_RE.fullmatch(reply)
    if m is None:
        raise TerminalError("cursor position", f"malformed reply {reply!r}")
    row, col = int(m.group(1)), int(m.group(2))
    if row < 1 or col < 1:
        raise TerminalError("cursor position", f"invalid position {row};{col}")
    return row, col


class GeometryProber:
    """Determine the (rows, cols) of a terminal.

    Needs the output file descriptor (for the ioctl), a reader with a
    ``read_byte()`` method, and a ``write(bytes)`` callable, both for the
    cursor-position fallback.
    """

    def __init__(self, fd_out, reader, write):
        self._fd_out = fd_out
        self._reader = reader
        self._write = write

    def probe_size(self):
        try:
            return self._query_window_size()
        except OSError as err:
            logger.info(f"TIOCGWINSZ failed ({err}), probing cursor position")
        try:
            return self._query_cursor_position()
        except TerminalError as err:
            logger.error(f"could not determine terminal size: {err}")
            raise

    def _query_window_size(self):
        bb = fcntl.ioctl(self._fd_out, termios.TIOCGWINSZ, b"\0" * 8)
        rows, cols, _, _ = struct.unpack("HHHH", bb)
        if cols == 0:
            raise OSError("terminal reports zero columns")
        return rows, cols

    def _query_cursor_position(self):
        self._write(escapes.CURSOR_FORWARD_MAX + escapes.CURSOR_DOWN_MAX)
        self._write(escapes.QUERY_CURSOR_POSITION)

        # Read the whole reply, up to and including the "R", so that it
        # does not show up later as keypresses.
        reply = b""
        while len(reply) < MAX_REPLY_LEN:
            c = self._reader.read_byte()
            if c is None:
                break  # The terminal did not answer (in time)
            reply += c
            if c == b"R":
                break

        return parse_cursor_report(reply)
