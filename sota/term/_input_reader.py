import os
import errno
import logging

from ._errors import TerminalError


logger = logging.getLogger("sota")

_RETRY_ERRNOS = (errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR)


class InputReader:
    """Reads keys from the terminal, one byte at a time.

    In raw mode the terminal is set up so that a read returns as soon as
    a byte is available, or returns nothing after a 100 ms idle timeout.
    A timeout is not an error: ``read_byte()`` reports it as None, and
    ``read_key()`` simply tries again.
    """

    def __init__(self, fd):
        self._fd = fd

    def read_byte(self):
        """Read one byte, or return None if nothing arrived in time."""
        try:
            bb = os.read(self._fd, 1)
        except OSError as err:
            if err.errno in _RETRY_ERRNOS:
                return None
            logger.error(f"reading from terminal failed: {err}")
            raise TerminalError.from_error("read", err) from None
        return bb or None

    def read_key(self):
        """Block until a key is pressed, and return its byte."""
        while True:
            bb = self.read_byte()
            if bb is not None:
                return bb
