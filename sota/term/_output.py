import os
import logging

from ._errors import TerminalError


logger = logging.getLogger("sota")


def write_bytes(fd, data):
    """Write all of data to the given file descriptor.

    A terminal normally takes the whole thing in one write() call, so a
    frame reaches the screen at once. We only loop for the rare short write.
    """
    view = memoryview(data)
    while view:
        try:
            n = os.write(fd, view)
        except OSError as err:
            raise TerminalError.from_error("write", err) from None
        if n < len(view):
            logger.warning(f"short write to terminal: {n} of {len(view)} bytes")
        view = view[n:]
    return len(data)
