import sys
import logging

from ._input_reader import InputReader
from ._output import write_bytes
from ._geometry import GeometryProber


logger = logging.getLogger("sota")


class TerminalContext:
    """Context manager that puts the terminal in raw mode.

    Instantiating this class produces a class corresponding with the
    current platform. Use it in a with-statement; the original terminal
    mode is restored when the block exits, however it exits.
    """

    def __new__(cls, *args, **kwargs):
        # Select context class
        if sys.platform.startswith("win"):
            raise RuntimeError("sota needs a Unix terminal (termios).")
        from ._context_unix import UnixTerminalContext

        return super().__new__(UnixTerminalContext)

    def __init__(self, fd_in=None, fd_out=None):
        self._entered = False
        self.fd_in = sys.__stdin__.fileno() if fd_in is None else fd_in
        self.fd_out = sys.__stdout__.fileno() if fd_out is None else fd_out
        self.reader = InputReader(self.fd_in)

    def __enter__(self):
        if self._entered:
            raise RuntimeError("Can only enter the context state once.")
        self.enter_raw_mode()
        self._entered = True
        return self

    def __exit__(self, *args):
        self._entered = False
        self.exit_raw_mode()

    def enter_raw_mode(self):
        """Snapshot the current terminal mode, and switch to raw mode."""
        self._store_terminal_mode()
        self._set_terminal_mode()
        logger.info("terminal in raw mode")

    def exit_raw_mode(self):
        """Restore the terminal mode that was stored on entering.

        Safe to call multiple times.
        """
        self._reset_terminal_mode()

    def write(self, data):
        """Write bytes to the terminal."""
        return write_bytes(self.fd_out, data)

    def get_size(self):
        """Get the terminal size as (rows, cols)."""
        return GeometryProber(self.fd_out, self.reader, self.write).probe_size()

    # For subclasses to implement

    def _store_terminal_mode(self):
        raise NotImplementedError()

    def _set_terminal_mode(self):
        raise NotImplementedError()

    def _reset_terminal_mode(self):
        raise NotImplementedError()
