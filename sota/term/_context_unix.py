import tty  # Unix
import atexit
import signal
import logging
import termios  # Unix

from ._context import TerminalContext
from ._errors import TerminalError


logger = logging.getLogger("sota")

# Signals that would otherwise kill us with the terminal left in raw mode
CAUGHT_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def patch_lflag(attrs: int) -> int:
    # No echo, no line buffering, no Ctrl-C/Ctrl-Z signals, no Ctrl-V.
    return attrs & ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)


def patch_iflag(attrs: int) -> int:
    return attrs & ~(
        # A break condition should not send SIGINT.
        termios.BRKINT
        |
        # Don't translate carriage return into newline on input.
        # (Otherwise Ctrl-M reads as 10.)
        termios.ICRNL
        |
        # Parity checking and stripping of the 8th bit. Probably off
        # already on modern terminal emulators.
        termios.INPCK
        | termios.ISTRIP
        |
        # Disable XON/XOFF flow control, so we get Ctrl-S and Ctrl-Q.
        termios.IXON
    )


def patch_oflag(attrs: int) -> int:
    # Don't translate "\n" into "\r\n" on output.
    return attrs & ~termios.OPOST


def patch_cflag(attrs: int) -> int:
    # 8 bits per byte. CS8 is a mask, not a flag.
    return attrs | termios.CS8


def make_raw(attrs):
    """Return a raw-mode copy of the given tcgetattr() list."""
    newattr = list(attrs)
    newattr[tty.IFLAG] = patch_iflag(attrs[tty.IFLAG])
    newattr[tty.OFLAG] = patch_oflag(attrs[tty.OFLAG])
    newattr[tty.CFLAG] = patch_cflag(attrs[tty.CFLAG])
    newattr[tty.LFLAG] = patch_lflag(attrs[tty.LFLAG])

    # A read() returns as soon as there is one byte of input, or after
    # 1/10 of a second with nothing. This lets the editor poll.
    cc = list(attrs[tty.CC])
    cc[termios.VMIN] = 0
    cc[termios.VTIME] = 1
    newattr[tty.CC] = cc
    return newattr


class UnixTerminalContext(TerminalContext):
    def __init__(self, *args, **kwargs):
        self._ori_term_attr = None
        self._ori_handlers = {}
        super().__init__(*args, **kwargs)

    @property
    def original_mode(self):
        """The terminal mode as it was before entering raw mode (or None)."""
        return self._ori_term_attr

    def __enter__(self):
        result = super().__enter__()
        self._catch_signals()
        return result

    def __exit__(self, *args):
        # Hold our signals back until the mode is restored. A signal that
        # arrived meanwhile is delivered (and raises) when unblocking.
        ori_mask = signal.pthread_sigmask(signal.SIG_BLOCK, CAUGHT_SIGNALS)
        try:
            super().__exit__(*args)
        finally:
            try:
                signal.pthread_sigmask(signal.SIG_SETMASK, ori_mask)
            finally:
                self._release_signals()

    def exit_raw_mode(self):
        super().exit_raw_mode()
        # Only drop the safety net once the restore succeeded
        atexit.unregister(self._restore_at_exit)

    def _restore_at_exit(self):
        # Safety net for when the process exits while in raw mode
        logger.warning("still in raw mode at exit")
        try:
            self._reset_terminal_mode()
        except TerminalError as err:
            logger.error(f"could not restore terminal mode at exit: {err}")

    def _catch_signals(self):
        def _on_signal(signum, frame):
            name = signal.Signals(signum).name
            logger.info(f"got {name}, leaving raw mode")
            raise TerminalError("signal", f"terminated by {name}")

        for signum in CAUGHT_SIGNALS:
            self._ori_handlers[signum] = signal.signal(signum, _on_signal)

    def _release_signals(self):
        for signum, handler in self._ori_handlers.items():
            signal.signal(signum, handler)
        self._ori_handlers.clear()

    def _store_terminal_mode(self):
        # The snapshot is taken only once, so that the original mode is
        # what we restore to, even if raw mode is entered again.
        if self._ori_term_attr is None:
            try:
                self._ori_term_attr = termios.tcgetattr(self.fd_in)
            except termios.error as err:
                raise TerminalError.from_error("tcgetattr", err) from None
        atexit.unregister(self._restore_at_exit)
        atexit.register(self._restore_at_exit)

    def _set_terminal_mode(self):
        newattr = make_raw(self._ori_term_attr)
        try:
            # TCSAFLUSH discards any unread input before the change
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, newattr)
        except termios.error as err:
            raise TerminalError.from_error("tcsetattr", err) from None

    def _reset_terminal_mode(self):
        if self._ori_term_attr is None:
            return
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, self._ori_term_attr)
        except termios.error as err:
            raise TerminalError.from_error("tcsetattr", err) from None
        logger.info("terminal mode restored")
