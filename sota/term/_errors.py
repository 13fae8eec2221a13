import os


class TerminalError(Exception):
    """A fatal error while talking to the terminal.

    Carries the name of the operation that failed (e.g. "tcsetattr")
    and a human readable reason.
    """

    def __init__(self, operation, reason):
        super().__init__(operation, reason)
        self.operation = operation
        self.reason = reason

    def __str__(self):
        return f"{self.operation}: {self.reason}"

    @classmethod
    def from_error(cls, operation, err):
        """Create from an OSError or termios.error."""
        # termios.error is not an OSError, but its args are (errno, msg) too
        errno = getattr(err, "errno", None)
        if errno is None and err.args and isinstance(err.args[0], int):
            errno = err.args[0]
        if errno is not None:
            reason = os.strerror(errno)
        else:
            reason = str(err) or err.__class__.__name__
        return cls(operation, reason)
