import sys
import logging

from .editor import Editor, EditorState, QUIT_KEY
from .keys import show_keys
from .term import TerminalContext, TerminalError, escapes, write_bytes


logger = logging.getLogger("sota")


def main(keys=False):
    """Run the editor in the current terminal, and return the exit code.

    With keys=True, instead show the byte values of pressed keys.
    """

    # When importing sota, nothing should happen just yet.
    # Only when this function is called, is the terminal touched.

    try:
        terminal = TerminalContext()
    except RuntimeError as err:
        sys.stderr.write(f"sota: {err}\n")
        return 1

    try:
        # Leaving the with-block restores the terminal mode, also on error
        with terminal:
            if keys:
                show_keys(terminal.reader, terminal.write, QUIT_KEY)
                return 0
            rows, cols = terminal.get_size()
            editor = Editor(EditorState(rows, cols), terminal.reader, terminal.write)
            editor.run()
    except TerminalError as err:
        die(terminal.fd_out, err)
        return 1
    except MemoryError:
        die(terminal.fd_out, TerminalError("append", "out of memory"))
        return 1

    clear_screen(terminal.fd_out)
    return 0


def clear_screen(fd):
    """Clear the screen and home the cursor, ignoring write errors."""
    try:
        write_bytes(fd, escapes.CLEAR_SCREEN + escapes.CURSOR_HOME)
    except TerminalError:
        pass


def die(fd, err):
    """Leave the screen readable, and report a fatal error."""
    logger.error(f"fatal error: {err}")
    clear_screen(fd)
    sys.stderr.write(f"{err.operation}: {err.reason}\n")
    sys.stderr.flush()
