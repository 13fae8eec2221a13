"""
Composing the editor screen.

Each frame hides the cursor, homes it, draws every row, and puts the
cursor back where the editor wants it. Instead of clearing the whole
screen (which flickers), every row is erased to its end right after
being drawn.
"""

from . import __version__
from .render import RenderBuffer
from .term import escapes


ROW_MARKER = b"~"


def welcome_message():
    return f"sota editor -- version {__version__}"


def welcome_row(cols, banner=None):
    """Return the bytes for the centered welcome banner row."""
    text = (welcome_message() if banner is None else banner).encode()
    text = text[:cols]
    padding = (cols - len(text)) // 2
    row = b""
    if padding:
        row += ROW_MARKER
        padding -= 1
    return row + b" " * padding + text


def draw_rows(state, buf, banner=None):
    """Append all rows of the screen to the given buffer."""
    rows = state.screen_rows
    for y in range(rows):
        if y == rows // 3:
            buf.append(welcome_row(state.screen_cols, banner))
        else:
            buf.append(ROW_MARKER)

        buf.append(escapes.ERASE_LINE)

        # No newline after the last row, or the terminal would scroll
        if y < rows - 1:
            buf.append(b"\r\n")


def draw_frame(state, buf, banner=None):
    """Append a full frame for the given editor state to the buffer."""
    buf.append(escapes.HIDE_CURSOR)
    buf.append(escapes.CURSOR_HOME)
    draw_rows(state, buf, banner)
    buf.append(escapes.cursor_position(state.cy + 1, state.cx + 1))
    buf.append(escapes.SHOW_CURSOR)


def compose_frame(state, banner=None):
    """Compose a full frame for the given editor state, as bytes."""
    with RenderBuffer() as buf:
        draw_frame(state, buf, banner)
        return buf.getvalue()
