"""
The vt100 escape sequences that sota emits.
"""

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_SCREEN = b"\x1b[2J"
ERASE_LINE = b"\x1b[K"  # From the cursor to the end of the line

# Used to probe the screen size when TIOCGWINSZ is not available. The
# terminal clamps the cursor at the edges, so moving it "very far" puts
# it in the bottom-right corner.
CURSOR_FORWARD_MAX = b"\x1b[999C"
CURSOR_DOWN_MAX = b"\x1b[999B"
QUERY_CURSOR_POSITION = b"\x1b[6n"  # Reply: ESC [ row ; col R


def cursor_position(row: int, col: int) -> bytes:
    """Move the cursor to the given 1-based row and column."""
    return b"\x1b[%d;%dH" % (row, col)
