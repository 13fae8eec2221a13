"""
The editor state and the main loop.
"""

import logging

from .keys import ctrl_key
from .render import RenderBuffer
from .screen import draw_frame


logger = logging.getLogger("sota")

QUIT_KEY = ctrl_key("q")


class EditorState:
    """What the editor knows about the screen and the cursor.

    The cursor position (cx, cy) is 0-based.
    """

    def __init__(self, screen_rows, screen_cols):
        self.cx = 0
        self.cy = 0
        self.screen_rows = screen_rows
        self.screen_cols = screen_cols

    def __repr__(self):
        return (
            f"<EditorState {self.screen_rows}x{self.screen_cols}"
            f" cursor=({self.cy}, {self.cx})>"
        )


class Editor:
    """The editor session: draw a frame, read a key, handle it, repeat.

    The reader must have a ``read_key()`` method, and ``write`` must put
    bytes on the terminal.
    """

    def __init__(self, state, reader, write):
        self.state = state
        self._reader = reader
        self._write = write
        self._should_quit = False
        self._keymap = {
            QUIT_KEY: self.quit,
        }

    @property
    def should_quit(self):
        return self._should_quit

    def quit(self):
        """Stop the loop before the next frame is drawn."""
        self._should_quit = True

    def refresh_screen(self):
        with RenderBuffer() as buf:
            draw_frame(self.state, buf)
            buf.flush(self._write)

    def process_keypress(self):
        c = self._reader.read_key()
        handler = self._keymap.get(c)
        if handler is not None:
            handler()

    def run(self):
        self._should_quit = False
        logger.info(f"Entering editor loop: {self.state}")
        try:
            while not self._should_quit:
                self.refresh_screen()
                self.process_keypress()
        finally:
            logger.info("Exiting editor loop")
