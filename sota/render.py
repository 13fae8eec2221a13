"""
Assembling a frame before it goes to the terminal.
"""


class RenderBuffer:
    """An append-only byte buffer for one frame of output.

    Writing a frame in many small pieces makes the terminal flicker, so
    everything is collected here and written with a single call. Use it
    as a context manager, so that it is released on every path.
    """

    def __init__(self):
        self._data = bytearray()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.release()

    def __len__(self):
        return len(self._data)

    def append(self, data):
        """Append the given bytes.

        If memory runs out the MemoryError propagates and the existing
        content is left as it was; a half-composed frame is never written.
        """
        self._data += data

    def getvalue(self):
        """Get the accumulated bytes."""
        return bytes(self._data)

    def flush(self, write):
        """Pass the whole content to ``write()`` in one call."""
        return write(bytes(self._data))

    def release(self):
        """Drop the content and its memory."""
        self._data = bytearray()
