import os
import pty

import pytest


class FakeReader:
    """Stands in for an InputReader, serving bytes from a string."""

    def __init__(self, data=b""):
        self.data = bytearray(data)

    def read_byte(self):
        if not self.data:
            return None
        c = bytes(self.data[:1])
        del self.data[:1]
        return c

    def read_key(self):
        c = self.read_byte()
        if c is None:
            raise AssertionError("read_key() called with no keys left")
        return c


@pytest.fixture
def pty_pair():
    """A pseudo terminal, as (master_fd, slave_fd)."""
    master, slave = pty.openpty()
    yield master, slave
    os.close(slave)
    os.close(master)
