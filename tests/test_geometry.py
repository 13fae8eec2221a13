import os
import fcntl
import struct
import termios

import pytest

from sota.term import GeometryProber, TerminalContext, TerminalError
from sota.term import parse_cursor_report

from conftest import FakeReader


PROBE = b"\x1b[999C\x1b[999B\x1b[6n"


def set_winsize(fd, rows, cols):
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, cols, 0, 0))


@pytest.fixture
def not_a_tty():
    """A file descriptor for which TIOCGWINSZ fails."""
    r, w = os.pipe()
    yield w
    os.close(r)
    os.close(w)


def test_parse_cursor_report():
    assert parse_cursor_report(b"\x1b[50;200R") == (50, 200)
    assert parse_cursor_report(b"\x1b[1;1R") == (1, 1)
    assert parse_cursor_report(b"\x1b[024;080R") == (24, 80)


@pytest.mark.parametrize(
    "reply",
    [
        b"",
        b"\x1b[50;200",  # no terminator
        b"50;200R",  # no prefix
        b"\x1b50;200R",
        b"[50;200R",
        b"\x1b[ab;cdR",
        b"\x1b[50R",
        b"\x1b[50;R",
        b"\x1b[;200R",
        b"\x1b[50;200;1R",
        b"\x1b[-5;200R",
        b"\x1b[0;200R",
        b"\x1b[50;0R",
    ],
)
def test_parse_malformed_cursor_report(reply):
    with pytest.raises(TerminalError) as info:
        parse_cursor_report(reply)
    assert info.value.operation == "cursor position"


def test_probe_with_ioctl(pty_pair):
    master, slave = pty_pair
    set_winsize(slave, 24, 80)
    writes = []
    prober = GeometryProber(slave, FakeReader(), writes.append)
    assert prober.probe_size() == (24, 80)
    assert writes == []  # No need for the fallback


def test_probe_fallback(not_a_tty):
    writes = []
    reader = FakeReader(b"\x1b[50;200R")
    prober = GeometryProber(not_a_tty, reader, writes.append)
    assert prober.probe_size() == (50, 200)
    assert b"".join(writes) == PROBE


def test_probe_fallback_when_zero_columns(pty_pair):
    master, slave = pty_pair
    set_winsize(slave, 0, 0)
    prober = GeometryProber(slave, FakeReader(b"\x1b[30;100R"), lambda bb: None)
    assert prober.probe_size() == (30, 100)


def test_probe_fallback_drains_reply(not_a_tty):
    reader = FakeReader(b"\x1b[50;200Rx")
    prober = GeometryProber(not_a_tty, reader, lambda bb: None)
    assert prober.probe_size() == (50, 200)
    # Only the reply was consumed
    assert reader.read_byte() == b"x"
    assert reader.read_byte() is None


@pytest.mark.parametrize(
    "reply",
    [
        b"",  # no answer at all
        b"\x1b[50;200",  # missing terminator
        b"\x1b[ab;cdR",
        b"\x1b[" + b"1" * 100,  # runaway reply
    ],
)
def test_probe_fallback_fails(not_a_tty, reply):
    prober = GeometryProber(not_a_tty, FakeReader(reply), lambda bb: None)
    with pytest.raises(TerminalError):
        prober.probe_size()


def test_probe_fallback_on_pty(pty_pair):
    # A fresh pty has no size, so this exercises the real fallback path
    master, slave = pty_pair
    set_winsize(slave, 0, 0)
    with TerminalContext(fd_in=slave, fd_out=slave) as term:
        os.write(master, b"\x1b[50;200R")
        assert term.get_size() == (50, 200)
    assert os.read(master, 100) == PROBE
