import os
import time
import select

import pytest

from sota.term import InputReader, TerminalContext, TerminalError


def test_read_key(pty_pair):
    master, slave = pty_pair
    with TerminalContext(fd_in=slave, fd_out=slave) as term:
        os.write(master, b"\x11")
        assert term.reader.read_key() == b"\x11"

        # Byte by byte, no line buffering
        os.write(master, b"ab")
        assert term.reader.read_key() == b"a"
        assert term.reader.read_key() == b"b"


def test_carriage_return_is_not_translated(pty_pair):
    master, slave = pty_pair
    with TerminalContext(fd_in=slave, fd_out=slave) as term:
        os.write(master, b"\r")
        assert term.reader.read_key() == b"\r"


def test_control_keys_pass_through(pty_pair):
    master, slave = pty_pair
    with TerminalContext(fd_in=slave, fd_out=slave) as term:
        # Ctrl-C, Ctrl-Z, Ctrl-S, Ctrl-V
        os.write(master, b"\x03\x1a\x13\x16x")
        keys = [term.reader.read_key() for _ in range(5)]
        assert keys == [b"\x03", b"\x1a", b"\x13", b"\x16", b"x"]


def test_no_echo(pty_pair):
    master, slave = pty_pair
    with TerminalContext(fd_in=slave, fd_out=slave) as term:
        os.write(master, b"x")
        assert term.reader.read_key() == b"x"
        readable, _, _ = select.select([master], [], [], 0.2)
        assert not readable


def test_read_byte_times_out(pty_pair):
    master, slave = pty_pair
    with TerminalContext(fd_in=slave, fd_out=slave) as term:
        t0 = time.perf_counter()
        assert term.reader.read_byte() is None
        assert time.perf_counter() - t0 >= 0.05


def test_read_key_retries_after_timeout(pty_pair):
    master, slave = pty_pair
    reader = InputReader(slave)

    calls = []
    read_byte = reader.read_byte

    def counting_read_byte():
        calls.append(1)
        if len(calls) == 3:
            os.write(master, b"k")
        return read_byte()

    with TerminalContext(fd_in=slave, fd_out=slave):
        reader.read_byte = counting_read_byte
        assert reader.read_key() == b"k"
    assert len(calls) == 3


def test_read_error():
    r, w = os.pipe()
    os.close(r)
    os.close(w)
    reader = InputReader(r)
    with pytest.raises(TerminalError) as info:
        reader.read_byte()
    assert info.value.operation == "read"
    assert str(info.value) == "read: Bad file descriptor"
