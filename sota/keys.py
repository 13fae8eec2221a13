"""
Key helpers, and a little tool to show which bytes keys produce.
"""

import logging


logger = logging.getLogger("sota")


def ctrl_key(letter):
    """The byte that the terminal sends for Ctrl plus the given letter."""
    # Ctrl strips bits 5 and 6, so Ctrl-A..Ctrl-Z are 1..26
    return bytes([ord(letter) & 0x1F])


def is_control(c):
    """Whether the given byte (int or bytes) is a control character."""
    if isinstance(c, bytes):
        c = c[0]
    return c < 32 or c == 127


def describe_key(c):
    """Describe a key byte, e.g. "97 ('a')" or "17"."""
    value = c[0]
    if is_control(value):
        return f"{value}"
    else:
        return f"{value} ({chr(value)!r})"


def show_keys(reader, write, quit_key=None):
    """Print the value of each key pressed, until the quit key.

    Meant to run in raw mode, so lines end with "\\r\\n".
    """
    quit_key = quit_key or ctrl_key("q")
    logger.info("showing keys")
    while True:
        c = reader.read_key()
        if c == quit_key:
            break
        write(describe_key(c).encode() + b"\r\n")
