"""
Keypress Handling
=================

Reads a single keystroke to choose between quitting (Escape) and starting
a new calculation (Enter).

On a TTY the terminal is switched to non-canonical, no-echo mode with
``termios`` so the key is seen without waiting for a newline; the previous
settings are always restored. When stdin is not a TTY, whole lines are read
instead.
"""

import io
import os
import sys
from enum import Enum
from typing import Optional, TextIO


ESCAPE = "\x1b"
ENTER_KEYS = ("\n", "\r")

PROMPT = "Press [Esc] to quit or [Enter] to restart... \n"


class KeyChoice(Enum):
    """Outcome of the restart prompt."""
    CONTINUE = "continue"
    QUIT = "quit"


def interpret_key(key: str) -> Optional[KeyChoice]:
    """
    Map one character to a choice.

    Returns:
    -------
    KeyChoice or None
        None for keys that mean neither quit nor restart.
    """
    if key == ESCAPE:
        return KeyChoice.QUIT
    if key in ENTER_KEYS:
        return KeyChoice.CONTINUE
    return None


def _stream_fd(stream) -> Optional[int]:
    try:
        return stream.fileno()
    except (AttributeError, io.UnsupportedOperation, OSError):
        return None


def _read_raw_choice(fd: int) -> KeyChoice:
    import termios

    old_settings = termios.tcgetattr(fd)
    new_settings = termios.tcgetattr(fd)
    new_settings[3] &= ~(termios.ICANON | termios.ECHO)

    termios.tcsetattr(fd, termios.TCSANOW, new_settings)
    try:
        while True:
            data = os.read(fd, 1)
            if not data:
                return KeyChoice.QUIT
            choice = interpret_key(data.decode("latin-1"))
            if choice is not None:
                return choice
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, old_settings)


def _read_line_choice(stream) -> KeyChoice:
    while True:
        line = stream.readline()
        if not line:
            return KeyChoice.QUIT
        for key in line:
            choice = interpret_key(key)
            if choice is not None:
                return choice


def wait_for_choice(
    stream: Optional[TextIO] = None,
    output: Optional[TextIO] = None
) -> KeyChoice:
    """
    Prompt for Escape (quit) or Enter (restart) and wait for the answer.

    Parameters:
    ----------
    stream : file-like, optional
        Input stream. Defaults to ``sys.stdin``.

    output : file-like, optional
        Where the prompt is written. Defaults to ``sys.stdout``.

    Returns:
    -------
    KeyChoice
        QUIT on Escape or end of input, CONTINUE on Enter.
    """
    if stream is None:
        stream = sys.stdin
    if output is None:
        output = sys.stdout

    output.write(PROMPT)
    output.flush()

    fd = _stream_fd(stream)
    if fd is not None and os.isatty(fd):
        return _read_raw_choice(fd)
    return _read_line_choice(stream)
