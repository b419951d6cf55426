"""Helpers for waiting on the controlling terminal."""

from __future__ import annotations

import os
import sys
import termios
import tty
from typing import TextIO


def wait_for_keypress(stream: TextIO | None = None) -> None:
    """Block until a key is pressed. Returns immediately when ``stream`` is not a TTY."""
    stream = stream or sys.stdin
    if not stream.isatty():
        return
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        os.read(fd, 1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
