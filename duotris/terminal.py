"""Drawing on a text terminal and reading single key presses."""

from __future__ import annotations

import os
import select
import sys
from collections import deque
from collections.abc import Iterable
from typing import TextIO

from .piece import EMPTY_CELL, FILLED_CELL

try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[2J\x1b[H"
FILLED_STYLE = "\x1b[100m"
RESET_STYLE = "\x1b[0m"


class Terminal:
    """A character screen addressed by column and row, with unbuffered keys.

    ``keys`` replaces the keyboard with a script of key presses; a ``None``
    entry in the script marks a moment at which no key is waiting.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        keys: Iterable[str | None] | None = None,
    ) -> None:
        self._output = output if output is not None else sys.stdout
        self._script: deque[str | None] | None = deque(keys) if keys is not None else None
        self._fd: int | None = None
        self._saved_mode: list | None = None

    def __enter__(self) -> Terminal:
        if self._script is None and msvcrt is None and termios is not None:
            if sys.stdin.isatty():
                self._fd = sys.stdin.fileno()
                self._saved_mode = termios.tcgetattr(self._fd)
                tty.setcbreak(self._fd)
        self.write(HIDE_CURSOR)
        return self

    def __exit__(self, *args: object) -> None:
        self.write(RESET_STYLE + SHOW_CURSOR)
        if self._saved_mode is not None and self._fd is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_mode)
        self._saved_mode = None
        self._fd = None

    def goto(self, x: int, y: int) -> None:
        """Move the cursor to column ``x``, row ``y`` (both from 0)."""
        self.write(f"\x1b[{y + 1};{x + 1}H")

    def draw_point(self, x: int, y: int, filled: bool) -> None:
        """Draw a filled or an empty cell at ``(x, y)``."""
        self.goto(x, y)
        if filled:
            self.write(f"{FILLED_STYLE}{FILLED_CELL}{RESET_STYLE}")
        else:
            self.write(f"{RESET_STYLE}{EMPTY_CELL}")

    def clear(self) -> None:
        """Clear the screen and put the cursor in the top left corner."""
        self.write(CLEAR_SCREEN)

    def write(self, text: str) -> None:
        """Write ``text`` at the cursor."""
        self._output.write(text)
        self._output.flush()

    def key_available(self) -> bool:
        """Whether a key press is waiting to be read."""
        if self._script is not None:
            if self._script and self._script[0] is None:
                self._script.popleft()
                return False
            return bool(self._script)
        if msvcrt is not None:
            return bool(msvcrt.kbhit())
        ready, _, _ = select.select([sys.stdin], [], [], 0)
        return bool(ready)

    def read_key(self) -> str:
        """Wait for a key press and return its character.

        Raises EOFError when no more input can arrive.
        """
        if self._script is not None:
            while self._script:
                key = self._script.popleft()
                if key is not None:
                    return key
            raise EOFError("no more keys")
        if msvcrt is not None:
            return msvcrt.getwch()
        if self._fd is not None:
            data = os.read(self._fd, 1)
            if not data:
                raise EOFError("no more keys")
            return data.decode("latin-1")
        key = sys.stdin.read(1)
        if not key:
            raise EOFError("no more keys")
        return key