"""Switching the terminal to unbuffered, optionally silent, key input."""

from __future__ import annotations

import termios
from types import TracebackType

_LFLAG = 3


class RawTerminal:
    """Turns off line buffering, and echo unless asked for, while in use.

    Entering reads the current settings of the terminal on ``fd`` and
    switches it to non-canonical mode, so keys arrive as soon as they are
    pressed.  Leaving puts the saved settings back.  ``termios.error`` is
    raised on entry when ``fd`` is not a terminal.
    """

    def __init__(self, fd: int = 0, echo: bool = False) -> None:
        self.fd = fd
        self.echo = echo
        self._saved: list | None = None

    def __enter__(self) -> RawTerminal:
        saved = termios.tcgetattr(self.fd)
        attrs = termios.tcgetattr(self.fd)
        attrs[_LFLAG] &= ~termios.ICANON
        if self.echo:
            attrs[_LFLAG] |= termios.ECHO
        else:
            attrs[_LFLAG] &= ~termios.ECHO
        termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        self._saved = saved
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSANOW, self._saved)
            self._saved = None