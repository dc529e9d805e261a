"""The player's ship."""

from __future__ import annotations

from dataclasses import dataclass

START_X = 23
START_Y = 12
MIN_X = 1
MAX_X = 48


@dataclass
class Player:
    """Position of the ship at the bottom of the field."""

    x: int = START_X
    y: int = START_Y

    def reset(self) -> None:
        """Put the ship back at its starting position."""
        self.x = START_X
        self.y = START_Y

    def move_left(self) -> None:
        """Move one column left, stopping at the left wall."""
        if self.x > MIN_X:
            self.x -= 1

    def move_right(self) -> None:
        """Move one column right, stopping at the right wall."""
        if self.x < MAX_X:
            self.x += 1