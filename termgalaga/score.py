"""Current and best score tracking, with the best score kept in a file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_HIGHSCORE_FILE = Path("highscore.txt")
POINTS_PER_BUG = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Scoreboard:
    """Keeps the score of the running game and the best score seen so far."""

    path: Path = field(default=DEFAULT_HIGHSCORE_FILE)
    current: int = 0
    highest: int = 0

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def reset(self) -> None:
        """Start the current score again from zero."""
        self.current = 0

    def add(self, points: int) -> None:
        """Add points to the current score."""
        self.current += points

    def check(self) -> bool:
        """Raise the best score to the current one if it is higher.

        Returns True when the best score changed.
        """
        if self.current > self.highest:
            self.highest = self.current
            return True
        return False

    def save(self) -> None:
        """Write the best score to the score file, replacing its contents."""
        self.path.write_text(f"{self.highest}\n", encoding="utf-8")

    def load_highest(self) -> int:
        """Read the best score from the score file and return it.

        A file whose first token is not an integer leaves the best score as
        it was.  A missing file raises ``FileNotFoundError``.
        """
        text = self.path.read_text(encoding="utf-8")
        match = _LEADING_INT.match(text)
        if match:
            self.highest = int(match.group(1))
        return self.highest