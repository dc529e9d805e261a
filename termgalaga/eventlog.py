"""A small timestamped event log written to a text file."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

DEFAULT_LOG_FILE = Path("log.txt")
TIME_FORMAT = "%d/%m/%Y %X %Z"

_RULE = "*" * 97
_SIDE = "*" * 36


def _now() -> datetime:
    return datetime.now().astimezone()


def timestamp(moment: datetime) -> str:
    """Format a moment the way every log entry is stamped."""
    return moment.strftime(TIME_FORMAT)


def format_message(
    message: str,
    numbers: Sequence[float] = (),
    strings: Sequence[str] = (),
) -> str:
    """Expand placeholders in a log message.

    ``%d`` takes the next number with no decimals, ``%f`` the next number
    with two decimals, ``%c`` and ``%s`` the next string; the two kinds are
    counted separately.  A backslash followed by ``n`` becomes a newline.
    Placeholders with no value left, unknown ``%`` or backslash sequences,
    and a lone trailing ``%`` or backslash are left out of the result.
    """
    parts: list[str] = []
    number_index = 0
    string_index = 0
    chars = iter(message)
    for char in chars:
        if char == "%":
            spec = next(chars, "")
            if spec in ("d", "f"):
                if number_index < len(numbers):
                    value = float(numbers[number_index])
                    parts.append(f"{value:.0f}" if spec == "d" else f"{value:.2f}")
                number_index += 1
            elif spec in ("c", "s"):
                if string_index < len(strings):
                    parts.append(str(strings[string_index]))
                string_index += 1
        elif char == "\\":
            if next(chars, "") == "n":
                parts.append("\n")
        else:
            parts.append(char)
    return "".join(parts)


@dataclass
class EventLog:
    """Appends timestamped messages to a log file."""

    path: Path = field(default=DEFAULT_LOG_FILE)
    clock: Callable[[], datetime] = field(default=_now)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def create(self) -> None:
        """Empty the log file and write its header."""
        stamp = timestamp(self.clock())
        header = [
            _RULE,
            f"{_SIDE}     Beginning of Log    {_SIDE}",
            f"{_SIDE}       Log created       {_SIDE}",
            f"{_SIDE} {stamp} {_SIDE}",
            _RULE,
        ]
        with self.path.open("w", encoding="utf-8") as handle:
            handle.write("\n".join(header) + "\n")

    def log(
        self,
        message: str,
        numbers: Sequence[float] = (),
        strings: Sequence[str] = (),
    ) -> None:
        """Append one timestamped entry, expanding placeholders in it."""
        stamp = timestamp(self.clock())
        text = format_message(message, numbers, strings)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{stamp}: {text}\n")