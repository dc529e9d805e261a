"""The enemy swarm: how bugs enter, where they settle and how they dive."""

from __future__ import annotations

import random
from collections.abc import Iterator, MutableSequence
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache

# Home slot of the first bug in each row of seven; the rest sit to its right.
HOME_X = (6, 33, 8, 8, 21, 26, 3, 37, 33, 21, 20, 39, 14)
HOME_Y = (8, 5, 5, 6, 7, 3, 3, 8, 6, 5, 2, 3, 3)

# Entry flight paths, one point per move.
PATH_X1 = (
    1, 2, 3, 4, 5, 6, 6, 7, 8, 9, 9, 10, 11, 12, 13, 14, 14,
    13, 12, 11, 10, 10, 9, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17,
)
PATH_Y1 = (
    0, 0, 0, 0, 1, 1, 2, 3, 4, 4, 5, 5, 5, 5, 4, 3, 2,
    1, 1, 2, 2, 3, 4, 5, 6, 6, 6, 6, 5, 5, 5, 6, 5,
)
PATH_X2 = (
    48, 47, 46, 45, 44, 43, 42, 41, 40, 39, 38, 37, 36,
    35, 34, 33, 32, 32, 33, 34, 35, 35, 34, 33, 32, 31,
)
PATH_Y2 = (
    0, 1, 2, 3, 3, 3, 2, 2, 3, 4, 5, 5, 5,
    4, 4, 3, 3, 2, 1, 1, 2, 3, 4, 4, 5, 5,
)

MIRROR_WIDTH = 49
BOTTOM_ROW = 13
DIVE_AFTER = 100
BUGS_PER_ROW = 7
MAX_BUGS = len(HOME_X) * BUGS_PER_ROW

_FIXED_SIDE_LIMIT = 63
_FIXED_PATTERN_LIMIT = 56


class Side(IntEnum):
    """The side of the field a bug enters from."""

    LEFT = 0
    RIGHT = 1


class FlyPattern(IntEnum):
    """Which of the two entry paths a bug follows."""

    LEFT = 0
    RIGHT = 1


class Stage(IntEnum):
    """The phases of a bug's life."""

    ENTERING = 0
    HOMING = 1
    HOLDING = 2
    DIVING = 3


def _pick(rng: random.Random | None) -> int:
    return rng.randrange(2) if rng is not None else random.randrange(2)


def choose_spawn_side(bug_id: int, rng: random.Random | None = None) -> Side:
    """Side a bug enters from: fixed for the first rows, random after."""
    if bug_id < _FIXED_SIDE_LIMIT:
        return Side.LEFT if bug_id % 14 < 7 else Side.RIGHT
    return Side(_pick(rng))


def choose_fly_pattern(bug_id: int, rng: random.Random | None = None) -> FlyPattern:
    """Entry path a bug follows: fixed for the first rows, random after."""
    if bug_id < _FIXED_PATTERN_LIMIT:
        return FlyPattern.LEFT if bug_id % 28 < 14 else FlyPattern.RIGHT
    return FlyPattern(_pick(rng))


def home_position(bug_id: int) -> tuple[int, int]:
    """The (x, y) slot a bug settles into once it has entered."""
    if not 0 <= bug_id < MAX_BUGS:
        raise ValueError(f"bug id {bug_id} is outside 0..{MAX_BUGS - 1}")
    row, column = divmod(bug_id, BUGS_PER_ROW)
    return HOME_X[row] + column, HOME_Y[row]


@lru_cache(maxsize=None)
def _entry_path(side: Side, pattern: FlyPattern) -> tuple[tuple[int, int], ...]:
    if pattern is FlyPattern.LEFT:
        xs, ys = PATH_X1, PATH_Y1
    else:
        xs, ys = PATH_X2, PATH_Y2
    if (side is Side.LEFT) != (pattern is FlyPattern.LEFT):
        xs = tuple(MIRROR_WIDTH - x for x in xs)
    return tuple(zip(xs, ys))


def _toward(position: int, target: int) -> int:
    return (target > position) - (target < position)


@dataclass
class Bug:
    """One enemy and where it is in its flight."""

    bug_id: int
    side: Side
    pattern: FlyPattern
    x: int = 0
    y: int = 0
    counter: int = 0
    stage: Stage = Stage.ENTERING

    def _advance(self, player_x: int) -> None:
        if self.stage is Stage.ENTERING:
            path = _entry_path(self.side, self.pattern)
            if self.counter >= len(path):
                self.stage = Stage.HOMING
            else:
                self.x, self.y = path[self.counter]
                self.counter += 1
        elif self.stage is Stage.HOMING:
            home_x, home_y = home_position(self.bug_id)
            self.x += _toward(self.x, home_x)
            self.y += _toward(self.y, home_y)
            if (self.x, self.y) == (home_x, home_y):
                self.stage = Stage.HOLDING
        elif self.stage is Stage.HOLDING:
            self.counter += 1
            if self.counter == DIVE_AFTER:
                self.stage = Stage.DIVING
        else:
            self.counter += 1
            self.y += 1
            self.x += _toward(self.x, player_x)


class Swarm:
    """All bugs on the field, newest first."""

    def __init__(self) -> None:
        self._bugs: list[Bug] = []

    def __iter__(self) -> Iterator[Bug]:
        return iter(list(self._bugs))

    def __len__(self) -> int:
        return len(self._bugs)

    def spawn(self, bug_id: int, rng: random.Random | None = None) -> Bug:
        """Add a new bug at the top-left corner and return it."""
        bug = Bug(
            bug_id=bug_id,
            side=choose_spawn_side(bug_id, rng),
            pattern=choose_fly_pattern(bug_id, rng),
        )
        self._bugs.insert(0, bug)
        return bug

    def move(self, player_x: int, spawn_map: MutableSequence[int]) -> list[Bug]:
        """Move every bug one step; bugs that fall off the bottom are removed.

        The slot of each removed bug in ``spawn_map`` is set to 0.  Returns
        the removed bugs.
        """
        fallen: list[Bug] = []
        for bug in list(self._bugs):
            bug._advance(player_x)
            if bug.y > BOTTOM_ROW:
                spawn_map[bug.bug_id] = 0
                self.kill(bug.bug_id)
                fallen.append(bug)
        return fallen

    def kill(self, bug_id: int) -> Bug | None:
        """Remove the first bug with this id and return it, or None."""
        for index, bug in enumerate(self._bugs):
            if bug.bug_id == bug_id:
                del self._bugs[index]
                return bug
        return None

    def clear(self) -> None:
        """Remove every bug."""
        self._bugs.clear()