"""One game of bugs against the ship: spawning, movement, collisions, scoring."""

from __future__ import annotations

import random
import threading

from termgalaga.bugs import MAX_BUGS, Bug, Swarm
from termgalaga.bullets import Bullet, Contact, EnemyShots, PlayerShots
from termgalaga.eventlog import EventLog
from termgalaga.player import Player
from termgalaga.score import POINTS_PER_BUG, Scoreboard

ROWS = 13
FIELD_WIDTH = 50
WALL = "H"
START_DIFFICULTY = 7
DIFFICULTY_PERIOD = 1333
FRAME_WRAP = 48
SPAWN_WINDOW = 13
BUG_ROWS = 13

PLAYER_SYMBOL = "^"
SHOT_SYMBOL = "."
ENEMY_SHOT_SYMBOL = "!"
HIT_SYMBOL = "x"

_EXPLOSION = (
    (-1, -1, "\\"), (-1, 0, "|"), (-1, 1, "/"),
    (0, -1, ">"), (0, 0, "X"), (0, 1, "<"),
    (1, -1, "/"), (1, 0, "|"), (1, 1, "\\"),
)


def difficulty_of_game(difficulty: int, progress: int) -> int:
    """Difficulty for this point of the game; lower is harder.

    It drops by one on every multiple of the difficulty period, never below 1.
    """
    if difficulty > 1 and progress % DIFFICULTY_PERIOD == 0:
        return difficulty - 1
    return difficulty


def max_spawn(level: int) -> int:
    """Length of the spawn cycle, and the enemy fire interval, for a level."""
    return 7 * level - 1


def _bug_symbol(bug_id: int) -> str:
    if bug_id < 21:
        return "M"
    if bug_id < 42:
        return "T"
    if bug_id < 70:
        return "Y"
    return "V"


def _empty_field() -> list[list[str]]:
    row = WALL + " " * (FIELD_WIDTH - 2) + WALL
    return [list(row) for _ in range(ROWS)]


class Game:
    """The state of a running game, advanced one frame at a time."""

    def __init__(
        self,
        rng: random.Random | None = None,
        scoreboard: Scoreboard | None = None,
        log: EventLog | None = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.scoreboard = scoreboard if scoreboard is not None else Scoreboard()
        self.log = log
        self.player = Player()
        self.swarm = Swarm()
        self.shots = PlayerShots()
        self.enemy_shots = EnemyShots()
        self.spawn_map = [0] * MAX_BUGS
        self.frame = 0
        self.difficulty = START_DIFFICULTY
        self.progress = 1
        self.spawn_frequency = max_spawn(difficulty_of_game(self.difficulty, self.progress))
        self.next_bug_id = self.rng.randrange(BUG_ROWS) * 7
        self._lock = threading.Lock()
        self._field = _empty_field()
        self._draw(self._field, PLAYER_SYMBOL, self.player.y, self.player.x)

    def reset(self) -> None:
        """Clear the field and start a new game with a fresh score."""
        with self._lock:
            self.swarm.clear()
            self.shots.clear()
            self.enemy_shots.clear()
            self.scoreboard.reset()
            self.player.reset()
            self.spawn_map = [0] * MAX_BUGS
            self.spawn_frequency = max_spawn(
                difficulty_of_game(self.difficulty, self.progress)
            )
            self.next_bug_id = self.rng.randrange(MAX_BUGS)
            self.frame = 0
            self.progress = 1
            self.difficulty = START_DIFFICULTY
            self._field = _empty_field()
            self._draw(self._field, PLAYER_SYMBOL, self.player.y, self.player.x)

    def move_left(self) -> None:
        """Move the ship one column left."""
        with self._lock:
            self.player.move_left()

    def move_right(self) -> None:
        """Move the ship one column right."""
        with self._lock:
            self.player.move_right()

    def fire(self) -> Bullet:
        """Fire a shot from the ship."""
        with self._lock:
            return self.shots.fire(self.player.x, self.player.y)

    def board(self) -> list[str]:
        """The field as drawn by the last frame, one string per row."""
        with self._lock:
            return ["".join(row) for row in self._field]

    def step(self) -> bool:
        """Play one frame. Returns True when the ship was hit."""
        with self._lock:
            field = _empty_field()
            self._field = field
            if self.frame % 3 == 0:
                self._spawn_wave()
                self.swarm.move(self.player.x, self.spawn_map)
                self.spawn_frequency += 1
            if self.frame % 2 == 0:
                self.shots.advance()
            if self._resolve_bug_collisions(field):
                return True
            for bug in self.swarm:
                if 0 < bug.x < FIELD_WIDTH and 0 <= bug.y < ROWS:
                    field[bug.y][bug.x] = _bug_symbol(bug.bug_id)
            self._draw_shots(field)
            if self.progress % max_spawn(self.difficulty) == 0:
                self._enemy_fire()
            if self.frame % 2 == 0:
                self.enemy_shots.advance()
            for shot in self.enemy_shots:
                if (shot.x, shot.y) == (self.player.x, self.player.y):
                    return True
                self._draw(field, ENEMY_SHOT_SYMBOL, shot.y, shot.x)
            self._draw(field, PLAYER_SYMBOL, self.player.y, self.player.x)
            self.frame += 1
            self.progress += 1
            if self.frame >= FRAME_WRAP:
                self.frame = 0
            limit = max_spawn(difficulty_of_game(self.difficulty, self.progress))
            if self.spawn_frequency > limit + 1:
                self.spawn_frequency = 1
            return False

    def _spawn_wave(self) -> None:
        limit = max_spawn(difficulty_of_game(self.difficulty, self.progress))
        if limit <= 0 or self.spawn_frequency % limit >= SPAWN_WINDOW:
            return
        if not 0 <= self.next_bug_id < MAX_BUGS:
            self.next_bug_id = 0
        taken = 0
        while self.spawn_map[self.next_bug_id] == 1 and taken != MAX_BUGS:
            taken += 1
            self.next_bug_id = (self.next_bug_id + 1) % MAX_BUGS
        if taken < MAX_BUGS - 1:
            self.swarm.spawn(self.next_bug_id, self.rng)
            self.spawn_map[self.next_bug_id] = 1

    def _resolve_bug_collisions(self, field: list[list[str]]) -> bool:
        for bug in self.swarm:
            shot = next(
                (s for s in self.shots if (s.x, s.y) == (bug.x, bug.y)), None
            )
            if shot is not None:
                self._kill(bug)
                shot.contact = Contact.HIT
                self._draw(field, HIT_SYMBOL, shot.y, shot.x)
                self.scoreboard.add(POINTS_PER_BUG)
                continue
            if (bug.x, bug.y) == (self.player.x, self.player.y):
                return True
        return False

    def _kill(self, bug: Bug) -> None:
        if self.log is not None:
            self.log.log("Killed bug (bug_id: %d)", [bug.bug_id])
        self.spawn_map[bug.bug_id] = 0
        self.swarm.kill(bug.bug_id)

    def _draw_shots(self, field: list[list[str]]) -> None:
        for shot in self.shots:
            if shot.contact is Contact.HIT:
                for dy, dx, symbol in _EXPLOSION:
                    self._draw(field, symbol, shot.y + dy, shot.x + dx)
                shot.contact = Contact.EXPLODED
            elif 0 <= shot.y < ROWS:
                self._draw(field, SHOT_SYMBOL, shot.y, shot.x)

    def _enemy_fire(self) -> None:
        spawned = [bug_id for bug_id, flag in enumerate(self.spawn_map) if flag == 1]
        if not spawned:
            return
        spot = self.rng.choice(spawned)
        for bug in self.swarm:
            if bug.bug_id == spot:
                self.enemy_shots.fire(bug.x, bug.y + 1)
                break

    @staticmethod
    def _draw(field: list[list[str]], symbol: str, y: int, x: int) -> None:
        if 0 <= y < ROWS and 0 <= x < FIELD_WIDTH:
            field[y][x] = symbol