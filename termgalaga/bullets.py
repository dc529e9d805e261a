"""Shots fired by the player and by the bugs."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Generic, TypeVar

FIELD_BOTTOM = 13


class Contact(IntEnum):
    """Whether a player's shot has hit something."""

    NONE = 0
    HIT = 1
    EXPLODED = 2


@dataclass
class Bullet:
    """A shot travelling up from the player."""

    x: int
    y: int
    contact: Contact = Contact.NONE


@dataclass
class EnemyBullet:
    """A shot travelling down from a bug."""

    x: int
    y: int


_T = TypeVar("_T")


class _Volley(Generic[_T]):
    def __init__(self) -> None:
        self._shots: list[_T] = []

    def __iter__(self) -> Iterator[_T]:
        return iter(list(self._shots))

    def __len__(self) -> int:
        return len(self._shots)


class PlayerShots(_Volley[Bullet]):
    """The player's shots in flight, newest first."""

    def fire(self, x: int, y: int) -> Bullet:
        """Fire a shot from the ship at (x, y); it starts one row above."""
        bullet = Bullet(x, y - 1)
        self._shots.insert(0, bullet)
        return bullet

    def advance(self) -> list[Bullet]:
        """Move every shot up one row and return those that left the field.

        A shot whose explosion has been shown leaves on this move.
        """
        gone: list[Bullet] = []
        kept: list[Bullet] = []
        for bullet in self._shots:
            if bullet.contact is Contact.EXPLODED:
                bullet.y = 0
            bullet.y -= 1
            (gone if bullet.y < 0 else kept).append(bullet)
        self._shots = kept
        return gone

    def clear(self) -> None:
        """Remove every shot."""
        self._shots.clear()


class EnemyShots(_Volley[EnemyBullet]):
    """The bugs' shots in flight, newest first."""

    def fire(self, x: int, y: int) -> EnemyBullet:
        """Fire a shot from (x, y); it starts one row below."""
        bullet = EnemyBullet(x, y + 1)
        self._shots.insert(0, bullet)
        return bullet

    def advance(self) -> list[EnemyBullet]:
        """Move every shot down one row and return those that left the field."""
        gone: list[EnemyBullet] = []
        kept: list[EnemyBullet] = []
        for bullet in self._shots:
            bullet.y += 1
            (gone if bullet.y > FIELD_BOTTOM else kept).append(bullet)
        self._shots = kept
        return gone

    def clear(self) -> None:
        """Remove every shot."""
        self._shots.clear()