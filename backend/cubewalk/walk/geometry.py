from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True, slots=True)
class Point:
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def in_range(self, lo: "Point", hi: "Point") -> bool:
        return in_range(self, lo, hi)


def in_range(p: Point, lo: Point, hi: Point) -> bool:
    """Half-open containment: ``lo <= p < hi`` on both axes."""
    return lo.x <= p.x < hi.x and lo.y <= p.y < hi.y


class Direction(IntEnum):
    # Values double as the facing score of the password.
    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3

    def rotate_left(self) -> "Direction":
        return Direction((self - 1) % 4)

    def rotate_right(self) -> "Direction":
        return Direction((self + 1) % 4)

    def inverse(self) -> "Direction":
        return Direction((self + 2) % 4)

    def is_horizontal(self) -> bool:
        return self % 2 == 0

    def is_vertical(self) -> bool:
        return not self.is_horizontal()

    def delta(self) -> Point:
        return _DELTAS[self]


_DELTAS: dict[Direction, Point] = {
    Direction.RIGHT: Point(1, 0),
    Direction.DOWN: Point(0, 1),
    Direction.LEFT: Point(-1, 0),
    Direction.UP: Point(0, -1),
}


def turn(direction: Direction, turn_value: int) -> Direction:
    if turn_value not in (-1, 0, 1):
        raise ValueError("turn must be -1, 0, or 1")
    return Direction((direction + turn_value) % 4)


class Rotation(IntEnum):
    """A quarter-turn rotation of a face, counted counter-clockwise.

         0
     90     270
        180
    """

    ZERO = 0
    NINETY = 1
    ONE_EIGHTY = 2
    TWO_SEVENTY = 3

    def apply(self, direction: Direction) -> Direction:
        return Direction((direction - self) % 4)

    def rotate_left(self) -> "Rotation":
        return Rotation((self + 1) % 4)

    def mirror(self) -> "Rotation":
        return Rotation((self + 2) % 4)

    @classmethod
    def difference(cls, from_: Direction, to: Direction) -> "Rotation":
        """Number of left rotations that turn ``from_`` into ``to``."""
        return cls((from_ - to) % 4)


@dataclass(frozen=True, slots=True)
class Pose:
    position: Point
    facing: Direction
