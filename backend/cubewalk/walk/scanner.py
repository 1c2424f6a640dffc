from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from cubewalk.errors import MapFormatError
from cubewalk.walk.geometry import Point

OPEN = "."
WALL = "#"
PAD = " "
DIGITS = "0123456789"
# Longest step count a move may spell out, leading zeros aside.
MAX_MOVE_DIGITS = 18


@dataclass(frozen=True, slots=True)
class MapBlock:
    """A run of map rows sharing the same horizontal extent.

    ``min`` and ``max`` are both inclusive, in absolute map coordinates.
    """

    min: Point
    max: Point
    walls: frozenset[Point] = field(default_factory=frozenset)

    @property
    def width(self) -> int:
        return self.max.x - self.min.x + 1

    @property
    def height(self) -> int:
        return self.max.y - self.min.y + 1

    def covers_column(self, x: int) -> bool:
        return self.min.x <= x <= self.max.x


@dataclass(frozen=True, slots=True)
class Move:
    steps: int


class Rotate(Enum):
    LEFT = -1
    RIGHT = 1


Instruction = Union[Move, Rotate]


def split_input(text: str) -> tuple[str, str]:
    text = text.replace("\r\n", "\n").rstrip("\n")
    parts = text.split("\n\n", 1)
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise MapFormatError("input must be a map and an instruction line separated by a blank line")
    return parts[0], parts[1]


def parse_blocks(map_text: str) -> list[MapBlock]:
    blocks: list[MapBlock] = []
    start: Optional[tuple[int, int, int]] = None  # (y, x_min, x_max)
    walls: set[Point] = set()

    lines = map_text.replace("\r\n", "\n").split("\n")
    for y, line in enumerate(lines):
        line = line.rstrip()
        for x, ch in enumerate(line):
            if ch not in (OPEN, WALL, PAD):
                raise MapFormatError(f"invalid map character {ch!r} at row {y}, column {x}")

        tiles = line.lstrip(PAD)
        if not tiles:
            raise MapFormatError(f"map row {y} has no tiles")
        x_min = len(line) - len(tiles)
        x_max = len(line) - 1
        if PAD in tiles:
            raise MapFormatError(f"map row {y} has a gap inside its tiles")

        if start is not None and (start[1], start[2]) != (x_min, x_max):
            blocks.append(_close_block(start, y - 1, walls))
            start, walls = None, set()
        if start is None:
            start = (y, x_min, x_max)

        for x, ch in enumerate(tiles, start=x_min):
            if ch == WALL:
                walls.add(Point(x, y))

    if start is None:
        raise MapFormatError("map is empty")
    blocks.append(_close_block(start, len(lines) - 1, walls))
    return blocks


def _close_block(start: tuple[int, int, int], y_max: int, walls: set[Point]) -> MapBlock:
    y_min, x_min, x_max = start
    return MapBlock(min=Point(x_min, y_min), max=Point(x_max, y_max), walls=frozenset(walls))


def _move(digits: str) -> Move:
    significant = digits.lstrip("0")
    if len(significant) > MAX_MOVE_DIGITS:
        raise MapFormatError(f"move of {len(significant)} digits is too long (at most {MAX_MOVE_DIGITS})")
    return Move(int(significant or "0"))


def parse_instructions(text: str) -> list[Instruction]:
    instructions: list[Instruction] = []
    digits = ""
    for ch in text.strip():
        if ch in DIGITS:
            digits += ch
            continue
        if digits:
            instructions.append(_move(digits))
            digits = ""
        if ch == "L":
            instructions.append(Rotate.LEFT)
        elif ch == "R":
            instructions.append(Rotate.RIGHT)
        else:
            raise MapFormatError(f"invalid instruction character: {ch!r}")
    if digits:
        instructions.append(_move(digits))
    return instructions


def parse_input(text: str) -> tuple[list[MapBlock], list[Instruction]]:
    map_text, instruction_text = split_input(text)
    return parse_blocks(map_text), parse_instructions(instruction_text)
