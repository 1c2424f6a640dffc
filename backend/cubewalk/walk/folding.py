"""Fold a flat cube net without building 3D coordinates.

Every face is taken in turn as the root and laid on the ground. A BFS over the
flat net then folds each newly reached face up around the edge it shares with
its parent, tracking only how the face is oriented:

* ``Flat`` faces lie parallel to the ground, either face up (the root's
  position) or face down (the lid). ``rotation`` says how the face's own edge
  directions map onto the root's.
* ``Standing`` faces form the walls. ``standing_on`` names the root edge the
  wall stands on, and ``facing`` names the face's own edge that points away
  from the root.

Whenever a fold leaves a face standing on root edge ``d``, that face is the
root's true neighbor across ``d``.

Direction arithmetic below is modulo 4 on ``Direction`` values. A face up
``Flat`` with rotation ``r`` maps its edge ``d`` onto root edge ``d - r``; a
face down one maps it onto ``2 - r - d``.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from cubewalk.errors import TopologyError
from cubewalk.walk.faces import FACE_COUNT, NeighborTable
from cubewalk.walk.geometry import Direction, Rotation
from cubewalk.util.log import logger


class Facing(Enum):
    FACE_UP = "face_up"
    FACE_DOWN = "face_down"


@dataclass(frozen=True, slots=True)
class Flat:
    facing: Facing = Facing.FACE_UP
    rotation: Rotation = Rotation.ZERO


@dataclass(frozen=True, slots=True)
class Standing:
    standing_on: Direction
    facing: Direction


RotatingCubeFace = Union[Flat, Standing]

ROOT = Flat(Facing.FACE_UP, Rotation.ZERO)


def _dir(value: int) -> Direction:
    return Direction(value % 4)


def rotate(state: RotatingCubeFace, d: Direction) -> RotatingCubeFace:
    """Fold ``state`` over its own edge ``d``."""
    if isinstance(state, Flat):
        r = state.rotation
        if state.facing is Facing.FACE_UP:
            return Standing(_dir(d - r), d)
        return Standing(_dir(2 - r - d), d.inverse())

    if isinstance(state, Standing):
        s, f = state.standing_on, state.facing
        if d == f:
            # Over the top edge: the face becomes the lid.
            return Flat(Facing.FACE_DOWN, Rotation((-s - f) % 4))
        if d == f.inverse():
            return Flat(Facing.FACE_UP, Rotation((f - s) % 4))
        # Around a vertical cube edge onto the next wall.
        return Standing(_dir(s + d - f), f)

    raise TypeError(f"not a cube face state: {state!r}")


def fold_from(net: NeighborTable, root: int) -> list[Optional[int]]:
    """True neighbors of ``root``, found by folding the net around it."""
    folded: list[Optional[int]] = [None] * 4
    for direction in Direction:
        folded[direction] = net[root][direction]

    state: dict[int, RotatingCubeFace] = {root: ROOT}
    queue = deque([root])

    while queue:
        position = queue.popleft()
        current = state[position]
        for edge in Direction:
            neighbor = net[position][edge]
            if neighbor is None or neighbor in state:
                continue

            next_state = rotate(current, edge)
            if isinstance(next_state, Standing):
                folded[next_state.standing_on] = neighbor

            state[neighbor] = next_state
            queue.append(neighbor)

    logger.debug("folded face %d: %s -> %s", root, state, folded)
    return folded


def fold_net(net: NeighborTable) -> list[list[int]]:
    """Cube neighbor table for every face, checked for consistency."""
    if len(net) != FACE_COUNT:
        raise TopologyError(f"expected {FACE_COUNT} faces, found {len(net)}")

    table: list[list[int]] = []
    for i in range(len(net)):
        folded = fold_from(net, i)
        row: list[int] = []
        for direction in Direction:
            neighbor = folded[direction]
            if neighbor is None:
                raise TopologyError(f"missing neighbor on {direction.name} edge for face {i}")
            row.append(neighbor)
        table.append(row)

    check_neighbors(table)
    return table


def check_neighbors(table: list[list[int]]) -> None:
    for i, row in enumerate(table):
        if i in row or len(set(row)) != 4:
            raise TopologyError(f"face {i} folds onto inconsistent neighbors {row}")
        for direction, j in zip(Direction, row):
            if i not in table[j]:
                raise TopologyError(
                    f"face {i} reaches face {j} over its {direction.name} edge, but not the reverse"
                )
