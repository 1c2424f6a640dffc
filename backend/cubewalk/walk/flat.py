from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from cubewalk.errors import MapFormatError
from cubewalk.walk.geometry import Direction, Point, Pose, turn
from cubewalk.walk.scanner import Instruction, MapBlock, Move


def start_pose(blocks: Sequence[MapBlock]) -> Pose:
    """Leftmost open tile of the top row, facing right."""
    if not blocks:
        raise MapFormatError("map is empty")
    top = blocks[0]
    for x in range(top.min.x, top.max.x + 1):
        p = Point(x, top.min.y)
        if p not in top.walls:
            return Pose(p, Direction.RIGHT)
    raise MapFormatError("top row of the map has no open tile")


def _step(blocks: Sequence[MapBlock], index: int, position: Point, facing: Direction) -> tuple[int, Point]:
    block = blocks[index]
    nxt = position + facing.delta()

    # Rows wrap inside their own block.
    if nxt.x < block.min.x:
        nxt = Point(block.max.x, nxt.y)
    elif nxt.x > block.max.x:
        nxt = Point(block.min.x, nxt.y)

    # Columns may continue into the neighbouring block, or wrap inside this one.
    if nxt.y < block.min.y:
        prev_index = (index - 1) % len(blocks)
        if blocks[prev_index].covers_column(position.x):
            index = prev_index
        nxt = Point(nxt.x, blocks[index].max.y)
    elif nxt.y > block.max.y:
        next_index = (index + 1) % len(blocks)
        if blocks[next_index].covers_column(position.x):
            index = next_index
        nxt = Point(nxt.x, blocks[index].min.y)

    return index, nxt


def _advance(
    blocks: Sequence[MapBlock], index: int, position: Point, facing: Direction, steps: int
) -> tuple[int, Point]:
    """Up to ``steps`` tiles forward, skipping whole trips round a loop."""
    # Facing is fixed during a move, so the position alone determines what follows.
    seen: dict[Point, int] = {}
    taken = 0
    while taken < steps:
        if position in seen:
            steps = taken + (steps - taken) % (taken - seen[position])
            seen.clear()
            continue
        seen[position] = taken
        next_index, nxt = _step(blocks, index, position, facing)
        if nxt in blocks[next_index].walls:
            break
        index, position = next_index, nxt
        taken += 1
    return index, position


def walk_flat(blocks: Sequence[MapBlock], instructions: Iterable[Instruction]) -> Iterator[Pose]:
    """Yield the pose after each instruction on the unfolded map."""
    pose = start_pose(blocks)
    position, facing = pose.position, pose.facing
    index = 0

    for instruction in instructions:
        if isinstance(instruction, Move):
            index, position = _advance(blocks, index, position, facing, instruction.steps)
        else:
            facing = turn(facing, instruction.value)
        yield Pose(position, facing)


def follow_flat(blocks: Sequence[MapBlock], instructions: Iterable[Instruction]) -> Pose:
    pose = start_pose(blocks)
    for pose in walk_flat(blocks, instructions):
        pass
    return pose
