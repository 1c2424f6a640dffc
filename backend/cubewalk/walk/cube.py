from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

from cubewalk.errors import TopologyError
from cubewalk.walk.faces import CubeFace, NeighborTable, build_net, extract_faces
from cubewalk.walk.flat import start_pose
from cubewalk.walk.folding import fold_net
from cubewalk.walk.geometry import Direction, Point, Pose, Rotation, turn
from cubewalk.walk.scanner import Instruction, MapBlock, Move


@dataclass(slots=True)
class Cube:
    face_length: int
    faces: list[CubeFace]
    # Flat-map adjacency, kept apart from the folded CubeFace.neighbors.
    net: NeighborTable
    start: Pose

    def neighbor(self, face: int, edge: Direction) -> tuple[int, Direction]:
        """The face across ``edge`` of ``face`` and the edge it is entered through."""
        next_face = self.faces[face].neighbor(edge)
        for back_edge, back in zip(Direction, self.faces[next_face].neighbors):
            if back == face:
                return next_face, back_edge
        raise TopologyError(f"face {next_face} has no edge back to face {face}")

    def face_at(self, p: Point) -> int:
        for i, face in enumerate(self.faces):
            if face.contains(p):
                return i
        raise TopologyError(f"point ({p.x}, {p.y}) is on no face")

    def to_absolute(self, face: int, local: Point) -> Point:
        return local + self.faces[face].min


def fold(blocks: Sequence[MapBlock]) -> Cube:
    """Extract the six faces, then fold the net into a cube."""
    face_length, faces = extract_faces(blocks)
    net = build_net(faces)
    for face, row in zip(faces, fold_net(net)):
        face.neighbors = list(row)
    return Cube(face_length=face_length, faces=faces, net=net, start=start_pose(blocks))


def _remap(p: Point, turned: Rotation, entry: Direction, n: int) -> Point:
    last = n - 1
    if entry.is_horizontal():
        x = 0 if entry == Direction.LEFT else last
        if turned == Rotation.ZERO:
            y = p.y
        elif turned == Rotation.NINETY:
            y = last - p.x
        elif turned == Rotation.ONE_EIGHTY:
            y = last - p.y
        else:
            y = p.x
    else:
        y = 0 if entry == Direction.UP else last
        if turned == Rotation.ZERO:
            x = p.x
        elif turned == Rotation.NINETY:
            x = p.y
        elif turned == Rotation.ONE_EIGHTY:
            x = last - p.x
        else:
            x = last - p.y
    return Point(x, y)


def _exit_edge(p: Point, n: int) -> Optional[Direction]:
    if p.x < 0:
        return Direction.LEFT
    if p.x >= n:
        return Direction.RIGHT
    if p.y < 0:
        return Direction.UP
    if p.y >= n:
        return Direction.DOWN
    return None


def step_cube(cube: Cube, face: int, position: Point, facing: Direction) -> tuple[int, Point, Direction]:
    """One tile forward, crossing onto the neighbouring face if needed."""
    n = cube.face_length
    nxt = position + facing.delta()
    edge = _exit_edge(nxt, n)
    if edge is None:
        return face, nxt, facing

    next_face, entry = cube.neighbor(face, edge)
    next_facing = entry.inverse()
    turned = Rotation.difference(facing, next_facing)
    return next_face, _remap(position, turned, entry, n), next_facing


def walk_cube(cube: Cube, instructions: Iterable[Instruction]) -> Iterator[Pose]:
    """Yield the absolute pose after each instruction on the folded cube."""
    face = cube.face_at(cube.start.position)
    position = cube.start.position - cube.faces[face].min
    facing = cube.start.facing
    lap = 4 * cube.face_length

    for instruction in instructions:
        if isinstance(instruction, Move):
            steps = instruction.steps
            if steps > lap:
                # An unblocked lap ends on the start pose, and the first lap meets any wall.
                steps = lap + steps % lap
            for _ in range(steps):
                next_face, nxt, next_facing = step_cube(cube, face, position, facing)
                if nxt in cube.faces[next_face].walls:
                    break
                face, position, facing = next_face, nxt, next_facing
        else:
            facing = turn(facing, instruction.value)
        yield Pose(cube.to_absolute(face, position), facing)


def follow_cube(cube: Cube, instructions: Iterable[Instruction]) -> Pose:
    pose = cube.start
    for pose in walk_cube(cube, instructions):
        pass
    return pose
