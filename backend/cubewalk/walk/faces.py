from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from cubewalk.errors import TopologyError
from cubewalk.walk.geometry import Direction, Point
from cubewalk.walk.scanner import MapBlock

FACE_COUNT = 6

# One row per face, indexed by Direction; None where the net has an open edge.
NeighborTable = list[list[Optional[int]]]


@dataclass(slots=True)
class CubeFace:
    """One square face of the net.

    ``min`` is inclusive and ``max`` exclusive, both in absolute map
    coordinates. ``walls`` are face-local (``wall - min``).
    """

    min: Point
    max: Point
    walls: frozenset[Point]
    neighbors: list[Optional[int]] = field(default_factory=lambda: [None] * 4)

    def contains(self, p: Point) -> bool:
        return p.in_range(self.min, self.max)

    def neighbor(self, edge: Direction) -> int:
        index = self.neighbors[edge]
        if index is None:
            raise TopologyError(f"face has no neighbor on its {edge.name} edge")
        return index


def face_length_of(blocks: Sequence[MapBlock]) -> int:
    if not blocks:
        raise TopologyError(f"expected {FACE_COUNT} faces, found 0")
    length = min(block.height for block in blocks)
    for i, block in enumerate(blocks):
        if block.width % length or block.height % length:
            raise TopologyError(
                f"block {i} is {block.width}x{block.height}, not a multiple of face length {length}"
            )
    return length


def extract_faces(blocks: Sequence[MapBlock]) -> tuple[int, list[CubeFace]]:
    """Slice every block into ``length x length`` faces, row-major within a block."""
    length = face_length_of(blocks)
    size = Point(length, length)
    faces: list[CubeFace] = []
    for block in blocks:
        for j in range(block.height // length):
            for i in range(block.width // length):
                lo = Point(block.min.x + i * length, block.min.y + j * length)
                hi = lo + size
                walls = frozenset(w - lo for w in block.walls if w.in_range(lo, hi))
                faces.append(CubeFace(min=lo, max=hi, walls=walls))

    if len(faces) != FACE_COUNT:
        raise TopologyError(f"expected {FACE_COUNT} faces, found {len(faces)}")
    return length, faces


def _probe(face: CubeFace, direction: Direction) -> Point:
    if direction == Direction.RIGHT:
        return Point(face.max.x, face.min.y)
    if direction == Direction.DOWN:
        return Point(face.min.x, face.max.y)
    if direction == Direction.LEFT:
        return Point(face.min.x - 1, face.min.y)
    return Point(face.min.x, face.min.y - 1)


def build_net(faces: Sequence[CubeFace]) -> NeighborTable:
    """Neighbors of each face as laid out flat in the map, without folding."""
    net: NeighborTable = [[None] * 4 for _ in faces]
    for i, face in enumerate(faces):
        for direction in Direction:
            if net[i][direction] is not None:
                continue
            probe = _probe(face, direction)
            for j, other in enumerate(faces):
                if other.contains(probe):
                    net[i][direction] = j
                    net[j][direction.inverse()] = i
                    break
    return net
