import pytest

from cubewalk.errors import TopologyError
from cubewalk.walk.faces import build_net, extract_faces, face_length_of
from cubewalk.walk.geometry import Point
from cubewalk.walk.scanner import parse_blocks

from conftest import EXAMPLE_MAP, NETS, render_net, rotate_pattern


def test_example_faces():
    length, faces = extract_faces(parse_blocks(EXAMPLE_MAP))
    assert length == 4
    assert [f.min for f in faces] == [
        Point(8, 0),
        Point(0, 4),
        Point(4, 4),
        Point(8, 4),
        Point(8, 8),
        Point(12, 8),
    ]
    assert all(f.max == f.min + Point(4, 4) for f in faces)
    assert faces[0].walls == {Point(3, 0), Point(1, 1), Point(0, 2)}
    assert faces[5].walls == {Point(1, 1), Point(2, 3)}


def test_example_net():
    _, faces = extract_faces(parse_blocks(EXAMPLE_MAP))
    assert build_net(faces) == [
        [None, 3, None, None],
        [2, None, None, None],
        [3, None, 1, None],
        [None, 4, 2, 0],
        [5, None, None, 3],
        [None, None, 4, None],
    ]


def test_faces_start_without_neighbors():
    _, faces = extract_faces(parse_blocks(EXAMPLE_MAP))
    assert all(f.neighbors == [None] * 4 for f in faces)


def test_face_length_is_smallest_block_height():
    # Three stacked faces share one block three faces tall.
    rows = rotate_pattern(NETS["1-4-1 a"])
    blocks = parse_blocks(render_net(rows, 2))
    assert max(b.height for b in blocks) == 6
    assert face_length_of(blocks) == 2
    _, faces = extract_faces(blocks)
    assert len(faces) == 6


@pytest.mark.parametrize("row, found", [(".....", 5), (".......", 7), ("..", 2)])
def test_wrong_face_count(row, found):
    with pytest.raises(TopologyError, match=f"expected 6 faces, found {found}"):
        extract_faces(parse_blocks(row))


def test_block_not_divisible_by_face_length():
    with pytest.raises(TopologyError, match="not a multiple"):
        extract_faces(parse_blocks("...\n..."))
