import pytest

from cubewalk.errors import MapFormatError
from cubewalk.walk.geometry import Point
from cubewalk.walk.scanner import Move, Rotate, parse_blocks, parse_input, parse_instructions, split_input

from conftest import EXAMPLE_MAP


def test_example_blocks():
    blocks = parse_blocks(EXAMPLE_MAP)
    assert [(b.min, b.max) for b in blocks] == [
        (Point(8, 0), Point(11, 3)),
        (Point(0, 4), Point(11, 7)),
        (Point(8, 8), Point(15, 11)),
    ]
    assert Point(11, 0) in blocks[0].walls
    assert Point(3, 4) in blocks[1].walls
    assert Point(9, 10) in blocks[2].walls
    assert len(blocks[0].walls) == 3
    assert blocks[2].width == 8 and blocks[2].height == 4


def test_instructions():
    assert parse_instructions("10R5L5") == [Move(10), Rotate.RIGHT, Move(5), Rotate.LEFT, Move(5)]
    assert parse_instructions("L0R") == [Rotate.LEFT, Move(0), Rotate.RIGHT]
    assert parse_instructions(" 7\n") == [Move(7)]


def test_bad_instruction_character():
    with pytest.raises(MapFormatError, match="invalid instruction character"):
        parse_instructions("10X5")


def test_bad_map_character():
    with pytest.raises(MapFormatError, match="row 1, column 2"):
        parse_blocks("....\n..x.")


def test_gap_inside_row():
    with pytest.raises(MapFormatError, match="gap"):
        parse_blocks("....\n.. .")


def test_empty_row():
    with pytest.raises(MapFormatError, match="no tiles"):
        parse_blocks("....\n   \n....")


def test_split_needs_two_parts():
    with pytest.raises(MapFormatError):
        split_input("....\n....\n")
    map_text, instructions = split_input("  ..\r\n  ..\r\n\r\n3L\r\n")
    assert map_text == "  ..\n  .."
    assert instructions == "3L"


def test_parse_input(example_text):
    blocks, instructions = parse_input(example_text)
    assert len(blocks) == 3
    assert len(instructions) == 13


def test_move_too_long():
    with pytest.raises(MapFormatError, match="too long"):
        parse_instructions("1" * 5000)
    with pytest.raises(MapFormatError, match="too long"):
        parse_instructions("5R" + "9" * 19)


def test_move_leading_zeros():
    assert parse_instructions("0" * 5000 + "12L") == [Move(12), Rotate.LEFT]
    assert parse_instructions("0" * 30) == [Move(0)]
