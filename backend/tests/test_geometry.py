from cubewalk.walk.geometry import Direction, Point, Rotation, in_range, turn


def test_point_arithmetic():
    assert Point(2, 3) + Point(-1, 4) == Point(1, 7)
    assert Point(2, 3) - Point(2, 3) == Point(0, 0)


def test_in_range_is_half_open():
    lo, hi = Point(0, 0), Point(4, 4)
    assert in_range(Point(0, 0), lo, hi)
    assert in_range(Point(3, 3), lo, hi)
    assert not in_range(Point(4, 0), lo, hi)
    assert not Point(0, -1).in_range(lo, hi)


def test_direction_rotations_round_trip():
    for d in Direction:
        assert d.rotate_left().rotate_right() == d
        assert d.rotate_right().rotate_left() == d
        assert d.inverse().inverse() == d
        assert d.rotate_right().rotate_right() == d.inverse()


def test_direction_cycle_order():
    assert Direction.RIGHT.rotate_right() == Direction.DOWN
    assert Direction.RIGHT.rotate_left() == Direction.UP
    assert Direction.UP.rotate_right() == Direction.RIGHT
    assert [d.is_horizontal() for d in Direction] == [True, False, True, False]


def test_delta_matches_inverse():
    for d in Direction:
        assert d.delta() + d.inverse().delta() == Point(0, 0)
    assert Direction.DOWN.delta() == Point(0, 1)


def test_turn():
    assert turn(Direction.RIGHT, -1) == Direction.UP
    assert turn(Direction.UP, 1) == Direction.RIGHT
    assert turn(Direction.LEFT, 0) == Direction.LEFT


def test_rotation_apply_is_counter_clockwise():
    assert Rotation.ZERO.apply(Direction.DOWN) == Direction.DOWN
    assert Rotation.NINETY.apply(Direction.RIGHT) == Direction.UP
    assert Rotation.ONE_EIGHTY.apply(Direction.LEFT) == Direction.RIGHT
    assert Rotation.TWO_SEVENTY.apply(Direction.RIGHT) == Direction.DOWN


def test_rotation_mirror_and_rotate_left():
    assert Rotation.ZERO.mirror() == Rotation.ONE_EIGHTY
    assert Rotation.TWO_SEVENTY.mirror() == Rotation.NINETY
    assert Rotation.TWO_SEVENTY.rotate_left() == Rotation.ZERO


def test_rotation_difference():
    for a in Direction:
        for b in Direction:
            assert Rotation.difference(a, b).apply(a) == b
    assert Rotation.difference(Direction.RIGHT, Direction.UP) == Rotation.NINETY
    assert Rotation.difference(Direction.UP, Direction.UP) == Rotation.ZERO
