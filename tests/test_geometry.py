import pytest

from bulletgrid.geometry import (
    Direction,
    in_inner,
    index_to_position,
    position_to_index,
    validate_size,
)


@pytest.mark.parametrize("size", [5, 7, 9])
def test_index_position_roundtrip(size):
    for row in range(size):
        for col in range(size):
            pos = index_to_position((col, row), size)
            assert position_to_index(pos, size) == (col, row)
    half = size // 2
    for x in range(-half, half + 1):
        for y in range(-half, half + 1):
            assert index_to_position(position_to_index((x, y), size), size) == (x, y)


def test_position_axes():
    # Center of a 7x7 board and the north-west corner
    assert position_to_index((0, 0), 7) == (3, 3)
    assert index_to_position((0, 0), 7) == (-3, 3)
    # y grows toward row 0
    assert position_to_index((0, 3), 7) == (3, 0)


def test_direction_properties():
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.RIGHT.delta == (0, 1)
    assert Direction.UP.delta == (-1, 0)
    assert [d.projectile_bit for d in Direction] == [2, 4, 8, 16]


def test_validate_size_rejects_even_and_small():
    assert validate_size(7) == 7
    with pytest.raises(ValueError):
        validate_size(6)
    with pytest.raises(ValueError):
        validate_size(3)


def test_inner_excludes_ring():
    assert in_inner(1, 1, 5)
    assert not in_inner(0, 2, 5)
    assert not in_inner(2, 4, 5)
