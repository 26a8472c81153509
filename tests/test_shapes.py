import numpy as np
import pytest

from blockfall.shapes import (
    PIECE_VALUES,
    SHAPES,
    TetrominoType,
    occupied_offsets,
    preview_matrix,
    rotate,
    shape_for,
)


@pytest.mark.parametrize("piece", list(TetrominoType))
def test_four_quarter_turns_restore_shape(piece):
    shape = SHAPES[piece]
    turned = shape
    for _ in range(4):
        turned = rotate(turned, 1)
    assert np.array_equal(turned, shape)


@pytest.mark.parametrize("piece", list(TetrominoType))
def test_rotation_matches_index_formulas(piece):
    s = SHAPES[piece]
    n = s.shape[0] - 1
    one, two, three = rotate(s, 1), rotate(s, 2), rotate(s, 3)
    for i in range(n + 1):
        for j in range(n + 1):
            assert one[i][j] == s[n - j][i]
            assert two[i][j] == s[n - i][n - j]
            assert three[i][j] == s[j][n - i]


def test_l_piece_turns_clockwise():
    turned = rotate(SHAPES[TetrominoType.L])
    assert turned.tolist() == [[1, 1, 1], [1, 0, 0], [0, 0, 0]]


def test_rotation_steps_wrap_and_default_to_one():
    shape = SHAPES[TetrominoType.T]
    assert np.array_equal(rotate(shape), rotate(shape, 5))
    assert np.array_equal(rotate(shape, -1), rotate(shape, 3))


def test_zero_rotation_returns_equal_copy():
    shape = SHAPES[TetrominoType.S]
    copy = rotate(shape, 0)
    assert copy is not shape
    assert np.array_equal(copy, shape)


def test_rotation_does_not_modify_catalog():
    before = SHAPES[TetrominoType.J].copy()
    rotate(SHAPES[TetrominoType.J], 1)
    assert np.array_equal(SHAPES[TetrominoType.J], before)
    with pytest.raises(ValueError):
        SHAPES[TetrominoType.J][0, 0] = 1
    with pytest.raises(ValueError):
        rotate(SHAPES[TetrominoType.J])[0, 0] = 1


def test_catalog_sizes():
    sizes = sorted(shape.shape[0] for shape in SHAPES.values())
    assert sizes == [2, 3, 3, 3, 3, 3, 4]
    assert all(shape.shape[0] == shape.shape[1] for shape in SHAPES.values())
    assert all(len(occupied_offsets(shape)) == 4 for shape in SHAPES.values())


def test_square_is_rotation_invariant():
    square = SHAPES[TetrominoType.O]
    for steps in range(4):
        assert np.array_equal(rotate(square, steps), square)


def test_piece_values_are_distinct_and_non_zero():
    values = list(PIECE_VALUES.values())
    assert len(set(values)) == 7
    assert 0 not in values


def test_shape_for_applies_rotation():
    assert np.array_equal(shape_for(TetrominoType.I, 1), rotate(SHAPES[TetrominoType.I], 1))
    assert shape_for(TetrominoType.I, 1).tolist()[0] == [1, 1, 1, 1]


def test_preview_matrix_pads_top_left():
    preview = preview_matrix(SHAPES[TetrominoType.O])
    assert preview.tolist() == [
        [1, 1, 0, 0],
        [1, 1, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]
    with pytest.raises(ValueError):
        preview_matrix(SHAPES[TetrominoType.I], size=3)
