"""Piece shape catalog and rotation geometry.

Every shape is a square occupancy matrix (``1`` for a block, ``0`` for empty
space) stored as a read-only :mod:`numpy` array.  Rotating a shape never
modifies it; a new matrix is returned instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

Shape = NDArray[np.uint8]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    L = "L"
    I = "I"
    J = "J"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0``
# always represents an empty cell.
PIECE_VALUES: Dict[TetrominoType, int] = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES: Dict[int, TetrominoType] = {v: t for t, v in PIECE_VALUES.items()}


def _freeze(matrix) -> Shape:
    shape = np.array(matrix, dtype=np.uint8)
    shape.flags.writeable = False
    return shape


# Spawn orientation of each piece.  The I piece lives in a 4x4 box, the O
# piece in a 2x2 box and the rest in 3x3 boxes.
SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.L: _freeze([[1, 0, 0], [1, 0, 0], [1, 1, 0]]),
    TetrominoType.I: _freeze([[1, 0, 0, 0], [1, 0, 0, 0], [1, 0, 0, 0], [1, 0, 0, 0]]),
    TetrominoType.J: _freeze([[0, 1, 0], [0, 1, 0], [1, 1, 0]]),
    TetrominoType.O: _freeze([[1, 1], [1, 1]]),
    TetrominoType.S: _freeze([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoType.T: _freeze([[1, 1, 1], [0, 1, 0], [0, 0, 0]]),
    TetrominoType.Z: _freeze([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
}


def rotate(shape: Shape, steps: int = 1) -> Shape:
    """Return ``shape`` rotated clockwise by ``steps`` quarter turns.

    ``steps`` is wrapped modulo four so any integer is accepted; negative
    values rotate counter-clockwise.  With ``N`` the last valid index, one
    step maps ``result[i][j] = shape[N - j][i]``, two steps map
    ``result[i][j] = shape[N - i][N - j]`` and three steps map
    ``result[i][j] = shape[j][N - i]``.  A zero rotation returns an
    equivalent copy.
    """

    steps %= 4
    # ``np.rot90`` turns counter-clockwise for positive ``k``.
    return _freeze(np.rot90(shape, -steps))


def shape_for(piece: TetrominoType, rotation: int = 0) -> Shape:
    """Return the catalog shape for ``piece`` rotated ``rotation`` times."""

    return rotate(SHAPES[piece], rotation)


def occupied_offsets(shape: Shape) -> List[Tuple[int, int]]:
    """Return the ``(row, col)`` offsets of every block in ``shape``."""

    rows, cols = np.nonzero(shape)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def preview_matrix(shape: Shape, size: int = 4) -> Shape:
    """Pad ``shape`` into a ``size`` x ``size`` matrix anchored top-left.

    Used by "up next" displays which always draw a fixed-size box regardless
    of the piece's own bounding box.
    """

    n = shape.shape[0]
    if n > size:
        raise ValueError(f"Shape of size {n} does not fit a {size}x{size} preview")
    padded = np.zeros((size, size), dtype=np.uint8)
    padded[:n, :n] = shape
    padded.flags.writeable = False
    return padded
