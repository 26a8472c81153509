"""Grid representation for the playfield."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .cell import Cell
from .piece import ActivePiece, Position
from .shapes import PIECE_VALUES, Shape, TetrominoType, occupied_offsets
from .view import GridSnapshot


# Dimensions of the standard board.
DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 20

# Narrowest board on which every catalog shape can still spawn.
MIN_WIDTH = 4

Matrix = NDArray[np.uint8]


def create_empty_grid(width: int, height: int) -> Matrix:
    """Return a new empty grid matrix filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Grid:
    """Fixed-size matrix of cells holding every frozen block.

    Cells are stored as integer codes (see :data:`~blockfall.shapes.PIECE_VALUES`)
    with ``0`` marking an empty cell.  The matrix is created once and updated
    in place for the lifetime of a game.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        if width < MIN_WIDTH or height < 1:
            raise ValueError(f"Grid must be at least {MIN_WIDTH}x1, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._cells: Matrix = create_empty_grid(self._width, self._height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def cells(self) -> Matrix:
        """Read-only view of the underlying code matrix."""

        view = self._cells.view()
        view.flags.writeable = False
        return view

    def reset(self) -> None:
        self._cells.fill(0)

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise IndexError(f"Cell ({row}, {col}) out of bounds")

    def cell_at(self, row: int, col: int) -> Cell:
        """Return the cell at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        self._check_bounds(row, col)
        return Cell.from_value(self._cells[row, col])

    def set_cell(self, row: int, col: int, cell: Cell) -> None:
        """Replace the cell at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        self._check_bounds(row, col)
        self._cells[row, col] = np.uint8(cell.value)

    def can_place(self, shape: Shape, anchor: Position) -> bool:
        """Return ``True`` if ``shape`` fits with its top-left corner at ``anchor``.

        Every occupied cell of the shape must land inside the grid on a cell
        that is not frozen.  Blank cells of the shape's bounding box may hang
        over the edges freely.
        """

        row, col = anchor
        for dr, dc in occupied_offsets(shape):
            r, c = row + dr, col + dc
            if not (0 <= r < self._height and 0 <= c < self._width):
                return False
            if self._cells[r, c] != 0:
                return False
        return True

    def freeze(self, shape: Shape, anchor: Position, piece: TetrominoType) -> None:
        """Mark every occupied cell of ``shape`` at ``anchor`` as frozen.

        Raises:
            IndexError: If any block falls outside the grid.
        """

        row, col = anchor
        blocks = [(row + dr, col + dc) for dr, dc in occupied_offsets(shape)]
        for r, c in blocks:
            self._check_bounds(r, c)
        value = np.uint8(PIECE_VALUES[piece])
        for r, c in blocks:
            self._cells[r, c] = value

    def is_row_complete(self, row: int) -> bool:
        return bool(np.all(self._cells[row] != 0))

    def clear_completed_lines(self) -> int:
        """Remove every complete row and return how many were removed.

        Rows are scanned bottom to top.  When a complete row is found the rows
        above it shift down by one, an empty row appears at the top and the
        same row index is examined again.
        """

        cleared = 0
        row = self._height - 1
        while row >= 0:
            if self.is_row_complete(row):
                self._cells[1 : row + 1] = self._cells[0:row].copy()
                self._cells[0] = 0
                cleared += 1
            else:
                row -= 1
        return cleared

    def snapshot(self, active: Optional[ActivePiece] = None) -> GridSnapshot:
        """Project the grid, plus ``active`` if given, into a view snapshot."""

        if active is None:
            return GridSnapshot.build(self._cells)
        return GridSnapshot.build(self._cells, tuple(active.blocks()), active.piece_type)
