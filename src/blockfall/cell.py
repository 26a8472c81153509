"""Grid cell values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .shapes import PIECE_VALUES, VALUE_PIECES, TetrominoType


@dataclass(frozen=True)
class Cell:
    """A single grid cell: empty, or frozen with the piece that produced it.

    The piece type only matters for colouring; a frozen cell of any type
    blocks movement the same way.
    """

    piece: Optional[TetrominoType] = None

    @classmethod
    def frozen(cls, piece: TetrominoType) -> "Cell":
        return cls(piece)

    @classmethod
    def from_value(cls, value: int) -> "Cell":
        """Decode the integer stored in the grid matrix."""

        if value == 0:
            return EMPTY
        return cls(VALUE_PIECES[int(value)])

    @property
    def is_frozen(self) -> bool:
        return self.piece is not None

    @property
    def value(self) -> int:
        """Integer code used by the grid matrix (``0`` when empty)."""

        return PIECE_VALUES[self.piece] if self.piece is not None else 0


EMPTY = Cell()
