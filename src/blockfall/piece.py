"""Pieces produced by the generator and the active falling piece."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from .shapes import Shape, TetrominoType, occupied_offsets, rotate

Position = Tuple[int, int]  # (row, col)


@dataclass(frozen=True, eq=False)
class Piece:
    """A piece type together with its (possibly pre-rotated) shape."""

    piece_type: TetrominoType
    shape: Shape


@dataclass(frozen=True, eq=False)
class ActivePiece:
    """The piece currently falling through the grid.

    Instances are immutable.  Moving or rotating produces a new
    ``ActivePiece`` which the controller swaps in once the grid has accepted
    the candidate placement.
    """

    piece_type: TetrominoType
    shape: Shape
    position: Position = (0, 0)
    rotation: int = 0

    @classmethod
    def spawn(cls, piece: Piece, position: Position) -> "ActivePiece":
        return cls(piece.piece_type, piece.shape, position, 0)

    def moved(self, drow: int, dcol: int) -> "ActivePiece":
        """Return a copy shifted by ``drow`` rows and ``dcol`` columns."""

        row, col = self.position
        return replace(self, position=(row + drow, col + dcol))

    def rotated(self) -> "ActivePiece":
        """Return a copy turned one step clockwise around the same anchor."""

        return replace(self, shape=rotate(self.shape, 1), rotation=(self.rotation + 1) % 4)

    def blocks(self) -> List[Position]:
        """Return the grid coordinates covered by this piece."""

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in occupied_offsets(self.shape)]
