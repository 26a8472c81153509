"""View-state projection and the interface renderers implement.

The engine never draws anything itself.  After each state change it hands a
:class:`GridSnapshot` to a :class:`GameView`, which is free to render it to a
console, a pygame surface or simply record it in a test.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List, Optional, Protocol, TextIO, Tuple

import numpy as np
from numpy.typing import NDArray

from .shapes import PIECE_VALUES, VALUE_PIECES, Shape, TetrominoType

Position = Tuple[int, int]


@dataclass(frozen=True)
class GridSnapshot:
    """Immutable picture of the grid with the active piece overlaid.

    ``values`` holds the integer piece code of every cell (``0`` for empty),
    ``frozen`` marks the cells that belong to the grid itself and ``active``
    lists the cells covered by the falling piece.
    """

    width: int
    height: int
    values: Tuple[Tuple[int, ...], ...]
    frozen: Tuple[Tuple[bool, ...], ...]
    active: Tuple[Position, ...] = ()
    active_type: Optional[TetrominoType] = None

    @classmethod
    def build(
        cls,
        grid: NDArray[np.uint8],
        active: Tuple[Position, ...] = (),
        active_type: Optional[TetrominoType] = None,
    ) -> "GridSnapshot":
        height, width = grid.shape
        values = [[int(v) for v in row] for row in grid]
        frozen = tuple(tuple(v != 0 for v in row) for row in values)
        if active_type is not None:
            code = PIECE_VALUES[active_type]
            for r, c in active:
                if 0 <= r < height and 0 <= c < width:
                    values[r][c] = code
        return cls(
            width=width,
            height=height,
            values=tuple(tuple(row) for row in values),
            frozen=frozen,
            active=tuple(active),
            active_type=active_type,
        )

    def cell_type(self, row: int, col: int) -> Optional[TetrominoType]:
        """Return the piece type drawn at ``(row, col)``, if any."""

        value = self.values[row][col]
        return VALUE_PIECES[value] if value else None

    def is_frozen(self, row: int, col: int) -> bool:
        return self.frozen[row][col]

    def to_array(self) -> NDArray[np.uint8]:
        """Return the overlaid cell codes as a fresh ``numpy`` matrix."""

        return np.array(self.values, dtype=np.uint8)

    def changed_cells(self, previous: Optional["GridSnapshot"]) -> List[Position]:
        """Return the cells whose drawn content differs from ``previous``.

        Without a previous snapshot, or when the dimensions differ, every
        cell is reported so the caller performs a full redraw.
        """

        if previous is None or (previous.width, previous.height) != (self.width, self.height):
            return [(r, c) for r in range(self.height) for c in range(self.width)]
        changed: List[Position] = []
        for r in range(self.height):
            if self.values[r] == previous.values[r] and self.frozen[r] == previous.frozen[r]:
                continue
            for c in range(self.width):
                if (
                    self.values[r][c] != previous.values[r][c]
                    or self.frozen[r][c] != previous.frozen[r][c]
                ):
                    changed.append((r, c))
        return changed

    def render_text(self) -> str:
        """Return an ASCII picture: ``#`` frozen, ``@`` falling, ``.`` empty."""

        active = set(self.active)
        lines = []
        for r in range(self.height):
            chars = []
            for c in range(self.width):
                if self.frozen[r][c]:
                    chars.append("#")
                elif (r, c) in active:
                    chars.append("@")
                else:
                    chars.append(".")
            lines.append("".join(chars))
        return "\n".join(lines)


class GameView(Protocol):
    """Callbacks a renderer receives from the engine."""

    def update(self, snapshot: GridSnapshot) -> None:
        ...

    def show_game_over(self) -> None:
        ...

    def show_upcoming(self, piece_type: TetrominoType, shape: Shape) -> None:
        ...

    def show_score(self, total: int) -> None:
        ...

    def show_paused(self, paused: bool) -> None:
        ...


class NullView:
    """View that ignores every notification."""

    def update(self, snapshot: GridSnapshot) -> None:
        pass

    def show_game_over(self) -> None:
        pass

    def show_upcoming(self, piece_type: TetrominoType, shape: Shape) -> None:
        pass

    def show_score(self, total: int) -> None:
        pass

    def show_paused(self, paused: bool) -> None:
        pass


class TextView:
    """Write ASCII frames to a text stream.

    Only the latest snapshot is kept; frames are printed as they arrive when
    ``echo`` is set, otherwise callers print :meth:`frame` when they want.
    """

    def __init__(self, stream: Optional[TextIO] = None, *, echo: bool = False) -> None:
        self._stream = stream or sys.stdout
        self.echo = echo
        self.snapshot: Optional[GridSnapshot] = None
        self.score = 0
        self.upcoming: Optional[TetrominoType] = None
        self.game_over = False

    def update(self, snapshot: GridSnapshot) -> None:
        self.snapshot = snapshot
        if self.echo:
            self._stream.write(self.frame() + "\n\n")

    def show_game_over(self) -> None:
        self.game_over = True
        self._stream.write("GAME OVER\n")

    def show_upcoming(self, piece_type: TetrominoType, shape: Shape) -> None:
        self.upcoming = piece_type

    def show_score(self, total: int) -> None:
        self.score = total

    def show_paused(self, paused: bool) -> None:
        self._stream.write("PAUSED\n" if paused else "RESUMED\n")

    def frame(self) -> str:
        board = self.snapshot.render_text() if self.snapshot else ""
        upcoming = self.upcoming.value if self.upcoming else "-"
        return f"{board}\nScore: {self.score}  Next: {upcoming}"
