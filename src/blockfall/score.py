"""Score accumulation."""

from __future__ import annotations

from typing import Callable, Optional

# Points for every piece that freezes into the grid.
TETROMINO_SCORE = 10
# Points per cleared line.
LINE_SCORE = 100
# Extra points per additional line when several clear at once.
MULTI_LINE_BONUS = 50

ScoreListener = Callable[[int], None]


def score_for_lines(lines: int) -> int:
    """Return the award for clearing ``lines`` rows at once.

    One line is worth 100, and each line beyond the first adds a 50 point
    bonus on top of its own 100: 2 -> 250, 3 -> 400, 4 -> 550.
    """

    if lines < 0:
        raise ValueError(f"Line count must be non-negative, got {lines}")
    score = LINE_SCORE * lines
    if lines > 1:
        score += MULTI_LINE_BONUS * (lines - 1)
    return score


class ScoreKeeper:
    """Running score of a single game."""

    def __init__(self, listener: Optional[ScoreListener] = None) -> None:
        self._total = 0
        self._listener = listener

    @property
    def total(self) -> int:
        return self._total

    def set_listener(self, listener: Optional[ScoreListener]) -> None:
        self._listener = listener

    def count_tetromino(self) -> int:
        """Award the fixed bonus for a frozen piece and return it."""

        return self._add(TETROMINO_SCORE)

    def count_lines(self, lines: int) -> int:
        """Award points for ``lines`` cleared rows and return them."""

        return self._add(score_for_lines(lines))

    def _add(self, score: int) -> int:
        self._total += score
        if self._listener is not None:
            self._listener(self._total)
        return score
