import random
from typing import List, Optional, Sequence

import pytest

from blockfall.controller import GameController
from blockfall.controls import KeyboardInput
from blockfall.piece import Piece
from blockfall.scheduler import ManualScheduler
from blockfall.shapes import TetrominoType, shape_for


class RecordingView:
    """View double that keeps every notification it receives."""

    def __init__(self) -> None:
        self.snapshots = []
        self.upcoming: List[TetrominoType] = []
        self.scores: List[int] = []
        self.paused: List[bool] = []
        self.game_over_count = 0

    def update(self, snapshot) -> None:
        self.snapshots.append(snapshot)

    def show_game_over(self) -> None:
        self.game_over_count += 1

    def show_upcoming(self, piece_type, shape) -> None:
        self.upcoming.append(piece_type)

    def show_score(self, total: int) -> None:
        self.scores.append(total)

    def show_paused(self, paused: bool) -> None:
        self.paused.append(paused)


class ScriptedGenerator:
    """Generator double that hands out a fixed, repeating piece sequence."""

    def __init__(self, pieces: Sequence[TetrominoType]) -> None:
        self._pieces = [Piece(t, shape_for(t)) for t in pieces]
        self._index = 0
        self._listener = None

    @property
    def upcoming(self) -> Piece:
        return self._pieces[self._index % len(self._pieces)]

    def set_listener(self, listener) -> None:
        self._listener = listener
        self._notify()

    def next(self) -> Piece:
        current = self.upcoming
        self._index += 1
        self._notify()
        return current

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self.upcoming.piece_type, self.upcoming.shape)


class FixedColumnRandom(random.Random):
    """Random source that always spawns pieces in the same column."""

    def __init__(self, column: int) -> None:
        super().__init__(0)
        self.column = column

    def randrange(self, *args, **kwargs) -> int:
        return self.column


def make_game(
    pieces: Sequence[TetrominoType],
    *,
    column: int = 0,
    width: int = 10,
    height: int = 20,
    view: Optional[RecordingView] = None,
) -> GameController:
    return GameController(
        width,
        height,
        view=view or RecordingView(),
        scheduler=ManualScheduler(),
        controls=KeyboardInput(),
        generator=ScriptedGenerator(pieces),
        rng=FixedColumnRandom(column),
    )


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()
