"""Random piece generator with a one-piece lookahead."""

from __future__ import annotations

import random
from typing import Callable, Optional

from .piece import Piece
from .shapes import Shape, TetrominoType, shape_for

UpcomingListener = Callable[[TetrominoType, Shape], None]


class PieceGenerator:
    """Produce uniformly random, randomly pre-rotated pieces.

    The generator always holds the next piece so front-ends can show what is
    coming.  ``rng`` may be any :class:`random.Random` instance; passing a
    seeded one makes the sequence reproducible.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        listener: Optional[UpcomingListener] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._listener = listener
        self._upcoming = self._random_piece()
        self._notify()

    @property
    def upcoming(self) -> Piece:
        return self._upcoming

    def set_listener(self, listener: Optional[UpcomingListener]) -> None:
        """Replace the listener and publish the current lookahead to it."""

        self._listener = listener
        self._notify()

    def next(self) -> Piece:
        """Return the held piece and generate a fresh lookahead."""

        current = self._upcoming
        self._upcoming = self._random_piece()
        self._notify()
        return current

    def _random_piece(self) -> Piece:
        piece_type = self._rng.choice(list(TetrominoType))
        rotation = self._rng.randrange(4)
        return Piece(piece_type, shape_for(piece_type, rotation))

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self._upcoming.piece_type, self._upcoming.shape)
