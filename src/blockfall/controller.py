"""Game controller: the state machine tying grid, pieces and score together."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Optional, Protocol

from .controls import Action, KeyboardInput
from .generator import PieceGenerator
from .grid import DEFAULT_HEIGHT, DEFAULT_WIDTH, Grid
from .piece import ActivePiece, Piece
from .scheduler import ManualScheduler, TickScheduler
from .score import ScoreKeeper
from .view import GameView, GridSnapshot, NullView

LOGGER = logging.getLogger(__name__)

# Spawn columns are drawn from ``range(width - SPAWN_MARGIN)``.
SPAWN_MARGIN = 3


class GameStatus(str, Enum):
    IDLE = "idle"
    SPAWNING = "spawning"
    ACTIVE = "active"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class InputSource(Protocol):
    """Anything that can be told to start or stop delivering key presses."""

    def start_listening(self) -> None:
        ...

    def stop_listening(self) -> None:
        ...


class GameController:
    """Own the grid and the active piece and drive every transition.

    A tick moves the active piece down one row, or freezes it when it cannot
    move, clears completed lines and spawns the next piece.  Player actions
    move or rotate the active piece and are silently rejected when the
    candidate placement does not fit.  A manual downward shift never freezes
    the piece; only the tick does.

    All collaborators are optional.  By default the controller renders to a
    :class:`~blockfall.view.NullView`, ticks through a
    :class:`~blockfall.scheduler.ManualScheduler` and draws randomness from an
    unseeded :class:`random.Random` (pass ``seed`` or ``rng`` for
    reproducible games).
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        view: Optional[GameView] = None,
        scheduler: Optional[TickScheduler] = None,
        controls: Optional[InputSource] = None,
        generator: Optional[PieceGenerator] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self._rng = rng or random.Random(seed)
        self._view: GameView = view or NullView()
        self._grid = Grid(width, height)
        self._score = ScoreKeeper(self._view.show_score)
        self._generator = generator or PieceGenerator(self._rng)
        self._generator.set_listener(self._view.show_upcoming)
        self._scheduler = scheduler or ManualScheduler()
        self._scheduler.callback = self.tick
        self._controls: InputSource = controls or KeyboardInput()
        if isinstance(self._controls, KeyboardInput):
            self._controls.handler = self.handle
        self._active: Optional[ActivePiece] = None
        self._state = GameStatus.IDLE
        self._publish()

    # Accessors ---------------------------------------------------------
    @property
    def state(self) -> GameStatus:
        return self._state

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def active(self) -> Optional[ActivePiece]:
        return self._active

    @property
    def score(self) -> int:
        return self._score.total

    @property
    def upcoming(self) -> Piece:
        return self._generator.upcoming

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    @property
    def controls(self) -> InputSource:
        return self._controls

    def snapshot(self) -> GridSnapshot:
        return self._grid.snapshot(self._active)

    # Lifecycle ---------------------------------------------------------
    def start(self) -> bool:
        """Spawn the first piece and begin ticking and listening.

        Returns ``False`` when the first piece does not fit, in which case the
        game is over immediately.
        """

        if self._state is not GameStatus.IDLE:
            raise RuntimeError(f"Cannot start a game that is {self._state.value}")
        self._set_state(GameStatus.SPAWNING)
        if not self._spawn():
            self._game_over()
            return False
        self._set_state(GameStatus.ACTIVE)
        self._scheduler.begin()
        self._controls.start_listening()
        return True

    def pause(self) -> bool:
        """Suspend ticks and input.  Returns whether the game was paused."""

        if not self._accepts("pause") or self._state is not GameStatus.ACTIVE:
            return False
        self._scheduler.end()
        self._controls.stop_listening()
        self._set_state(GameStatus.PAUSED)
        self._view.show_paused(True)
        return True

    def resume(self) -> bool:
        """Restart ticks and input.  Returns whether the game was resumed."""

        if self._state is GameStatus.IDLE:
            raise RuntimeError("resume called before the game was started")
        if self._state is not GameStatus.PAUSED:
            return False
        self._set_state(GameStatus.ACTIVE)
        self._scheduler.begin()
        self._controls.start_listening()
        self._view.show_paused(False)
        return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one."""

        if self._state is GameStatus.PAUSED:
            return self.resume()
        return self.pause()

    # Tick --------------------------------------------------------------
    def tick(self) -> None:
        """Advance the game by one step of gravity."""

        if not self._accepts("tick"):
            return
        if self._shift(1, 0):
            return
        self._freeze()
        self._set_state(GameStatus.SPAWNING)
        if self._spawn():
            self._set_state(GameStatus.ACTIVE)
        else:
            self._game_over()

    # Player actions ----------------------------------------------------
    def move_left(self) -> bool:
        return self._accepts("move_left") and self._shift(0, -1)

    def move_right(self) -> bool:
        return self._accepts("move_right") and self._shift(0, 1)

    def move_down(self) -> bool:
        """Try to shift the piece down one row; never freezes it."""

        return self._accepts("move_down") and self._shift(1, 0)

    def rotate(self) -> bool:
        """Turn the piece clockwise in place; no wall kicks are attempted."""

        if not self._accepts("rotate"):
            return False
        assert self._active is not None
        return self._try_place(self._active.rotated())

    def handle(self, action: Action) -> bool:
        """Dispatch an input action to the matching move."""

        handlers = {
            Action.SHIFT_DOWN: self.move_down,
            Action.SHIFT_LEFT: self.move_left,
            Action.SHIFT_RIGHT: self.move_right,
            Action.ROTATE: self.rotate,
        }
        return handlers[action]()

    # Internal helpers --------------------------------------------------
    def _accepts(self, action: str) -> bool:
        if self._state is GameStatus.IDLE:
            raise RuntimeError(f"{action} called before the game was started")
        return self._state is GameStatus.ACTIVE

    def _set_state(self, state: GameStatus) -> None:
        LOGGER.debug("State %s -> %s", self._state.value, state.value)
        self._state = state

    def _publish(self) -> None:
        self._view.update(self.snapshot())

    def _shift(self, drow: int, dcol: int) -> bool:
        assert self._active is not None
        return self._try_place(self._active.moved(drow, dcol))

    def _try_place(self, candidate: ActivePiece) -> bool:
        if not self._grid.can_place(candidate.shape, candidate.position):
            return False
        self._active = candidate
        self._publish()
        return True

    def _freeze(self) -> None:
        piece = self._active
        assert piece is not None
        self._grid.freeze(piece.shape, piece.position, piece.piece_type)
        self._active = None
        self._score.count_tetromino()
        lines = self._grid.clear_completed_lines()
        self._publish()
        self._score.count_lines(lines)
        if lines:
            LOGGER.debug("Cleared %d line(s). Score: %d", lines, self._score.total)

    def _spawn(self) -> bool:
        piece = self._generator.next()
        position = (0, self._rng.randrange(self._grid.width - SPAWN_MARGIN))
        if not self._grid.can_place(piece.shape, position):
            LOGGER.debug("%s piece does not fit at %s", piece.piece_type.value, position)
            return False
        self._active = ActivePiece.spawn(piece, position)
        self._publish()
        return True

    def _game_over(self) -> None:
        self._set_state(GameStatus.GAME_OVER)
        self._scheduler.end()
        self._controls.stop_listening()
        LOGGER.info("Game over. Score: %d", self._score.total)
        self._view.show_game_over()
