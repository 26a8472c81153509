"""Simple pygame front-end for the engine.

This module provides a playable version of the game on top of
:class:`~blockfall.controller.GameController`.  It is intentionally
lightweight: the controller owns every rule, while this module only turns
snapshots into coloured rectangles and pygame key events into actions.  The
loop runs inside :mod:`asyncio` so it also works in browser builds that need
to yield to the host event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Dict, Optional

import pygame

from .controller import GameController
from .controls import Action, KeyboardInput
from .grid import DEFAULT_HEIGHT, DEFAULT_WIDTH
from .scheduler import TICK_INTERVAL_MS, AsyncioScheduler
from .shapes import PIECE_VALUES, Shape, TetrominoType, preview_matrix
from .view import GridSnapshot

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel showing the upcoming piece
PANEL_WIDTH = 6 * CELL_SIZE
# Frames per second to run the event loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}

# Mapping from the integer stored in the grid to a colour
CELL_COLORS = {0: BACKGROUND}
for shape, value in PIECE_VALUES.items():
    CELL_COLORS[value] = SHAPE_COLORS[shape]

KEYMAP: Dict[int, Action] = {
    pygame.K_DOWN: Action.SHIFT_DOWN,
    pygame.K_LEFT: Action.SHIFT_LEFT,
    pygame.K_RIGHT: Action.SHIFT_RIGHT,
    pygame.K_UP: Action.ROTATE,
}
PAUSE_KEY = pygame.K_p


def _draw_cell(screen: pygame.Surface, row: int, col: int, color, x0: int = 0, y0: int = 0) -> None:
    rect = pygame.Rect(x0 + col * CELL_SIZE, y0 + row * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)
    pygame.draw.rect(screen, GRID_LINE, rect, 1)


class PygameView:
    """Render controller notifications onto a pygame surface.

    Only the cells that changed since the previous snapshot are repainted.
    """

    def __init__(self, screen: pygame.Surface, grid_width: int = DEFAULT_WIDTH) -> None:
        self.screen = screen
        self.grid_width = grid_width
        self.score = 0
        self.paused = False
        self.game_over = False
        self._last: Optional[GridSnapshot] = None

    def update(self, snapshot: GridSnapshot) -> None:
        for r, c in snapshot.changed_cells(self._last):
            _draw_cell(self.screen, r, c, CELL_COLORS[snapshot.values[r][c]])
        self._last = snapshot

    def show_upcoming(self, piece_type: TetrominoType, shape: Shape) -> None:
        x0 = self.grid_width * CELL_SIZE + CELL_SIZE
        y0 = CELL_SIZE
        color = SHAPE_COLORS[piece_type]
        preview = preview_matrix(shape)
        for r in range(preview.shape[0]):
            for c in range(preview.shape[1]):
                _draw_cell(self.screen, r, c, color if preview[r, c] else BACKGROUND, x0, y0)

    def show_score(self, total: int) -> None:
        self.score = total

    def show_paused(self, paused: bool) -> None:
        self.paused = paused

    def show_game_over(self) -> None:
        self.game_over = True
        if not pygame.font.get_init():
            return
        font = pygame.font.Font(None, 48)
        text = font.render("GAME OVER", True, (255, 255, 255))
        width = self.grid_width * CELL_SIZE
        self.screen.fill(BACKGROUND, pygame.Rect(0, 0, width, self.screen.get_height()))
        rect = text.get_rect(center=(width // 2, self.screen.get_height() // 2))
        self.screen.blit(text, rect)

    def caption(self) -> str:
        if self.game_over:
            return f"Blockfall - Game Over - Score: {self.score}"
        return f"Blockfall - {'Paused - ' if self.paused else ''}Score: {self.score}"


def handle_event(event: pygame.event.Event, game: GameController, keys: KeyboardInput) -> None:
    """Route a keyboard event to the pause toggle or to the input adapter."""

    if event.type != pygame.KEYDOWN:
        return
    if event.key == PAUSE_KEY:
        game.toggle_pause()
    else:
        keys.on_key(event.key)


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT, seed: Optional[int] = None) -> None:
        self.width = width
        self.height = height
        self.seed = seed
        self._running = False
        self._task: asyncio.Task | None = None
        self._game: GameController | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def game(self) -> GameController | None:
        return self._game

    async def _run_loop(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas in the page when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        screen = pygame.display.set_mode((self.width * CELL_SIZE + PANEL_WIDTH, self.height * CELL_SIZE))
        clock = pygame.time.Clock()

        view = PygameView(screen, self.width)
        keys = KeyboardInput(KEYMAP)
        self._game = GameController(
            self.width,
            self.height,
            view=view,
            scheduler=AsyncioScheduler(interval_ms=TICK_INTERVAL_MS),
            controls=keys,
            seed=self.seed,
        )
        self._game.start()
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                else:
                    handle_event(event, self._game, keys)

            pygame.display.set_caption(view.caption())
            pygame.display.flip()

            # Yield to the event loop so scheduled ticks can fire
            await asyncio.sleep(0)

        self._game.scheduler.end()
        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (e.g., plain Python); run synchronously
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def pause(self) -> None:
        if not self._running or self._game is None:
            LOGGER.info("Pause ignored: game not running")
            return
        if self._game.pause():
            LOGGER.info("Paused")

    def resume(self) -> None:
        if not self._running or self._game is None:
            LOGGER.info("Resume ignored: game not running")
            return
        if self._game.resume():
            LOGGER.info("Resumed")

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        # The loop exits on its next frame
        self._running = False


def main(width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT, seed: Optional[int] = None) -> None:
    """Run a game window until it is closed."""

    GameRunner(width, height, seed).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
