import logging

import pytest

pygame = pytest.importorskip("pygame")

from blockfall.controller import GameController, GameStatus
from blockfall.controls import KeyboardInput
from blockfall.run_pygame import (
    CELL_SIZE,
    KEYMAP,
    PANEL_WIDTH,
    PAUSE_KEY,
    SHAPE_COLORS,
    GameRunner,
    PygameView,
    handle_event,
)
from blockfall.shapes import SHAPES, TetrominoType
from blockfall.scheduler import ManualScheduler

from conftest import FixedColumnRandom, ScriptedGenerator, make_game


def _game(view):
    keys = KeyboardInput(KEYMAP)
    game = GameController(
        view=view,
        scheduler=ManualScheduler(),
        controls=keys,
        generator=ScriptedGenerator([TetrominoType.O]),
        rng=FixedColumnRandom(2),
    )
    return game, keys


def _surface():
    return pygame.Surface((10 * CELL_SIZE + PANEL_WIDTH, 20 * CELL_SIZE))


def _center(row: int, col: int, x0: int = 0, y0: int = 0):
    return (x0 + col * CELL_SIZE + CELL_SIZE // 2, y0 + row * CELL_SIZE + CELL_SIZE // 2)


def test_view_paints_active_piece_and_clears_old_cells():
    screen = _surface()
    view = PygameView(screen)
    game, _ = _game(view)
    game.start()
    color = SHAPE_COLORS[TetrominoType.O]
    assert tuple(screen.get_at(_center(0, 2)))[:3] == color

    game.move_down()
    assert tuple(screen.get_at(_center(0, 2)))[:3] == (0, 0, 0)
    assert tuple(screen.get_at(_center(2, 3)))[:3] == color


def test_view_draws_upcoming_preview():
    screen = _surface()
    view = PygameView(screen)
    view.show_upcoming(TetrominoType.I, SHAPES[TetrominoType.I])
    x0 = 10 * CELL_SIZE + CELL_SIZE
    assert tuple(screen.get_at(_center(3, 0, x0, CELL_SIZE)))[:3] == SHAPE_COLORS[TetrominoType.I]
    assert tuple(screen.get_at(_center(0, 1, x0, CELL_SIZE)))[:3] == (0, 0, 0)


def test_arrow_keys_and_pause_key():
    view = PygameView(_surface())
    game, keys = _game(view)
    game.start()

    handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT), game, keys)
    assert game.active.position == (0, 3)

    handle_event(pygame.event.Event(pygame.KEYDOWN, key=PAUSE_KEY), game, keys)
    assert game.state is GameStatus.PAUSED
    assert "Paused" in view.caption()
    handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT), game, keys)
    assert game.active.position == (0, 3)

    handle_event(pygame.event.Event(pygame.KEYDOWN, key=PAUSE_KEY), game, keys)
    handle_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_LEFT), game, keys)
    assert game.active.position == (0, 3)
    handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT), game, keys)
    assert game.active.position == (0, 2)


def test_caption_tracks_score_and_game_over():
    view = PygameView(_surface())
    view.show_score(250)
    assert view.caption() == "Blockfall - Score: 250"
    view.show_game_over()
    assert view.game_over
    assert view.caption() == "Blockfall - Game Over - Score: 250"


def test_runner_lifecycle_logging(caplog):
    caplog.set_level(logging.INFO, logger="blockfall.run_pygame")
    runner = GameRunner()
    runner.pause()
    runner.resume()
    assert "Pause ignored: game not running" in caplog.text
    assert "Resume ignored: game not running" in caplog.text

    runner._game = make_game([TetrominoType.O])
    runner._game.start()
    runner._running = True

    caplog.clear()
    runner.pause()
    assert "Paused" in caplog.text
    assert runner.game.state is GameStatus.PAUSED

    caplog.clear()
    runner.resume()
    assert "Resumed" in caplog.text
    assert runner.game.state is GameStatus.ACTIVE

    runner.stop()
    assert not runner.running
    caplog.clear()
    runner.stop()
    assert "Stop ignored: game not running" in caplog.text
