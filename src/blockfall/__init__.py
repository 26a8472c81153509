"""Falling-block puzzle game engine."""

from .cell import EMPTY, Cell
from .controller import GameController, GameStatus
from .controls import Action, KeyboardInput
from .generator import PieceGenerator
from .grid import Grid
from .piece import ActivePiece, Piece
from .scheduler import AsyncioScheduler, ManualScheduler, TickScheduler
from .score import ScoreKeeper, score_for_lines
from .shapes import SHAPES, TetrominoType, rotate, shape_for
from .view import GameView, GridSnapshot, NullView, TextView

__all__ = [
    "Action",
    "ActivePiece",
    "AsyncioScheduler",
    "Cell",
    "EMPTY",
    "GameController",
    "GameStatus",
    "GameView",
    "Grid",
    "GridSnapshot",
    "KeyboardInput",
    "ManualScheduler",
    "NullView",
    "Piece",
    "PieceGenerator",
    "SHAPES",
    "ScoreKeeper",
    "TetrominoType",
    "TextView",
    "TickScheduler",
    "rotate",
    "score_for_lines",
    "shape_for",
]
