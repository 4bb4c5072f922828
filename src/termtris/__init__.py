"""Falling-block puzzle engine with a pygame front-end."""

from .board import Board, BoardStateError, InvalidPlacement
from .tetromino import SHAPES, Tetromino, TetrominoType
from .game_state import GameState
from .utils import format_grid, render_grid

__all__ = [
    "Board",
    "BoardStateError",
    "InvalidPlacement",
    "Tetromino",
    "TetrominoType",
    "SHAPES",
    "GameState",
    "format_grid",
    "render_grid",
]
