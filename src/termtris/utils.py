"""Utility helpers for renderers of the Tetris engine."""

from __future__ import annotations

from typing import List, Optional, TypeVar

from .board import Board

T = TypeVar("T")


def render_grid(board: Board[T]) -> List[List[Optional[T]]]:
    """Return a copy of the board grid for drawing.

    The active piece is already painted into the board, so the copy is all a
    renderer needs.  Only ``width()``, ``height()`` and ``get()`` are used.
    """

    return [[board.get(x, y) for x in range(board.width())] for y in range(board.height())]


def format_grid(board: Board, filled: str = "#", empty: str = ".") -> str:
    """Return the board as text, one line per row."""

    return "\n".join(
        "".join(empty if cell is None else filled for cell in row) for row in render_grid(board)
    )
