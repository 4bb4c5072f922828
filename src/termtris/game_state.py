"""High level game state container."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .board import HEIGHT, WIDTH, Board, InvalidPlacement
from .tetromino import Tetromino, TetrominoType


LOGGER = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# Milliseconds between automatic downward moves
TICK_MS = 800

# Colours handed out to spawned pieces
PALETTE: Tuple[Color, ...] = (
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
)


@dataclass
class GameState:
    """Mutable state for a Tetris game session.

    Drives a :class:`Board` the way the real-time loop needs: gravity ticks,
    player moves, and the lock, clear and spawn cycle once a piece lands.
    ``score`` counts cleared rows.
    """

    width: int = WIDTH
    height: int = HEIGHT
    rng: random.Random = field(default_factory=random.Random)
    board: Board[Color] = field(init=False)
    score: int = 0
    pieces: int = 0
    over: bool = False

    def __post_init__(self) -> None:
        self.board = Board(self.width, self.height)

    @property
    def active(self) -> Optional[Tetromino]:
        return self.board.active

    def next_piece(self) -> Tuple[Tetromino, Color]:
        """Return a random shape and colour for the next spawn."""

        shape = self.rng.choice(list(TetrominoType))
        return Tetromino.of(shape), self.rng.choice(PALETTE)

    def spawn_tetromino(self) -> bool:
        """Spawn the next piece, flagging game over if there is no room."""

        block, color = self.next_piece()
        try:
            self.board.spawn(block, color)
        except InvalidPlacement:
            self.over = True
            LOGGER.info("Game over after %d pieces. Rows cleared: %d", self.pieces, self.score)
            return False
        self.pieces += 1
        return True

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board(self.width, self.height)
        self.score = 0
        self.pieces = 0
        self.over = False
        LOGGER.info("Game started on a %dx%d board", self.width, self.height)
        self.spawn_tetromino()

    def settle(self) -> bool:
        """Lock the active piece if it has landed and start the next one.

        Returns ``True`` if a piece was locked.
        """

        if self.over or self.board.active is None or self.board.can_move_down():
            return False
        self.board.lock()
        cleared = self.board.clear_filled_rows()
        if cleared:
            self.score += cleared
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, self.score)
        self.spawn_tetromino()
        return True

    def _apply(self, move) -> bool:
        if self.over or self.board.active is None:
            return False
        try:
            move()
        except InvalidPlacement:
            return False
        self.settle()
        return True

    def tick(self) -> None:
        """Advance gravity by one row, locking the piece once it lands."""

        if self.over or self.board.active is None:
            return
        if self.board.can_move_down():
            self.board.down()
        self.settle()

    def move_left(self) -> bool:
        return self._apply(self.board.left)

    def move_right(self) -> bool:
        return self._apply(self.board.right)

    def rotate(self) -> bool:
        return self._apply(self.board.rotate)

    def hard_drop(self) -> bool:
        """Drop the active piece to the floor and lock it."""

        if self.over or self.board.active is None:
            return False
        self.board.drop()
        self.settle()
        return True
