"""Board representation for the Tetris playfield."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Generic, Iterable, List, Optional, Sequence, TypeVar

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino


LOGGER = logging.getLogger(__name__)

# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

T = TypeVar("T")
Row = List[Optional[T]]


class InvalidPlacement(ValueError):
    """A piece would leave the board or overlap a settled cell."""

    def __init__(self, block: Tetromino) -> None:
        super().__init__(f"invalid block location: {list(block.cells)}")
        self.block = block


class BoardStateError(RuntimeError):
    """The board was used in a state its caller must not put it in."""


class Board(Generic[T]):
    """Grid of settled cells plus at most one active falling piece.

    Cells hold ``None`` when empty or an arbitrary payload (a colour in the
    game).  Rows are kept in a deque so cleared rows can be refilled from the
    top without copying the grid.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("board dimensions must be positive")
        self._width = width
        self._height = height
        self._rows: Deque[Row] = deque(self._empty_row() for _ in range(height))
        self._active: Optional[Tetromino] = None
        self._active_value: Optional[T] = None

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[object]], empty: object = 0) -> "Board":
        """Build a board from a literal grid, top row first.

        Cells equal to ``empty`` become empty; everything else is stored as is.
        """

        if not rows or not rows[0]:
            raise ValueError("rows must be a non-empty grid")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("all rows must have the same width")
        board: Board = cls(width, len(rows))
        board._rows = deque([None if cell == empty else cell for cell in row] for row in rows)
        return board

    def _empty_row(self) -> Row:
        return [None] * self._width

    def width(self) -> int:
        return self._width

    def height(self) -> int:
        return self._height

    @property
    def active(self) -> Optional[Tetromino]:
        """The falling piece, or ``None`` between lock and spawn."""

        return self._active

    @property
    def active_value(self) -> Optional[T]:
        return self._active_value

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> Optional[T]:
        """Return the payload at ``(x, y)`` or ``None`` when empty.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self._in_bounds(x, y):
            return self._rows[y][x]
        raise IndexError("Cell out of bounds")

    def set(self, x: int, y: int, value: T) -> None:
        """Store ``value`` at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self._in_bounds(x, y):
            self._rows[y][x] = value
        else:
            raise IndexError("Cell out of bounds")

    def clear(self, x: int, y: int) -> None:
        """Empty the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self._in_bounds(x, y):
            self._rows[y][x] = None
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, x: int, y: int) -> bool:
        """Return ``True`` if the cell at ``(x, y)`` is empty.

        Any coordinates outside the board are treated as occupied, so off-board
        positions are rejected by the same check as collisions.
        """

        return self._in_bounds(x, y) and self._rows[y][x] is None

    def rows(self) -> List[Row]:
        """Return a copy of the grid, top row first."""

        return [list(row) for row in self._rows]

    def occupancy(self) -> NDArray[np.bool_]:
        """Return a ``(height, width)`` mask of occupied cells."""

        return np.array([[cell is not None for cell in row] for row in self._rows], dtype=bool)

    # -- placement -------------------------------------------------------

    def check_block(self, block: Tetromino, vacated: Iterable[tuple] = ()) -> None:
        """Validate ``block`` against the grid without touching it.

        Every cell must be on the board and either empty or listed in
        ``vacated`` (cells the piece under test is about to leave).

        Raises:
            InvalidPlacement: If any cell is off the board or occupied.
        """

        free = set(vacated)
        coords = block.as_array()
        xs, ys = coords[:, 0], coords[:, 1]
        if (
            np.any(xs < 0)
            or np.any(xs >= self._width)
            or np.any(ys < 0)
            or np.any(ys >= self._height)
        ):
            raise InvalidPlacement(block)
        if not block.is_valid(lambda cell: cell in free or self.is_empty(*cell)):
            raise InvalidPlacement(block)

    def is_valid_block(self, block: Tetromino, vacated: Iterable[tuple] = ()) -> bool:
        """Boolean form of :meth:`check_block`."""

        try:
            self.check_block(block, vacated)
        except InvalidPlacement:
            return False
        return True

    def _paint(self, block: Tetromino, value: Optional[T]) -> None:
        for x, y in block.cells:
            self._rows[y][x] = value

    def _require_active(self) -> Tetromino:
        if self._active is None:
            raise BoardStateError("no active piece")
        return self._active

    def update_block(self, transform: Callable[[Tetromino], Tetromino]) -> None:
        """Replace the active piece with ``transform(active)`` if it fits.

        The candidate is checked with the active piece's own cells counted as
        vacant and only then committed, so a rejected transform leaves the grid
        and the active piece exactly as they were.

        Raises:
            BoardStateError: If there is no active piece.
            InvalidPlacement: If the transformed piece does not fit.
        """

        current = self._require_active()
        candidate = transform(current)
        try:
            self.check_block(candidate, vacated=current.cells)
        except InvalidPlacement:
            LOGGER.debug("Rejected move to %s", list(candidate.cells))
            raise
        self._paint(current, None)
        self._paint(candidate, self._active_value)
        self._active = candidate

    def spawn(self, block: Tetromino, value: T) -> None:
        """Place ``block`` at the top centre of the board as the new active piece.

        The piece is shifted so its topmost cell lands on row ``0`` at column
        ``width // 2``.  There is no retry at another position: a failure here
        means the board is full at the spawn point.

        Raises:
            BoardStateError: If a piece is still active.
            InvalidPlacement: If the spawn cells are out of bounds or taken.
            ValueError: If ``value`` is ``None``, which marks empty cells.
        """

        if value is None:
            raise ValueError("a piece needs a payload other than None")
        if self._active is not None:
            raise BoardStateError("cannot spawn while a piece is active")
        x, y = block.topmost()
        placed = block.translate(self._width // 2 - x, -y)
        self.check_block(placed)
        self._paint(placed, value)
        self._active = placed
        self._active_value = value

    def left(self) -> None:
        self.update_block(Tetromino.left)

    def right(self) -> None:
        self.update_block(Tetromino.right)

    def down(self) -> None:
        self.update_block(Tetromino.down)

    def rotate(self) -> None:
        self.update_block(Tetromino.rotate)

    def drop(self) -> int:
        """Move the active piece down until it is blocked.

        Returns the number of rows the piece descended.
        """

        self._require_active()
        rows = 0
        while True:
            try:
                self.down()
            except InvalidPlacement:
                return rows
            rows += 1

    def can_move_down(self) -> bool:
        """Return ``True`` if the active piece could descend one row."""

        current = self._require_active()
        return self.is_valid_block(current.down(), vacated=current.cells)

    def lock(self) -> Tetromino:
        """Settle the active piece into the grid and return it.

        Its cells keep their payload but no longer belong to a piece.
        """

        current = self._require_active()
        self._active = None
        self._active_value = None
        return current

    # -- compaction ------------------------------------------------------

    def clear_filled_rows(self) -> int:
        """Remove every full row, refill from the top and return the count."""

        if self._active is not None:
            raise BoardStateError("cannot clear rows while a piece is active")
        full = [y for y, row in enumerate(self._rows) if all(cell is not None for cell in row)]
        for y in reversed(full):
            del self._rows[y]
        for _ in full:
            self._rows.appendleft(self._empty_row())
        return len(full)
