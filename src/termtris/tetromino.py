"""Tetromino definitions and geometry.

A :class:`Tetromino` is an immutable set of four integer cells in ``(x, y)``
form, with ``y`` growing downwards.  Every operation returns a new piece;
whether a piece fits anywhere is decided by :class:`termtris.board.Board`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

import numpy as np
from numpy.typing import NDArray

Cell = Tuple[int, int]
CELL_COUNT = 4
# Coordinates, offsets and rotation centres stay below this magnitude so the
# int64 arithmetic in translate and rotate_about cannot wrap.
COORD_LIMIT = 2 ** 31


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    J = "J"
    L = "L"
    S = "S"
    Z = "Z"


# Local, unrotated coordinates for each shape.  The first cell of every shape
# is the pivot used by :meth:`Tetromino.rotate`.
SHAPES: Dict[TetrominoType, Tuple[Cell, ...]] = {
    TetrominoType.I: ((1, 0), (0, 0), (2, 0), (3, 0)),
    TetrominoType.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    TetrominoType.T: ((1, 0), (0, 0), (2, 0), (1, 1)),
    TetrominoType.J: ((1, 1), (1, 0), (1, 2), (0, 2)),
    TetrominoType.L: ((0, 1), (0, 0), (0, 2), (1, 2)),
    TetrominoType.S: ((1, 0), (2, 0), (0, 1), (1, 1)),
    TetrominoType.Z: ((1, 0), (0, 0), (1, 1), (2, 1)),
}


def _check_range(*values: int) -> None:
    if any(abs(v) >= COORD_LIMIT for v in values):
        raise OverflowError(f"coordinates must lie within +/-{COORD_LIMIT}")


def _from_array(coords: NDArray[np.int64]) -> "Tetromino":
    return Tetromino(tuple((int(x), int(y)) for x, y in coords))


@dataclass(frozen=True)
class Tetromino:
    """Falling piece geometry."""

    cells: Tuple[Cell, ...]

    def __post_init__(self) -> None:
        cells = tuple((int(x), int(y)) for x, y in self.cells)
        if len(cells) != CELL_COUNT:
            raise ValueError(f"a tetromino needs {CELL_COUNT} cells, got {len(cells)}")
        _check_range(*(v for cell in cells for v in cell))
        object.__setattr__(self, "cells", cells)

    @classmethod
    def of(cls, shape: TetrominoType) -> "Tetromino":
        """Return the canonical piece for ``shape``."""

        return cls(SHAPES[TetrominoType(shape)])

    @property
    def pivot(self) -> Cell:
        return self.cells[0]

    def topmost(self) -> Cell:
        """Return the first cell with the smallest ``y``."""

        return min(self.cells, key=lambda cell: cell[1])

    def as_array(self) -> NDArray[np.int64]:
        """Return the cells as a ``(4, 2)`` integer array of ``(x, y)`` rows."""

        return np.array(self.cells, dtype=np.int64)

    def translate(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy moved by ``dx`` columns and ``dy`` rows.

        No board bounds apply here; negative or off-board coordinates are valid
        geometry.  Magnitudes of ``COORD_LIMIT`` or more raise ``OverflowError``.
        """

        _check_range(dx, dy)
        return _from_array(self.as_array() + np.array((dx, dy), dtype=np.int64))

    def left(self) -> "Tetromino":
        return self.translate(-1, 0)

    def right(self) -> "Tetromino":
        return self.translate(1, 0)

    def down(self) -> "Tetromino":
        return self.translate(0, 1)

    def rotate(self) -> "Tetromino":
        """Return the piece rotated 90 degrees clockwise about its pivot."""

        return self.rotate_about(self.pivot)

    def rotate_about(self, center: Cell) -> "Tetromino":
        """Return the piece rotated 90 degrees clockwise about ``center``.

        Uses the integer mapping ``(x, y) -> (x0 + y0 - y, -x0 + y0 + x)`` so
        four rotations about the same centre give back the original cells.
        """

        x0, y0 = center
        _check_range(x0, y0)
        coords = self.as_array()
        rotated = np.column_stack((x0 + y0 - coords[:, 1], -x0 + y0 + coords[:, 0]))
        return _from_array(rotated)

    def is_valid(self, predicate: Callable[[Cell], bool]) -> bool:
        """Return ``True`` if every cell satisfies ``predicate``."""

        return all(predicate(cell) for cell in self.cells)
