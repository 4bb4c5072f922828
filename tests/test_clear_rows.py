import pytest

from termtris.board import Board, BoardStateError
from termtris.tetromino import Tetromino, TetrominoType


def test_full_rows_removed_and_rest_shifted_down():
    board = Board(4, 8)
    # rows 5 and 7 are full, row 6 is not
    for x in range(4):
        board.set(x, 5, "a")
        board.set(x, 7, "c")
    for x in (0, 1, 3):
        board.set(x, 6, "b")

    assert board.clear_filled_rows() == 2

    for x in range(4):
        for y in range(7):
            assert board.get(x, y) is None
    assert [board.get(x, 7) for x in range(4)] == ["b", "b", None, "b"]
    assert board.height() == 8


def test_row_with_one_gap_survives():
    board = Board(4, 8)
    for x in (0, 1, 3):
        board.set(x, 7, 1)
    before = board.rows()
    assert board.clear_filled_rows() == 0
    assert board.rows() == before


def test_order_of_surviving_rows_is_kept():
    board = Board.from_rows(
        [
            [0, 0, 0],
            [1, 0, 0],
            [2, 2, 2],
            [0, 3, 0],
            [4, 4, 4],
            [0, 0, 5],
        ]
    )
    assert board.clear_filled_rows() == 2
    assert board.rows() == [
        [None, None, None],
        [None, None, None],
        [None, None, None],
        [1, None, None],
        [None, 3, None],
        [None, None, 5],
    ]


def test_whole_board_full():
    board = Board.from_rows([[1, 1], [1, 1], [1, 1]])
    assert board.clear_filled_rows() == 3
    assert not board.occupancy().any()
    assert board.height() == 3


def test_clear_requires_no_active_piece():
    board = Board(5, 5)
    board.spawn(Tetromino.of(TetrominoType.O), 1)
    with pytest.raises(BoardStateError):
        board.clear_filled_rows()


def test_locked_piece_completes_row():
    board = Board.from_rows(
        [
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0],
            [9, 0, 0, 0, 0],
        ]
    )
    board.spawn(Tetromino.of(TetrominoType.I), 1)
    assert board.drop() == 3
    board.lock()
    assert board.clear_filled_rows() == 1
    assert not board.occupancy().any()
