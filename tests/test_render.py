from termtris.__main__ import main
from termtris.board import Board
from termtris.tetromino import Tetromino, TetrominoType
from termtris.utils import format_grid, render_grid


def test_render_grid_includes_active_piece():
    board = Board(5, 3)
    board.spawn(Tetromino.of(TetrominoType.I), "i")
    grid = render_grid(board)
    assert grid == [
        [None, "i", "i", "i", "i"],
        [None] * 5,
        [None] * 5,
    ]
    grid[1][0] = "x"
    assert board.get(0, 1) is None


def test_format_grid():
    board = Board(5, 3)
    board.spawn(Tetromino.of(TetrominoType.T), 1)
    assert format_grid(board) == ".###.\n..#..\n....."
    assert format_grid(board, filled="X", empty=" ") == " XXX \n  X  \n     "


def test_ascii_entry_point_prints_one_frame(capsys):
    main(["--ascii", "--width", "6", "--height", "4", "--seed", "1"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert all(len(line) == 6 for line in lines)
    assert "#" in lines[0]
