import logging
import random

from termtris.game_state import PALETTE, GameState
from termtris.tetromino import SHAPES, Tetromino, TetrominoType


RED = (255, 0, 0)


def fixed_pieces(state, shape):
    state.next_piece = lambda: (Tetromino.of(shape), RED)


def test_reset_spawns_first_piece():
    state = GameState(rng=random.Random(1))
    state.reset_game()
    assert state.active is not None
    assert state.pieces == 1
    assert state.score == 0
    assert not state.over


def test_next_piece_draws_from_shapes_and_palette():
    state = GameState(rng=random.Random(3))
    for _ in range(50):
        piece, color = state.next_piece()
        assert piece.cells in SHAPES.values()
        assert color in PALETTE


def test_tick_moves_piece_down():
    state = GameState(rng=random.Random(2))
    state.reset_game()
    before = state.active
    state.tick()
    assert state.active == before.down()
    assert state.pieces == 1


def test_hard_drop_locks_and_spawns_next():
    state = GameState(width=6, height=6)
    fixed_pieces(state, TetrominoType.O)
    state.reset_game()
    assert state.hard_drop()
    assert state.pieces == 2
    assert state.board.rows()[5] == [None, None, None, RED, RED, None]
    assert state.active.cells == ((3, 0), (4, 0), (3, 1), (4, 1))


def test_moves_stop_at_walls():
    state = GameState(width=6, height=10)
    fixed_pieces(state, TetrominoType.O)
    state.reset_game()
    moves = 0
    while state.move_left():
        moves += 1
    assert moves == 3
    assert min(x for x, _ in state.active.cells) == 0
    assert state.pieces == 1


def test_completed_row_scores(caplog):
    state = GameState(width=6, height=4)
    fixed_pieces(state, TetrominoType.I)
    state.reset_game()
    state.board.set(0, 3, RED)
    state.board.set(1, 3, RED)

    with caplog.at_level(logging.INFO, logger="termtris.game_state"):
        state.hard_drop()

    assert state.score == 1
    assert state.pieces == 2
    assert state.board.rows()[3] == [None] * 6
    assert "Cleared 1 row(s)" in caplog.text


def test_game_over_when_spawn_blocked(caplog):
    state = GameState(width=4, height=4)
    fixed_pieces(state, TetrominoType.O)
    state.reset_game()

    with caplog.at_level(logging.INFO, logger="termtris.game_state"):
        state.hard_drop()
        assert not state.over
        state.hard_drop()

    assert state.over
    assert state.pieces == 2
    assert state.active is None
    assert "Game over" in caplog.text

    board_before = state.board.rows()
    assert not state.move_left()
    assert not state.rotate()
    assert not state.hard_drop()
    state.tick()
    assert state.board.rows() == board_before


def test_reset_after_game_over():
    state = GameState(width=4, height=4)
    fixed_pieces(state, TetrominoType.O)
    state.reset_game()
    state.hard_drop()
    state.hard_drop()
    assert state.over
    state.reset_game()
    assert not state.over
    assert state.pieces == 1
    assert state.score == 0


def test_random_game_eventually_ends():
    state = GameState(width=6, height=8, rng=random.Random(7))
    state.reset_game()
    for _ in range(1000):
        if state.over:
            break
        state.hard_drop()
    assert state.over
