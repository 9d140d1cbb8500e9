"""GameEngine: moves, terminal detection, undo, rounds and scoring."""

import numpy as np
import pytest

from fourplay.config import GameConfig
from fourplay.errors import (ColumnFullError, ConfigError, GameOverError,
                             InvalidInputError, NoHistoryError)
from fourplay.game.engine import GameEngine, Move
from fourplay.utils import GameStatus, Player

from tests.helpers import (FALLING_DIAGONAL_WIN, HORIZONTAL_WIN, RISING_DIAGONAL_WIN,
                           VERTICAL_WIN, play, snapshot)


def test_new_engine_starts_empty(engine):
    assert (engine.rows, engine.cols) == (6, 7)
    assert not engine.board.any()
    assert engine.current_player == Player.ONE
    assert engine.status == GameStatus.IN_PROGRESS
    assert engine.winner is None
    assert engine.history == ()
    assert engine.scores == {Player.ONE: 0, Player.TWO: 0}
    assert engine.label(Player.ONE) == "Red"
    assert engine.color(Player.TWO) == "yellow"


def test_create_with_custom_values():
    engine = GameEngine.create(rows=5, cols=9, player1_color="blue", player2_color="green",
                               player1_label="Ann", player2_label="Bob")
    assert engine.board.shape == (5, 9)
    assert engine.label(Player.ONE) == "Ann"
    assert engine.color(Player.ONE) == "blue"


def test_create_with_duplicate_colors_fails():
    with pytest.raises(ConfigError, match="duplicate player colors"):
        GameEngine.create(player1_color="red", player2_color="red")


def test_duplicate_colors_compare_case_insensitively():
    with pytest.raises(ConfigError):
        GameEngine.create(player1_color="Blue", player2_color=" blue")


def test_pieces_stack_from_the_bottom(engine):
    rows = [engine.apply_move(3).row for _ in range(engine.rows)]
    assert rows == [5, 4, 3, 2, 1, 0]


def test_move_result_reports_landing_cell_and_player(engine):
    result = engine.apply_move(2)
    assert result.move == Move(5, 2)
    assert result.player == Player.ONE
    assert result.status == GameStatus.IN_PROGRESS
    assert not result.is_game_over
    assert engine.cell(5, 2) == Player.ONE
    assert engine.last_move == Move(5, 2)


def test_full_column_is_rejected_without_changes(engine):
    play(engine, [0] * engine.rows)
    before = snapshot(engine)

    with pytest.raises(ColumnFullError):
        engine.apply_move(0)

    assert snapshot(engine) == before


@pytest.mark.parametrize("col", [-1, 7, 100, "3", 2.0, None, True])
def test_invalid_column_is_rejected_without_changes(engine, col):
    engine.apply_move(1)
    before = snapshot(engine)

    with pytest.raises(InvalidInputError):
        engine.apply_move(col)

    assert snapshot(engine) == before


def test_numpy_integer_column_is_accepted(engine):
    result = engine.apply_move(np.int64(4))
    assert result.move == Move(5, 4)


def test_turns_alternate_with_move_parity(engine):
    for count, col in enumerate([0, 1, 0, 1, 0, 1], start=1):
        engine.apply_move(col)
        expected = Player.ONE if count % 2 == 0 else Player.TWO
        assert engine.current_player == expected


def test_occupied_cells_match_history_length(engine):
    play(engine, [3, 3, 4, 2, 6])
    assert np.count_nonzero(engine.board) == len(engine.history) == 5


def test_vertical_win_scores_a_point(engine):
    result = play(engine, VERTICAL_WIN)

    assert result.status == GameStatus.WON
    assert result.winner == Player.ONE
    assert engine.status == GameStatus.WON
    assert engine.winner == Player.ONE
    assert engine.current_player == Player.ONE
    assert engine.scores == {Player.ONE: 1, Player.TWO: 0}


@pytest.mark.parametrize("columns", [HORIZONTAL_WIN, RISING_DIAGONAL_WIN, FALLING_DIAGONAL_WIN])
def test_other_axis_wins(engine, columns):
    for col in columns[:-1]:
        assert engine.apply_move(col).status == GameStatus.IN_PROGRESS

    result = engine.apply_move(columns[-1])
    assert result.status == GameStatus.WON
    assert result.winner == Player.ONE


def test_player_two_can_win(engine):
    result = play(engine, [0, 1, 0, 1, 0, 1, 6, 1])
    assert result.winner == Player.TWO
    assert engine.scores == {Player.ONE: 0, Player.TWO: 1}


def test_winning_line_through_last_move(engine):
    play(engine, HORIZONTAL_WIN)
    assert engine.get_winning_line() == [(5, 0), (5, 1), (5, 2), (5, 3)]


def test_winning_line_empty_while_in_progress(engine):
    play(engine, [0, 1])
    assert engine.get_winning_line() == []


def test_moves_after_a_win_are_rejected(engine):
    play(engine, VERTICAL_WIN)
    before = snapshot(engine)

    with pytest.raises(GameOverError):
        engine.apply_move(3)

    assert snapshot(engine) == before
    assert engine.valid_moves() == []


def test_single_cell_board_is_a_draw():
    engine = GameEngine.create(rows=1, cols=1)
    result = engine.apply_move(0)

    assert result.status == GameStatus.DRAWN
    assert result.winner is None
    assert engine.scores == {Player.ONE: 0, Player.TWO: 0}


def test_full_board_without_line_is_a_draw():
    engine = GameEngine.create(rows=3, cols=3)
    columns = [0, 1, 2, 0, 1, 2, 0, 1, 2]
    for col in columns[:-1]:
        assert engine.apply_move(col).status == GameStatus.IN_PROGRESS

    assert engine.apply_move(columns[-1]).status == GameStatus.DRAWN
    with pytest.raises(GameOverError):
        engine.apply_move(0)


def test_win_takes_precedence_over_full_board():
    engine = GameEngine.create(rows=1, cols=7)
    result = play(engine, [0, 4, 1, 5, 2, 6, 3])

    assert engine.check_draw()
    assert result.status == GameStatus.WON
    assert result.winner == Player.ONE


def test_check_win_looks_at_the_given_cell(engine):
    play(engine, [0, 6, 0, 6, 0, 6])
    assert not engine.check_win(3, 0)
    engine.apply_move(0)
    assert engine.check_win(2, 0)
    assert engine.check_win(5, 0)


def test_undo_on_empty_history_raises(engine):
    with pytest.raises(NoHistoryError):
        engine.undo_last_move()
    assert engine.status == GameStatus.IN_PROGRESS


def test_apply_then_undo_restores_state(engine):
    play(engine, [3, 4, 3])
    before = snapshot(engine)

    engine.apply_move(2)
    undone = engine.undo_last_move()

    assert undone == Move(5, 2)
    assert snapshot(engine) == before


def test_undo_can_unwind_every_move(engine):
    play(engine, [3, 4, 3, 4])
    for _ in range(4):
        engine.undo_last_move()

    assert engine.history == ()
    assert not engine.board.any()
    assert engine.current_player == Player.ONE


def test_undo_winning_move_rolls_back_score(engine):
    play(engine, VERTICAL_WIN)
    assert engine.score(Player.ONE) == 1

    move = engine.undo_last_move()

    assert move == Move(2, 0)
    assert engine.status == GameStatus.IN_PROGRESS
    assert engine.winner is None
    assert engine.current_player == Player.ONE
    assert engine.cell(2, 0) == Player.EMPTY
    assert engine.scores == {Player.ONE: 0, Player.TWO: 0}


def test_undo_winning_move_then_replay_differently(engine):
    play(engine, VERTICAL_WIN)
    engine.undo_last_move()

    result = engine.apply_move(3)
    assert result.player == Player.ONE
    assert engine.current_player == Player.TWO


def test_undo_after_player_two_win_returns_turn_to_player_two(engine):
    play(engine, [0, 1, 0, 1, 0, 1, 6, 1])
    engine.undo_last_move()

    assert engine.current_player == Player.TWO
    assert engine.score(Player.TWO) == 0


def test_undo_draw_keeps_scores():
    engine = GameEngine.create(rows=1, cols=1)
    engine.apply_move(0)
    engine.undo_last_move()

    assert engine.status == GameStatus.IN_PROGRESS
    assert engine.current_player == Player.ONE
    assert engine.scores == {Player.ONE: 0, Player.TWO: 0}


def test_reset_game_keeps_scores(engine):
    play(engine, VERTICAL_WIN)
    engine.reset_game()

    assert not engine.board.any()
    assert engine.history == ()
    assert engine.status == GameStatus.IN_PROGRESS
    assert engine.current_player == Player.ONE
    assert engine.scores == {Player.ONE: 1, Player.TWO: 0}

    play(engine, VERTICAL_WIN)
    assert engine.score(Player.ONE) == 2


def test_reset_game_after_player_two_moves(engine):
    engine.apply_move(0)
    engine.reset_game()
    assert engine.current_player == Player.ONE


def test_reconfigure_returns_fresh_engine(engine):
    play(engine, VERTICAL_WIN)

    fresh = engine.reconfigure(rows=8, cols=9)

    assert fresh is not engine
    assert fresh.board.shape == (8, 9)
    assert fresh.scores == {Player.ONE: 0, Player.TWO: 0}
    assert fresh.history == ()
    assert fresh.color(Player.ONE) == engine.color(Player.ONE)
    # the old engine is untouched
    assert engine.score(Player.ONE) == 1


def test_reconfigure_rejects_duplicate_colors(engine):
    with pytest.raises(ConfigError):
        engine.reconfigure(player2_color="red")


def test_accessors_return_copies(engine):
    engine.apply_move(0)
    engine.board[5, 0] = 0
    engine.scores[Player.ONE] = 10

    assert engine.cell(5, 0) == Player.ONE
    assert engine.score(Player.ONE) == 0


def test_from_config_uses_the_given_configuration():
    config = GameConfig.build(rows=4, cols=5, player1_label="Ann")
    engine = GameEngine.from_config(config)

    assert engine.config is config
    assert engine.board.shape == (4, 5)
    assert engine.label(Player.ONE) == "Ann"
    assert GameEngine.from_config(None).config == GameConfig()


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (6, 0), (0, 7)])
def test_positions_outside_the_board_are_rejected(engine, row, col):
    engine.apply_move(0)

    with pytest.raises(InvalidInputError):
        engine.cell(row, col)
    with pytest.raises(InvalidInputError):
        engine.check_win(row, col)
