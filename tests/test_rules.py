import numpy as np
import pytest

from connect4_engine.errors import RejectReason
from connect4_engine.game.board import Board
from connect4_engine.game.rules import GameController
from connect4_engine.game.state import PlacedMove
from connect4_engine.utils import (CENTER_COLUMN, ROWS, STATUS_MESSAGES, GameMode, Side, Winner,
                                   winner_message)

from tests.conftest import DRAW_SEQUENCE, draw_grid


def play(controller, columns):
    results = [controller.apply_move(col) for col in columns]
    assert all(r.accepted for r in results)
    return results


def test_new_game_initial_state(two_player):
    state = two_player.current_state()
    assert state.board == Board()
    assert state.current_side == Side.FIRST
    assert state.mode == GameMode.TWO_PLAYER
    assert not state.game_over
    assert state.winner == Winner.NONE
    assert state.move_history == []
    assert state.last_move is None


@pytest.mark.parametrize("mode, expected", [
    ("ai", GameMode.VS_AUTOMATED),
    ("twoPlayer", GameMode.TWO_PLAYER),
    (GameMode.VS_AUTOMATED, GameMode.VS_AUTOMATED),
    ("VS_AUTOMATED", GameMode.VS_AUTOMATED),
    ("chess", GameMode.TWO_PLAYER),
])
def test_new_game_mode_resolution(two_player, mode, expected):
    assert two_player.new_game(mode).mode == expected


def test_new_game_without_mode_keeps_current(vs_automated):
    vs_automated.apply_move(0)
    state = vs_automated.new_game()
    assert state.mode == GameMode.VS_AUTOMATED
    assert state.move_history == []


def test_two_player_turns_alternate(two_player):
    first = two_player.apply_move(0)
    assert first.accepted
    assert first.landing_row == ROWS - 1
    assert first.automated_reply is None
    assert first.state.current_side == Side.SECOND

    second = two_player.apply_move(0)
    assert second.landing_row == ROWS - 2
    assert second.state.current_side == Side.FIRST
    assert second.state.board.cell(ROWS - 2, 0) == Side.SECOND


def test_vertical_four_ends_game(two_player):
    results = play(two_player, [3, 4, 3, 4, 3, 4, 3])
    state = results[-1].state
    assert state.game_over
    assert state.winner == Winner.FIRST
    assert state.current_side == Side.FIRST
    assert state.winning_line == [(2, 3), (3, 3), (4, 3), (5, 3)]
    assert state.status_message == winner_message(Winner.FIRST)
    assert results[-1].message == winner_message(Winner.FIRST)


def test_drawn_game(two_player):
    results = play(two_player, DRAW_SEQUENCE)
    state = results[-1].state
    assert np.array_equal(state.board.grid, draw_grid())
    assert state.board.is_full()
    assert state.game_over
    assert state.winner == Winner.DRAW
    assert state.winning_line == []
    # No earlier move ended the game.
    assert not any(r.state.game_over for r in results[:-1])


def test_move_after_game_over_is_rejected(two_player):
    play(two_player, [3, 4, 3, 4, 3, 4, 3])
    before = two_player.current_state()

    result = two_player.apply_move(0)

    assert not result.accepted
    assert result.reason == RejectReason.MOVE_AFTER_GAME_OVER
    assert result.state.board == before.board
    assert result.state.move_history == before.move_history
    assert result.state.winner == Winner.FIRST
    assert result.message == STATUS_MESSAGES["game_over"]
    assert result.state.status_message == winner_message(Winner.FIRST)
    assert two_player.current_state().status_message == winner_message(Winner.FIRST)


def test_full_column_is_rejected(two_player):
    play(two_player, [0] * ROWS)
    before = two_player.current_state()

    result = two_player.apply_move(0)

    assert not result.accepted
    assert result.reason == RejectReason.COLUMN_FULL
    assert result.landing_row is None
    assert result.message == STATUS_MESSAGES["column_full"]
    assert result.state.board == before.board
    assert result.state.current_side == before.current_side == Side.FIRST
    assert len(result.state.move_history) == ROWS


@pytest.mark.parametrize("column", [-1, 7, 42, "3", 2.0, None, True])
def test_invalid_column_is_rejected(two_player, column):
    result = two_player.apply_move(column)
    assert not result.accepted
    assert result.reason == RejectReason.INVALID_COLUMN
    assert result.state.board == Board()
    assert result.state.current_side == Side.FIRST


def test_numpy_integer_column_is_accepted(two_player):
    result = two_player.apply_move(np.int64(2))
    assert result.accepted
    assert result.column == 2
    assert isinstance(result.column, int)


def test_automated_reply_after_human_move(vs_automated):
    result = vs_automated.apply_move(0)

    assert result.accepted
    assert result.landing_row == ROWS - 1
    assert result.automated_reply == PlacedMove(Side.SECOND, CENTER_COLUMN, ROWS - 1)
    assert result.state.current_side == Side.FIRST
    assert len(result.state.move_history) == 2
    assert result.state.board.cell(ROWS - 1, CENTER_COLUMN) == Side.SECOND


def test_automated_side_blocks_then_wins(vs_automated):
    replies = [vs_automated.apply_move(col) for col in [0, 0, 0, 1, 1]]
    assert [r.automated_reply.column for r in replies] == [3, 3, 0, 3, 3]

    state = replies[-1].state
    assert state.game_over
    assert state.winner == Winner.SECOND
    assert state.current_side == Side.SECOND
    assert state.winning_line == [(2, 3), (3, 3), (4, 3), (5, 3)]


def test_automated_reply_only_while_game_active(vs_automated):
    # Horizontal threat on the bottom row that the heuristic has to block.
    vs_automated.state.board = Board.from_grid(np.array([
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 2, 0, 0, 0],
        [0, 0, 0, 2, 0, 0, 0],
        [1, 1, 1, 2, 0, 0, 0],
    ]))
    result = vs_automated.apply_move(1)
    assert result.automated_reply is not None
    assert result.automated_reply.column == 3
    assert result.state.winner == Winner.SECOND

    vs_automated.new_game()
    vs_automated.state.board = Board.from_grid(np.array([
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [1, 1, 1, 0, 2, 2, 0],
    ]))
    result = vs_automated.apply_move(3)
    assert result.automated_reply is None
    assert result.state.winner == Winner.FIRST
    assert len(result.state.move_history) == 1


def test_final_move_fills_board_for_draw(two_player):
    grid = draw_grid()
    last_side = Side(int(grid[0, 6]))
    grid[0, 6] = Side.EMPTY.value
    two_player.state.board = Board.from_grid(grid)
    two_player.state.current_side = last_side

    result = two_player.apply_move(6)

    assert result.accepted
    assert result.state.winner == Winner.DRAW
    assert result.message == winner_message(Winner.DRAW)


def test_suggest_column_does_not_play(two_player):
    play(two_player, [5, 0, 5, 0, 5])
    before = two_player.current_state()
    assert two_player.suggest_column() == 5
    after = two_player.current_state()
    assert after.board == before.board
    assert after.move_history == before.move_history


def test_automated_move_plays_for_side_to_move(two_player):
    result = two_player.automated_move()
    assert result.accepted
    assert result.column == CENTER_COLUMN
    assert result.state.current_side == Side.SECOND


def test_automated_move_after_game_over(two_player):
    play(two_player, [3, 4, 3, 4, 3, 4, 3])
    result = two_player.automated_move()
    assert not result.accepted
    assert result.reason == RejectReason.MOVE_AFTER_GAME_OVER
    assert two_player.suggest_column() is None


def test_current_state_is_a_snapshot(two_player):
    snapshot = two_player.current_state()
    two_player.apply_move(0)
    assert snapshot.board == Board()
    assert snapshot.move_history == []


def test_state_to_dict(vs_automated):
    result = vs_automated.apply_move(0)
    data = result.to_dict()
    assert data["success"] is True
    assert data["landingRow"] == ROWS - 1
    assert data["automatedReply"] == {"side": 2, "column": 3, "row": ROWS - 1}
    assert data["gameState"]["mode"] == "ai"
    assert data["gameState"]["currentPlayer"] == 1
    assert data["gameState"]["board"][ROWS - 1][:4] == [1, 0, 0, 2]
    assert data["winner"] == 0


def test_custom_opponent_is_used():
    class LeftmostPlayer:
        def choose_column(self, board, self_side, other_side):
            return board.valid_columns()[0]

    controller = GameController(GameMode.VS_AUTOMATED, player=LeftmostPlayer())
    result = controller.apply_move(6)
    assert result.automated_reply.column == 0
