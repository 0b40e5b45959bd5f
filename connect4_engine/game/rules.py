"""
rules.py - Turn controller for Connect Four

This module provides the GameController, which owns the single GameState,
applies moves through the Board, decides wins and draws, alternates turns
and, in VS_AUTOMATED mode, plays the automated reply before returning.

The controller performs no locking. It expects exactly one mutation in flight
at a time; use ``connect4_engine.game.session.GameSession`` when several
threads share it.
"""

from numbers import Integral
from typing import Optional, Union

from connect4_engine.ai.heuristic import HeuristicPlayer, RandomSource
from connect4_engine.debug import debug
from connect4_engine.errors import InvalidColumnError, MoveAfterGameOverError, MoveError, RejectReason
from connect4_engine.game.state import GameState, MoveResult, PlacedMove
from connect4_engine.utils import (STATUS_MESSAGES, GameMode, Side, Winner,
                                   is_valid_column, winner_message)

REJECT_MESSAGES = {
    RejectReason.COLUMN_FULL: STATUS_MESSAGES["column_full"],
    RejectReason.INVALID_COLUMN: STATUS_MESSAGES["invalid_column"],
    RejectReason.MOVE_AFTER_GAME_OVER: STATUS_MESSAGES["game_over"],
}


def turn_message(side: Side) -> str:
    return STATUS_MESSAGES["first_to_move"] if side == Side.FIRST else STATUS_MESSAGES["second_to_move"]


class GameController:
    """
    Owns and mutates the active GameState.

    States are ``Active(side)`` while ``game_over`` is False and
    ``Over(winner)`` once it is True. After every non-terminal move the side
    to move flips, in both modes.
    """

    def __init__(self, mode: Union[GameMode, str, None] = GameMode.TWO_PLAYER,
                 player: Optional[HeuristicPlayer] = None,
                 rng: RandomSource = None):
        """
        Initialize the controller with a fresh match.

        Args:
            mode: Initial game mode
            player: Automated opponent (a HeuristicPlayer by default)
            rng: numpy Generator or seed for the default opponent
        """
        self.player = player or HeuristicPlayer(rng)
        self.state = GameState()
        self.new_game(mode)

    def new_game(self, mode: Union[GameMode, str, None] = None) -> GameState:
        """
        Replace the active match with an empty one.

        Args:
            mode: New mode; None or empty keeps the current mode and an
                unrecognised value falls back to TWO_PLAYER

        Returns:
            Snapshot of the new state
        """
        resolved = GameMode.parse(mode)
        if resolved is None:
            if mode:
                debug.warning(f"Unknown game mode {mode!r}, using {GameMode.TWO_PLAYER.value}", "rules")
                resolved = GameMode.TWO_PLAYER
            else:
                resolved = self.state.mode

        self.state = GameState(mode=resolved, status_message=turn_message(Side.FIRST))
        debug.info(f"New game started in {resolved.value} mode", "rules")
        return self.current_state()

    def current_state(self) -> GameState:
        """Get a read-only snapshot of the active state."""
        return self.state.copy()

    def apply_move(self, column: int) -> MoveResult:
        """
        Play ``column`` for the side to move.

        In VS_AUTOMATED mode an accepted move that hands the turn to the
        automated side is followed by its reply before this returns.

        Args:
            column: Column index supplied by the caller

        Returns:
            MoveResult describing the accepted or rejected move
        """
        return self._play_and_reply(column, self.state.current_side)

    def automated_move(self) -> MoveResult:
        """
        Let the heuristic play for the side to move.

        Returns:
            MoveResult for the heuristic's column
        """
        if self.state.game_over:
            return self._reject(MoveAfterGameOverError("Game is already over"), None)

        side = self.state.current_side
        col = self.player.choose_column(self.state.board, side, side.other())
        if col is None:
            debug.warning("Automated move requested with no column available", "rules")
            return MoveResult(accepted=False, column=None, state=self.current_state(),
                              message=STATUS_MESSAGES["no_column"])

        return self._play_and_reply(col, side)

    def suggest_column(self) -> Optional[int]:
        """Get the heuristic's column for the side to move without playing it."""
        if self.state.game_over:
            return None
        side = self.state.current_side
        return self.player.choose_column(self.state.board, side, side.other())

    def _play_and_reply(self, column: int, side: Side) -> MoveResult:
        result = self._play(column, side)
        if not result.accepted or not self.state.is_automated_turn:
            return result

        reply = self._automated_reply()
        result.automated_reply = reply
        result.state = self.current_state()
        result.message = self.state.status_message
        return result

    def _play(self, column: int, side: Side) -> MoveResult:
        """Run Place -> CheckWin/IsFull -> turn update for one piece."""
        state = self.state
        try:
            if state.game_over:
                raise MoveAfterGameOverError("Game is already over", column)
            if isinstance(column, bool) or not isinstance(column, Integral) or not is_valid_column(column):
                raise InvalidColumnError(f"Column {column!r} is out of range", column)
            column = int(column)
            row = state.board.place_piece(column, side)
        except MoveError as e:
            return self._reject(e, column)

        self._advance(PlacedMove(side=side, column=column, row=row))
        return MoveResult(accepted=True, column=column, landing_row=row,
                          state=self.current_state(), message=state.status_message)

    def _advance(self, move: PlacedMove) -> None:
        state = self.state
        board = state.board
        state.move_history.append(move)

        winner_side = board.check_win(move.row, move.column)
        if winner_side is not None:
            state.game_over = True
            state.winner = Winner.from_side(winner_side)
            state.winning_line = board.winning_line(move.row, move.column)
            state.status_message = winner_message(state.winner)
            debug.info(f"{winner_side.name} wins after move at ({move.row}, {move.column})", "rules")
        elif board.is_full():
            state.game_over = True
            state.winner = Winner.DRAW
            state.status_message = winner_message(Winner.DRAW)
            debug.info("Game ends in a draw", "rules")
        else:
            state.current_side = move.side.other()
            state.status_message = turn_message(state.current_side)
            debug.debug(f"Switching to {state.current_side.name}", "rules")

    def _automated_reply(self) -> Optional[PlacedMove]:
        side = self.state.current_side
        col = self.player.choose_column(self.state.board, side, side.other())
        if col is None:
            # Board full; the draw check should already have ended the game.
            debug.warning("Automated side has no legal column, skipping its turn", "rules")
            return None

        result = self._play(col, side)
        if not result.accepted:
            debug.error(f"Automated move in column {col} was rejected: {result.reason}", "rules")
            return None
        return PlacedMove(side=side, column=col, row=result.landing_row)

    def _reject(self, error: MoveError, column) -> MoveResult:
        message = REJECT_MESSAGES[error.reason]
        # A finished game keeps its outcome announcement.
        if error.reason != RejectReason.MOVE_AFTER_GAME_OVER:
            self.state.status_message = message
        debug.info(f"Move rejected ({error.reason.value}): {error}", "rules")
        return MoveResult(accepted=False, column=column, reason=error.reason,
                          state=self.current_state(), message=message)
