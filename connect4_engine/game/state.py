"""
state.py - Game state containers for Connect Four

GameState aggregates the board with turn, mode and outcome data. MoveResult
is what the turn controller hands back for every submitted move.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from connect4_engine.errors import RejectReason
from connect4_engine.game.board import Board
from connect4_engine.utils import Coord, GameMode, Side, Winner


@dataclass(frozen=True)
class PlacedMove:
    """A piece that was actually dropped on the board."""

    side: Side
    column: int
    row: int

    def to_dict(self) -> Dict[str, Any]:
        return {"side": self.side.value, "column": self.column, "row": self.row}


@dataclass
class GameState:
    """Complete state of the single active match."""

    board: Board = field(default_factory=Board)
    current_side: Side = Side.FIRST
    mode: GameMode = GameMode.TWO_PLAYER
    game_over: bool = False
    winner: Winner = Winner.NONE
    status_message: str = ""
    move_history: List[PlacedMove] = field(default_factory=list)
    winning_line: List[Coord] = field(default_factory=list)

    @property
    def last_move(self) -> Optional[PlacedMove]:
        return self.move_history[-1] if self.move_history else None

    @property
    def is_automated_turn(self) -> bool:
        return (not self.game_over
                and self.mode == GameMode.VS_AUTOMATED
                and self.current_side == Side.SECOND)

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        return GameState(
            board=self.board.copy(),
            current_side=self.current_side,
            mode=self.mode,
            game_over=self.game_over,
            winner=self.winner,
            status_message=self.status_message,
            move_history=list(self.move_history),
            winning_line=list(self.winning_line),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for callers that serialise the state."""
        return {
            "board": self.board.to_list(),
            "currentPlayer": self.current_side.value,
            "mode": self.mode.value,
            "gameOver": self.game_over,
            "winner": self.winner.value,
            "statusMessage": self.status_message,
            "moveHistory": [move.to_dict() for move in self.move_history],
            "winningLine": [list(pos) for pos in self.winning_line],
        }


@dataclass
class MoveResult:
    """Outcome of a submitted move."""

    accepted: bool
    column: Optional[int]
    state: GameState
    landing_row: Optional[int] = None
    reason: Optional[RejectReason] = None
    message: str = ""
    automated_reply: Optional[PlacedMove] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.accepted,
            "message": self.message,
            "column": self.column,
            "landingRow": self.landing_row,
            "reason": self.reason.value if self.reason else None,
            "automatedReply": self.automated_reply.to_dict() if self.automated_reply else None,
            "gameState": self.state.to_dict(),
            "winner": self.state.winner.value,
        }
