"""
errors.py - Move rejection errors for the Connect Four engine

Every error here is local and recoverable. The board raises them and the
turn controller turns them into a rejected move result.
"""

from enum import Enum


class RejectReason(Enum):
    """Reason code attached to a rejected move."""
    COLUMN_FULL = "column_full"
    INVALID_COLUMN = "invalid_column"
    MOVE_AFTER_GAME_OVER = "game_over"


class MoveError(ValueError):
    """Base class for moves the engine refuses to apply."""

    reason: RejectReason

    def __init__(self, message: str, column: int = None):
        super().__init__(message)
        self.column = column


class ColumnFullError(MoveError):
    """Raised when a piece is dropped into a saturated column."""

    reason = RejectReason.COLUMN_FULL


class InvalidColumnError(MoveError):
    """Raised when a column index falls outside the board."""

    reason = RejectReason.INVALID_COLUMN


class MoveAfterGameOverError(MoveError):
    """Raised when a move arrives after the match has ended."""

    reason = RejectReason.MOVE_AFTER_GAME_OVER


class InvalidBoardError(ValueError):
    """Raised when a grid cannot be loaded as a legal board."""
