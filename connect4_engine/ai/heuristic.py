"""
heuristic.py - Fixed-priority opponent for Connect Four

This module provides a HeuristicPlayer that picks a column by looking a
single ply ahead. The rules are applied in order and the first one that
produces a column wins:

1. Win now: the first column (left to right) that completes a line for us
2. Block: the first column that would complete a line for the opponent
3. Center: the middle column if it has room
4. Random: any column with room, chosen uniformly

Multi-move combinations such as double threats are not considered.
"""

from typing import Optional, Union

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.game.board import Board
from connect4_engine.utils import CENTER_COLUMN, Side

RandomSource = Union[np.random.Generator, int, None]


def find_winning_column(board: Board, side: Side) -> Optional[int]:
    """
    Find the leftmost column where ``side`` wins immediately.

    Args:
        board: The board to examine (left unchanged)
        side: The side to test

    Returns:
        Column index, or None if no immediate win exists
    """
    for col in board.valid_columns():
        if board.would_win(col, side):
            return col
    return None


class HeuristicPlayer:
    """
    A Connect Four player using a fixed-priority, one-ply heuristic.

    Ties in the win and block rules are broken by column index.
    """

    def __init__(self, rng: RandomSource = None):
        """
        Initialize the heuristic player.

        Args:
            rng: numpy Generator or seed for the random fallback
        """
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.last_rule: Optional[str] = None

    def seed(self, rng: RandomSource) -> None:
        """Replace the random source used by the fallback rule."""
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

    def choose_column(self, board: Board, self_side: Side, other_side: Side) -> Optional[int]:
        """
        Pick a column for ``self_side``.

        Args:
            board: The current board (left unchanged)
            self_side: The side to move
            other_side: The opposing side

        Returns:
            Column index, or None when no column has room
        """
        col = find_winning_column(board, self_side)
        if col is not None:
            return self._picked(col, "win")

        col = find_winning_column(board, other_side)
        if col is not None:
            return self._picked(col, "block")

        if board.has_room(CENTER_COLUMN):
            return self._picked(CENTER_COLUMN, "center")

        valid = board.valid_columns()
        if not valid:
            debug.warning("No column with room left for the automated side", "ai")
            self.last_rule = None
            return None

        return self._picked(int(self.rng.choice(valid)), "random")

    def _picked(self, col: int, rule: str) -> int:
        self.last_rule = rule
        debug.debug(f"Heuristic picked column {col} ({rule})", "ai")
        return col

    def get_name(self) -> str:
        return "Heuristic (one ply)"


def choose_column(board: Board, self_side: Side, other_side: Side,
                  rng: RandomSource = None) -> Optional[int]:
    """Pick a column with a throwaway HeuristicPlayer."""
    return HeuristicPlayer(rng).choose_column(board, self_side, other_side)
