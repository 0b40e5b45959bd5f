"""
utils.py - Constants, enumerations and grid helpers for the Connect Four engine

This module provides the shared constants, the side/winner/mode enumerations
and the grid-level win detection used by the board and the heuristic.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
CENTER_COLUMN = COLS // 2
BOTTOM_ROW = ROWS - 1

Coord = Tuple[int, int]  # (row, col)


class Side(Enum):
    """Enumeration representing the two sides and the empty cell state."""
    EMPTY = 0
    FIRST = 1    # Human in every mode
    SECOND = 2   # Automated side in VS_AUTOMATED mode

    def other(self) -> "Side":
        """Get the opposing side."""
        if self == Side.FIRST:
            return Side.SECOND
        elif self == Side.SECOND:
            return Side.FIRST
        return Side.EMPTY

    def __str__(self):
        if self == Side.EMPTY:
            return " "
        elif self == Side.FIRST:
            return "X"
        else:
            return "O"


class Winner(Enum):
    """Enumeration representing the outcome of a match."""
    NONE = 0
    FIRST = 1
    SECOND = 2
    DRAW = 3

    @classmethod
    def from_side(cls, side: Side) -> "Winner":
        if side == Side.FIRST:
            return cls.FIRST
        if side == Side.SECOND:
            return cls.SECOND
        return cls.NONE


class GameMode(Enum):
    """Enumeration of the supported match modes, valued by their wire names."""
    TWO_PLAYER = "twoPlayer"
    VS_AUTOMATED = "ai"

    @classmethod
    def parse(cls, value: Union["GameMode", str, None]) -> Optional["GameMode"]:
        """Resolve a mode from an enum member, wire value or member name."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        text = str(value).strip()
        for mode in cls:
            if text == mode.value or text.upper() == mode.name:
                return mode
        return None


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}

# Human readable status texts
STATUS_MESSAGES: Dict[str, str] = {
    "first_wins": "Red player (Player 1) wins!",
    "second_wins": "Yellow player (Player 2) wins!",
    "draw": "Draw game! Perfect equality!",
    "column_full": "Column full!",
    "invalid_column": "Invalid column",
    "game_over": "Game is over, start a new game",
    "no_column": "No column available",
    "first_to_move": "Red player's turn",
    "second_to_move": "Yellow player's turn",
}


def winner_message(winner: Winner) -> str:
    """Return the announcement text for a finished match."""
    if winner == Winner.FIRST:
        return STATUS_MESSAGES["first_wins"]
    if winner == Winner.SECOND:
        return STATUS_MESSAGES["second_wins"]
    if winner == Winner.DRAW:
        return STATUS_MESSAGES["draw"]
    return ""


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(col: int) -> bool:
    """Check if a column index is within [0, COLS)."""
    return 0 <= col < COLS


def count_direction(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> int:
    """
    Count contiguous cells matching (row, col) along one line.

    The count includes the cell itself and extends in both the positive
    and the negative direction of (dr, dc).
    """
    player_value = grid[row, col]
    count = 1

    # Positive direction
    r, c = row + dr, col + dc
    while is_valid_position(r, c) and grid[r, c] == player_value:
        count += 1
        r += dr
        c += dc

    # Negative direction
    r, c = row - dr, col - dc
    while is_valid_position(r, c) and grid[r, c] == player_value:
        count += 1
        r -= dr
        c -= dc

    return count


def check_win_at_position(grid: np.ndarray, row: int, col: int) -> Optional[Side]:
    """
    Check whether the piece at (row, col) is part of a winning line.

    Args:
        grid: The game grid
        row: Row index where the piece was placed
        col: Column index where the piece was placed

    Returns:
        The winning side, or None if the cell is empty or completes no line
    """
    player_value = int(grid[row, col])
    if player_value == Side.EMPTY.value:
        return None

    for dr, dc in DIRECTION_VECTORS.values():
        if count_direction(grid, row, col, dr, dc) >= CONNECT_N:
            return Side(player_value)

    return None


def line_through(grid: np.ndarray, row: int, col: int) -> List[Coord]:
    """
    Get the cells of the first completed line through (row, col).

    Returns:
        List of (row, col) positions sorted top-left first, or empty list
    """
    player_value = grid[row, col]
    if player_value == Side.EMPTY.value:
        return []

    for dr, dc in DIRECTION_VECTORS.values():
        positions = [(row, col)]

        r, c = row + dr, col + dc
        while is_valid_position(r, c) and grid[r, c] == player_value:
            positions.append((r, c))
            r += dr
            c += dc

        r, c = row - dr, col - dc
        while is_valid_position(r, c) and grid[r, c] == player_value:
            positions.append((r, c))
            r -= dr
            c -= dc

        if len(positions) >= CONNECT_N:
            return sorted(positions)

    return []


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the grid as ASCII art.

    Args:
        grid: The game grid

    Returns:
        ASCII representation of the board
    """
    result = ["|" + "-" * (COLS * 2 - 1) + "|"]

    for row in range(ROWS):
        cells = [str(Side(int(grid[row, col]))) for col in range(COLS)]
        result.append("|" + " ".join(cells) + "|")

    result.append("|" + "-" * (COLS * 2 - 1) + "|")
    result.append("|" + " ".join(str(i) for i in range(COLS)) + "|")

    return "\n".join(result)
