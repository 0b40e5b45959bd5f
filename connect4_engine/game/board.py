"""
board.py - Board representation and placement mechanics for Connect Four

This module implements the Board class which holds the 6x7 grid and provides
placement, win detection from the last placed cell, fullness checks and
scoped hypothetical placements for the heuristic opponent.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.errors import ColumnFullError, InvalidBoardError, InvalidColumnError
from connect4_engine.utils import (ROWS, COLS, Coord, Side, check_win_at_position,
                                   is_valid_column, line_through, render_board_ascii)


class Board:
    """
    Represents a Connect Four board.

    The grid is a ROWS x COLS integer array holding ``Side`` values. Row 0
    is the top row and row ROWS-1 the bottom row. The board keeps no turn
    or outcome state; that belongs to the turn controller.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        debug.trace("Resetting board", "board")
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)

    @classmethod
    def from_grid(cls, grid) -> 'Board':
        """
        Build a board from an existing grid.

        Args:
            grid: Nested sequence or array of shape (ROWS, COLS) with Side values

        Returns:
            A new Board instance

        Raises:
            InvalidBoardError: If the shape, values or gravity are wrong
        """
        array = np.asarray(grid)
        if array.shape != (ROWS, COLS):
            raise InvalidBoardError(f"Expected a {ROWS}x{COLS} grid, got shape {array.shape}")

        allowed = {side.value for side in Side}
        if not set(np.unique(array).tolist()) <= allowed:
            raise InvalidBoardError(f"Grid values must be one of {sorted(allowed)}")

        for col in range(COLS):
            occupied = array[:, col] != Side.EMPTY.value
            # Once a cell is occupied every cell below it must be occupied too.
            seen = False
            for row in range(ROWS):
                if occupied[row]:
                    seen = True
                elif seen:
                    raise InvalidBoardError(f"Floating piece in column {col}")

        board = cls()
        board.grid = array.astype(np.int8)
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same grid
        """
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def cell(self, row: int, col: int) -> Side:
        """Get the side occupying a cell."""
        return Side(int(self.grid[row, col]))

    def has_room(self, column: int) -> bool:
        """
        Check if a piece can still be dropped into a column.

        Args:
            column: The column to check (0-indexed)

        Returns:
            True if the column exists and its top cell is empty
        """
        return is_valid_column(column) and self.grid[0, column] == Side.EMPTY.value

    def valid_columns(self) -> List[int]:
        """
        Get the columns that still have room, left to right.

        Returns:
            List of valid column indices
        """
        return [col for col in range(COLS) if self.has_room(col)]

    def landing_row(self, column: int) -> Optional[int]:
        """
        Get the row a piece dropped in ``column`` would land in.

        Returns:
            Row index, or None if the column is full
        """
        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, column] == Side.EMPTY.value:
                return row
        return None

    def place_piece(self, column: int, side: Side) -> int:
        """
        Drop a piece for ``side`` into ``column``.

        Args:
            column: The column to place a piece (0-indexed)
            side: The side owning the piece

        Returns:
            The row the piece landed in

        Raises:
            InvalidColumnError: If the column is outside the board
            ColumnFullError: If the column has no empty cell
            ValueError: If ``side`` is not one of the two players
        """
        if side not in (Side.FIRST, Side.SECOND):
            raise ValueError(f"Cannot place a piece for {side!r}")

        if not is_valid_column(column):
            debug.debug(f"Invalid placement: column {column} out of bounds", "board")
            raise InvalidColumnError(f"Column {column} is out of range", column)

        row = self.landing_row(column)
        if row is None:
            debug.debug(f"Invalid placement: column {column} is full", "board")
            raise ColumnFullError(f"Column {column} is full", column)

        self.grid[row, column] = side.value
        debug.trace(f"Placed {side.name} at ({row}, {column})", "board")
        return row

    def check_win(self, row: int, col: int) -> Optional[Side]:
        """
        Check whether the piece at (row, col) completes a line.

        Only the four lines through this cell are examined, which is enough
        when (row, col) is the most recent placement.

        Returns:
            The winning side, or None
        """
        return check_win_at_position(self.grid, row, col)

    def winning_line(self, row: int, col: int) -> List[Coord]:
        """
        Get the positions of the completed line through (row, col).

        Returns:
            List of (row, col) positions, or empty list if no win
        """
        return line_through(self.grid, row, col)

    def is_full(self) -> bool:
        """
        Check whether the board is full.

        Gravity guarantees that a full top row means a full board.
        """
        return bool(np.all(self.grid[0] != Side.EMPTY.value))

    @contextmanager
    def trial_placement(self, column: int, side: Side) -> Iterator[Optional[int]]:
        """
        Temporarily place a piece for the duration of a ``with`` block.

        Yields the landing row, or None when the column has no room (in which
        case nothing is placed). The placed cell is restored on every exit
        path, including exceptions.
        """
        row = self.landing_row(column) if is_valid_column(column) else None
        if row is None:
            yield None
            return

        self.grid[row, column] = side.value
        try:
            yield row
        finally:
            self.grid[row, column] = Side.EMPTY.value

    def would_win(self, column: int, side: Side) -> bool:
        """
        Check if dropping a piece for ``side`` into ``column`` wins the game.

        The board is left unchanged.
        """
        with self.trial_placement(column, side) as row:
            if row is None:
                return False
            return self.check_win(row, column) == side

    def column_heights(self) -> Tuple[int, ...]:
        """Get the number of pieces stacked in each column."""
        return tuple(int(n) for n in np.count_nonzero(self.grid != Side.EMPTY.value, axis=0))

    def piece_count(self) -> int:
        """Get the number of pieces on the board."""
        return int(np.count_nonzero(self.grid))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the 2D grid
        """
        return self.grid.copy()

    def to_list(self) -> List[List[int]]:
        """Get the grid as nested lists of plain ints."""
        return self.grid.astype(int).tolist()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()
