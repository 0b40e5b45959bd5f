import numpy as np
import pytest

from connect4_engine.game.board import Board
from connect4_engine.game.rules import GameController
from connect4_engine.game.session import reset_session
from connect4_engine.utils import COLS, ROWS, GameMode, Side

# Two-row block that fills every column twice without any line of four.
# Repeating it three times fills the board in a drawn position.
DRAW_BLOCK = [2, 0, 3, 1, 6, 4, 0, 5, 1, 2, 4, 3, 5, 6]
DRAW_SEQUENCE = DRAW_BLOCK * 3


def draw_grid() -> np.ndarray:
    """Full grid with no four-in-a-row, matching DRAW_SEQUENCE."""
    grid = np.zeros((ROWS, COLS), dtype=np.int8)
    for row in range(ROWS):
        for col in range(COLS):
            first = ((col // 2) + row) % 2 == 0
            grid[row, col] = Side.FIRST.value if first else Side.SECOND.value
    return grid


def stack(board: Board, column: int, sides) -> None:
    """Drop pieces for ``sides`` into ``column`` in order."""
    for side in sides:
        board.place_piece(column, side)


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def two_player():
    return GameController(GameMode.TWO_PLAYER, rng=0)


@pytest.fixture
def vs_automated():
    return GameController(GameMode.VS_AUTOMATED, rng=0)


@pytest.fixture(autouse=True)
def _fresh_session():
    reset_session()
    yield
    reset_session()
