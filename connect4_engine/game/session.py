"""
session.py - Owner of the single active Connect Four match

GameSession wraps the GameController behind a re-entrant lock so that a
whole read-modify-write cycle (move, automated reply, snapshot) runs without
interleaving. Servers embedding the engine should route every mutation
through one session.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from connect4_engine.ai.heuristic import RandomSource
from connect4_engine.debug import debug
from connect4_engine.game.rules import GameController
from connect4_engine.game.state import GameState, MoveResult
from connect4_engine.utils import GameMode


class GameSession:
    """
    Guarded accessor for the one GameController.

    Usage:
        session = GameSession()
        with session.acquire() as controller:
            result = controller.apply_move(3)
    """

    def __init__(self, mode: Union[GameMode, str, None] = GameMode.TWO_PLAYER,
                 rng: RandomSource = None,
                 controller: Optional[GameController] = None):
        self._controller = controller or GameController(mode, rng=rng)
        self._lock = threading.RLock()

    @contextmanager
    def acquire(self) -> Iterator[GameController]:
        """Hold the session lock and yield the controller."""
        with self._lock:
            debug.trace("Session acquired", "session")
            try:
                yield self._controller
            finally:
                debug.trace("Session released", "session")

    def new_game(self, mode: Union[GameMode, str, None] = None) -> GameState:
        with self.acquire() as controller:
            return controller.new_game(mode)

    def apply_move(self, column: int) -> MoveResult:
        with self.acquire() as controller:
            return controller.apply_move(column)

    def automated_move(self) -> MoveResult:
        with self.acquire() as controller:
            return controller.automated_move()

    def current_state(self) -> GameState:
        with self.acquire() as controller:
            return controller.current_state()


_session: Optional[GameSession] = None
_session_lock = threading.Lock()


def get_session() -> GameSession:
    """Get the process-wide session, creating it on first use."""
    global _session
    with _session_lock:
        if _session is None:
            _session = GameSession()
        return _session


def reset_session() -> None:
    """Drop the process-wide session (for testing)."""
    global _session
    with _session_lock:
        _session = None
