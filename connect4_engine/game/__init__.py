"""
connect4_engine.game - Core game mechanics for Connect Four

This package contains the board representation, the game state containers,
the turn controller (``rules``) and the single-match owner (``session``).
Import ``rules``, ``session`` and ``env`` directly; they depend on the
``ai`` package, which in turn depends on ``board``.

The environment is registered with gymnasium as ``ConnectFourHeuristic-v0``
so agents can build it with ``gymnasium.make``.
"""

import gymnasium

from connect4_engine.game.board import Board
from connect4_engine.game.state import GameState, MoveResult, PlacedMove

ENV_ID = "ConnectFourHeuristic-v0"

if ENV_ID not in gymnasium.registry:
    gymnasium.register(id=ENV_ID, entry_point="connect4_engine.game.env:ConnectFourEnv")

__all__ = ['Board', 'GameState', 'MoveResult', 'PlacedMove', 'ENV_ID']
