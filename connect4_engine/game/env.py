"""
env.py - Gymnasium environment for Connect Four against the heuristic

The agent plays FIRST in VS_AUTOMATED mode. Each step applies the agent's
column through the GameController, which plays the heuristic reply before
the observation is taken.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4_engine.debug import debug
from connect4_engine.game.rules import GameController
from connect4_engine.utils import COLS, ROWS, GameMode, Winner


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Actions are column indices. Observations are the ROWS x COLS grid with
    0 for empty, 1 for the agent and 2 for the heuristic opponent.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    reward_win = 1.0
    reward_lose = -1.0
    reward_draw = 0.1
    reward_invalid_move = -0.5
    reward_step = -0.01

    def __init__(self, render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            render_mode: One of ``metadata['render_modes']`` or None
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)
        self.render_mode = render_mode
        self.controller = GameController(GameMode.VS_AUTOMATED)

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new match.

        Args:
            seed: Seed for the environment and the opponent's random fallback
            options: Unused

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        self.controller.player.seed(self.np_random)
        self.controller.new_game(GameMode.VS_AUTOMATED)
        debug.debug("Environment reset", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Play ``action`` for the agent.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        result = self.controller.apply_move(int(action))

        if not result.accepted:
            debug.warning(f"Invalid action {action}: {result.message}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            info['reason'] = result.reason.value if result.reason else None
            return self._get_observation(), self.reward_invalid_move, False, True, info

        state = self.controller.state
        reward = self.reward_step
        terminated = state.game_over
        if state.winner == Winner.FIRST:
            reward = self.reward_win
        elif state.winner == Winner.SECOND:
            reward = self.reward_lose
        elif state.winner == Winner.DRAW:
            reward = self.reward_draw

        if terminated:
            debug.info(f"Episode finished: {state.winner.name}", "env")

        info = self._get_info()
        if result.automated_reply is not None:
            info['opponent_column'] = result.automated_reply.column

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.controller.state.board.render()
        if self.render_mode == "human":
            print(self.controller.state.board.render())
        return None

    def valid_action_mask(self) -> np.ndarray:
        """Boolean mask of columns that still have room."""
        board = self.controller.state.board
        return np.array([board.has_room(col) for col in range(COLS)], dtype=bool)

    def _get_observation(self) -> np.ndarray:
        return self.controller.state.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        state = self.controller.state
        return {
            'valid_moves': state.board.valid_columns(),
            'current_player': state.current_side.value,
            'game_result': state.winner.name,
            'moves_made': len(state.move_history),
            'winning_line': list(state.winning_line),
        }
