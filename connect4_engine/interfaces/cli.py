"""
cli.py - Command-line interface for the Connect Four engine

This module provides a CLI for playing a match in the terminal, analysing
board positions and timing the engine.
"""

import argparse
import sys
import time
from typing import List, Optional

import numpy as np

from connect4_engine.ai.heuristic import HeuristicPlayer
from connect4_engine.debug import debug, DebugLevel
from connect4_engine.errors import InvalidBoardError
from connect4_engine.game.board import Board
from connect4_engine.game.rules import GameController
from connect4_engine.utils import COLS, ROWS, GameMode, Side

QUIT = "q"
RESTART = "r"
HINT = "h"


def positive_int(value: str) -> int:
    """argparse type accepting integers greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all CLI commands."""
    parser = argparse.ArgumentParser(description='Connect Four engine CLI')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level (ignored when --debug is set)')
    parser.add_argument('--log-file', default=None, help='Also write logs to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--mode', choices=[mode.value for mode in GameMode],
                             default=GameMode.VS_AUTOMATED.value,
                             help='twoPlayer for two humans, ai to play the heuristic')
    play_parser.add_argument('--seed', type=int, default=None,
                             help='Seed for the opponent\'s random fallback')
    play_parser.add_argument('--delay', type=float, default=0.0,
                             help='Pause in seconds before showing the automated reply')

    test_parser = subparsers.add_parser('test', help='Analyse a board position')
    test_parser.add_argument('--position', type=str, required=True,
                             help=f'{ROWS * COLS} comma-separated cell values (0, 1, 2), top row first')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
    benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                  help='Number of iterations for benchmarking')
    benchmark_parser.add_argument('--seed', type=int, default=None)

    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Configure logging from parsed arguments."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)


def parse_position(text: str) -> Board:
    """
    Parse a comma-separated position string into a Board.

    Raises:
        InvalidBoardError: If the string does not describe a legal board
    """
    try:
        values = [int(v) for v in text.split(',')]
    except ValueError as e:
        raise InvalidBoardError(f"Position must contain integers: {e}") from e
    if len(values) != ROWS * COLS:
        raise InvalidBoardError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
    return Board.from_grid(np.array(values).reshape(ROWS, COLS))


class SimpleCLI:
    """Simple command-line interface for the Connect Four engine."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.parser = build_parser()
        self.argv = argv
        self.args = None
        self.controller: Optional[GameController] = None

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.parser.parse_args(self.argv)
        configure_debug(self.args)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            return self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            self.parser.print_help()
            return 1
        return 0

    def play_game(self) -> None:
        """Play a Connect Four game interactively."""
        mode = GameMode.parse(self.args.mode)
        self.controller = GameController(mode, rng=self.args.seed)

        print(f"Starting a new Connect Four game ({mode.value} mode)!")
        print(f"Enter column number (0-{COLS - 1}) to make a move.")
        print(f"Other commands: '{QUIT}' to quit, '{RESTART}' to restart, '{HINT}' for a hint.")
        print(self.controller.state.board.render())

        while not self.controller.state.game_over:
            command = self.get_human_move()
            if command is None:
                continue
            if command == QUIT:
                print("Quitting game.")
                return
            if command == RESTART:
                self.controller.new_game()
                print("Game restarted.")
                print(self.controller.state.board.render())
                continue
            if command == HINT:
                print(f"Hint: column {self.controller.suggest_column()}")
                continue

            result = self.controller.apply_move(command)
            if not result.accepted:
                print(result.message)
                continue

            if result.automated_reply is not None:
                if self.args.delay:
                    time.sleep(self.args.delay)
                print(f"AI plays column {result.automated_reply.column}")
            print(self.controller.state.board.render())
            print(self.controller.state.status_message)

        print("Game over!")

    def get_human_move(self):
        """
        Read one command from the side to move.

        Returns:
            Column index, a command letter, or None on unreadable input
        """
        side = self.controller.state.current_side
        try:
            user_input = input(f"{side.name} move (0-{COLS - 1}, {QUIT}/{RESTART}/{HINT}): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in (QUIT, RESTART, HINT):
            return user_input
        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

    def test_position(self) -> int:
        """Analyse the position given with --position."""
        try:
            board = parse_position(self.args.position)
        except InvalidBoardError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        wins = set()
        for row in range(ROWS):
            for col in range(COLS):
                side = board.check_win(row, col)
                if side is not None:
                    wins.add(side)
        if wins:
            for side in sorted(wins, key=lambda s: s.value):
                print(f"Win for {side.name} on the board")
        else:
            print("No win detected for any side")

        print("Board is full" if board.is_full() else f"Empty spaces: {ROWS * COLS - board.piece_count()}")
        print(f"Valid moves: {board.valid_columns()}")

        player = HeuristicPlayer(0)
        for side in (Side.FIRST, Side.SECOND):
            col = player.choose_column(board, side, side.other())
            print(f"Heuristic move for {side.name}: {col} ({player.last_rule})")
        return 0

    def benchmark(self) -> None:
        """Benchmark the engine."""
        iterations = self.args.iterations
        rng = np.random.default_rng(self.args.seed)
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("placement")
        board = Board()
        moves_made = 0
        for _ in range(iterations):
            col = int(rng.integers(COLS))
            if board.has_room(col):
                row = board.place_piece(col, Side.FIRST if moves_made % 2 == 0 else Side.SECOND)
                moves_made += 1
                if board.check_win(row, col) is not None or board.is_full():
                    board.reset()
        elapsed = debug.end_timer("placement")
        print(f"Placed and checked {moves_made} pieces: {elapsed:.6f} seconds total")

        debug.start_timer("heuristic")
        player = HeuristicPlayer(rng)
        board = Board()
        for _ in range(iterations):
            player.choose_column(board, Side.SECOND, Side.FIRST)
        elapsed = debug.end_timer("heuristic")
        print(f"Heuristic choices: {elapsed / iterations * 1000:.6f} ms per choice")

        debug.start_timer("game_simulation")
        games = max(1, iterations // 10)
        controller = GameController(GameMode.VS_AUTOMATED, rng=rng)
        total_moves = 0
        for _ in range(games):
            controller.new_game(GameMode.VS_AUTOMATED)
            while not controller.state.game_over:
                valid = controller.state.board.valid_columns()
                controller.apply_move(int(rng.choice(valid)))
            total_moves += len(controller.state.move_history)
        elapsed = debug.end_timer("game_simulation")
        print(f"Played {games} games with {total_moves} total moves: "
              f"{elapsed / games * 1000:.6f} ms per game")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
