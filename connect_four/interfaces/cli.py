"""
cli.py - Command-line interface for Connect Four

This module provides a terminal front end for two people sharing a keyboard,
plus a small benchmark of the game engine. It only translates typed input
into engine calls and prints what the engine reports back.
"""

import argparse
import random
import sys
from typing import List, Optional, Union

from connect_four.debug import debug, DebugLevel
from connect_four.errors import ConnectFourError
from connect_four.game.rules import GameEngine, GameStatus
from connect_four.utils import DEFAULT_COLS, DEFAULT_PLAYERS, DEFAULT_ROWS, GameResult

QUIT = 'q'
RESET = 'r'


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self):
        self.engine: Optional[GameEngine] = None
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        parser.add_argument('--debug-level', default=None,
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game')
        play_parser.add_argument('--rows', type=int, default=DEFAULT_ROWS, help='Board height')
        play_parser.add_argument('--cols', type=int, default=DEFAULT_COLS, help='Board width')
        play_parser.add_argument('--p1', default=DEFAULT_PLAYERS[0], help='First player name')
        play_parser.add_argument('--p2', default=DEFAULT_PLAYERS[1], help='Second player name')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the game engine')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of games to play')
        benchmark_parser.add_argument('--seed', type=int, default=None, help='Random seed')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        elif self.args.debug_level:
            debug.set_from_string(self.args.debug_level)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def play_game(self) -> int:
        """Play a Connect Four game in the terminal."""
        try:
            self.engine = GameEngine(self.args.rows, self.args.cols, self.args.p1, self.args.p2)
        except ConnectFourError as e:
            print(f"Cannot start game: {e}")
            return 1

        print("Starting a new Connect Four game!")
        print(self.describe_players())
        print(f"Enter column number (0-{self.engine.width - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'r' to start a new game.")
        print(self.engine.render())

        while True:
            command = self.get_command()

            if command is None:
                continue
            elif command == QUIT:
                print("Quitting game.")
                return 0
            elif command == RESET:
                self.restart()
                continue

            try:
                outcome = self.engine.drop(command)
            except ConnectFourError as e:
                print(f"Invalid move: {e}")
                continue

            print(f"Player {outcome.player} plays column {outcome.column}")
            print(self.engine.render())

            if outcome.status.is_game_over():
                print(self.end_message(outcome.status))
                print("Enter 'r' to play again or 'q' to quit.")

    def describe_players(self) -> str:
        symbols = self.engine.symbols()
        return " vs ".join(f"{player} ({symbols[player]})" for player in self.engine.players)

    def get_command(self) -> Optional[Union[int, str]]:
        """
        Read one command from the current player.

        Returns:
            Column index, QUIT, RESET, or None if the input was not understood
        """
        try:
            user_input = input(f"Player {self.engine.current_player}, your move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in (QUIT, RESET):
            return user_input

        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

    def restart(self) -> None:
        """Start a new game, optionally with new player names."""
        current = self.engine.players
        names = []
        for seat, player in enumerate(current, start=1):
            try:
                name = input(f"Player {seat} name [{player}]: ").strip()
            except EOFError:
                name = ""
            names.append(name or None)

        try:
            self.engine.reset(*names)
        except ConnectFourError as e:
            print(f"Cannot start new game: {e}")
            return

        print("Game restarted.")
        print(self.describe_players())
        print(self.engine.render())

    @staticmethod
    def end_message(status: GameStatus) -> str:
        if status.result == GameResult.WON:
            return f"Player {status.winner} won!"
        return "Tie!"

    def benchmark(self) -> int:
        """Benchmark random games on the engine."""
        iterations = self.args.iterations
        if iterations < 1:
            print("Iterations must be at least 1.")
            return 1

        rng = random.Random(self.args.seed)
        print(f"Running benchmark with {iterations} games...")

        engine = GameEngine()
        results = {result: 0 for result in GameResult if result.is_game_over()}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(iterations):
            engine.reset()
            while not engine.is_game_over():
                engine.drop(rng.choice(engine.valid_columns()))
            results[engine.status.result] += 1
            total_moves += engine.move_count
        elapsed = debug.end_timer("benchmark", "cli")

        print(f"Played {iterations} games with {total_moves} total moves: "
              f"{elapsed:.6f} seconds total, "
              f"{elapsed / iterations * 1000:.6f} ms per game, "
              f"{elapsed / total_moves * 1000:.6f} ms per move")
        print(f"Wins: {results[GameResult.WON]}, Draws: {results[GameResult.DRAW]}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
