import io
import logging
import random
import unittest

from connect_four.debug import debug, DebugLevel
from connect_four.errors import (ColumnFull, GameAlreadyOver, InvalidColumn,
                                 InvalidDimensions, InvalidPlayers)
from connect_four.game.rules import GameEngine, GameStatus, MoveOutcome, new_game
from connect_four.utils import EMPTY, GameResult

# Fills a 6x7 board without either player ever getting four in a row.
# Columns 0-5 end up as AABBAA / BBAABB stacks, column 6 alternates.
DRAW_SEQUENCE = (
    [0, 1, 0, 1, 1, 0, 1, 0, 0, 1, 0, 1]
    + [2, 3, 2, 3, 3, 2, 3, 2, 2, 3, 2, 3]
    + [4, 5, 4, 5, 5, 4, 5, 4, 4, 5, 4, 5]
    + [6, 6, 6, 6, 6, 6]
)

# On a 4x4 board, the sixteenth drop fills the last cell and completes the
# top row for the second player.
LAST_CELL_WIN_SEQUENCE = [2, 1, 2, 2, 0, 0, 1, 2, 3, 3, 0, 0, 1, 1, 3, 3]


def play(engine, columns):
    return [engine.drop(col) for col in columns]


def snapshot(engine):
    return (engine.board.get_state().tolist(), engine.status,
            engine.current_player, engine.move_count)


class TestGameEngine(unittest.TestCase):
    def setUp(self):
        self.engine = GameEngine(6, 7, "A", "B")

    def test_initial_state(self):
        self.assertEqual(self.engine.status, GameStatus.in_progress())
        self.assertEqual(self.engine.current_player, "A")
        self.assertEqual(self.engine.players, ("A", "B"))
        self.assertEqual((self.engine.height, self.engine.width), (6, 7))
        self.assertEqual(self.engine.move_count, 0)
        self.assertIsNone(self.engine.winner)
        self.assertFalse(self.engine.is_game_over())

    def test_new_game_defaults(self):
        engine = new_game()
        self.assertEqual((engine.height, engine.width), (6, 7))
        self.assertEqual(engine.players, ("red", "blue"))
        self.assertEqual(engine.current_player, "red")

    def test_construction_errors(self):
        with self.assertRaises(InvalidDimensions):
            GameEngine(3, 7, "A", "B")
        with self.assertRaises(InvalidPlayers):
            GameEngine(6, 7, "A", "A")
        with self.assertRaises(InvalidPlayers):
            GameEngine(6, 7, None, "B")

    def test_drop_reports_landing_cell(self):
        outcome = self.engine.drop(3)
        self.assertEqual(outcome, MoveOutcome(5, 3, "A", GameStatus.in_progress()))
        outcome = self.engine.drop(3)
        self.assertEqual((outcome.row, outcome.column, outcome.player), (4, 3, "B"))
        self.assertEqual(self.engine.cell_at(5, 3), "A")
        self.assertEqual(self.engine.cell_at(4, 3), "B")
        self.assertEqual(self.engine.last_move, (4, 3))

    def test_turns_alternate(self):
        outcomes = play(self.engine, [0, 1, 2, 3, 4, 5, 6, 0])
        for previous, current in zip(outcomes, outcomes[1:]):
            self.assertNotEqual(previous.player, current.player)
        self.assertEqual(self.engine.current_player, "A")

    def test_invalid_column_leaves_state_unchanged(self):
        self.engine.drop(0)
        before = snapshot(self.engine)
        for column in (-1, 7, 100):
            with self.assertRaises(InvalidColumn):
                self.engine.drop(column)
        self.assertEqual(snapshot(self.engine), before)

    def test_full_column_leaves_state_unchanged(self):
        play(self.engine, [0] * 6)
        self.assertEqual(self.engine.status.result, GameResult.IN_PROGRESS)
        before = snapshot(self.engine)
        with self.assertRaises(ColumnFull):
            self.engine.drop(0)
        self.assertEqual(snapshot(self.engine), before)
        self.assertNotIn(0, self.engine.valid_columns())

    def test_vertical_win_scenario(self):
        outcomes = play(self.engine, [0, 1, 0, 1, 0, 1, 0])
        self.assertEqual(outcomes[-1].status, GameStatus.won("A"))
        self.assertEqual(self.engine.status, GameStatus.won("A"))
        self.assertEqual(self.engine.winner, "A")
        for row in (5, 4, 3, 2):
            self.assertEqual(self.engine.cell_at(row, 0), "A")
        # The winner stays the current player
        self.assertEqual(self.engine.current_player, "A")

    def test_horizontal_win(self):
        outcomes = play(self.engine, [0, 0, 1, 1, 2, 2, 3])
        self.assertEqual(outcomes[-1].status.result, GameResult.WON)
        self.assertEqual(outcomes[-1].status.winner, "A")

    def test_second_player_can_win(self):
        outcomes = play(self.engine, [6, 0, 6, 1, 5, 2, 6, 3])
        self.assertEqual(outcomes[-1].status, GameStatus.won("B"))

    def test_ascending_diagonal_win(self):
        outcomes = play(self.engine, [0, 1, 1, 2, 2, 3, 2, 3, 3, 6, 3])
        self.assertEqual(outcomes[-1].status, GameStatus.won("A"))
        self.assertEqual((outcomes[-1].row, outcomes[-1].column), (2, 3))
        for status in (o.status for o in outcomes[:-1]):
            self.assertEqual(status.result, GameResult.IN_PROGRESS)

    def test_descending_diagonal_win(self):
        # Mirror image of the ascending diagonal
        columns = [6 - col for col in [0, 1, 1, 2, 2, 3, 2, 3, 3, 6, 3]]
        outcomes = play(self.engine, columns)
        self.assertEqual(outcomes[-1].status, GameStatus.won("A"))
        self.assertEqual((outcomes[-1].row, outcomes[-1].column), (2, 3))

    def test_diagonal_completed_in_the_middle(self):
        # The last piece lands on (3, 2), the third cell of the diagonal
        outcomes = play(self.engine, [0, 1, 1, 2, 3, 3, 3, 2, 3, 6, 2])
        self.assertEqual((outcomes[-1].row, outcomes[-1].column), (3, 2))
        self.assertEqual(outcomes[-1].status, GameStatus.won("A"))
        for status in (o.status for o in outcomes[:-1]):
            self.assertEqual(status.result, GameResult.IN_PROGRESS)

    def test_drop_after_win_is_rejected(self):
        play(self.engine, [0, 1, 0, 1, 0, 1, 0])
        before = snapshot(self.engine)
        with self.assertRaises(GameAlreadyOver):
            self.engine.drop(4)
        self.assertEqual(snapshot(self.engine), before)
        self.assertEqual(self.engine.valid_columns(), [])

    def test_draw(self):
        self.assertEqual(len(DRAW_SEQUENCE), 42)
        outcomes = play(self.engine, DRAW_SEQUENCE)
        for outcome in outcomes[:-1]:
            self.assertEqual(outcome.status.result, GameResult.IN_PROGRESS)
        self.assertEqual(outcomes[-1].status, GameStatus.draw())
        self.assertIsNone(self.engine.winner)
        self.assertTrue(self.engine.board.is_full())
        before = snapshot(self.engine)
        with self.assertRaises(GameAlreadyOver):
            self.engine.drop(0)
        self.assertEqual(snapshot(self.engine), before)

    def test_win_on_last_cell_is_not_a_draw(self):
        engine = GameEngine(4, 4, "A", "B")
        outcomes = play(engine, LAST_CELL_WIN_SEQUENCE)
        for outcome in outcomes[:-1]:
            self.assertEqual(outcome.status.result, GameResult.IN_PROGRESS)
        self.assertTrue(engine.board.is_full())
        self.assertEqual(outcomes[-1].status, GameStatus.won("B"))
        self.assertEqual((outcomes[-1].row, outcomes[-1].column), (0, 3))

    def test_reset_after_win(self):
        play(self.engine, [0, 1, 0, 1, 0, 1, 0])
        self.engine.reset()
        self.assertEqual(self.engine.status, GameStatus.in_progress())
        self.assertEqual(self.engine.current_player, "A")
        self.assertEqual(self.engine.move_count, 0)
        self.assertIsNone(self.engine.last_move)
        for row in range(6):
            for col in range(7):
                self.assertIs(self.engine.cell_at(row, col), EMPTY)
        self.assertEqual(self.engine.drop(0).row, 5)

    def test_reset_with_new_players(self):
        self.engine.drop(0)
        self.engine.reset("green", "yellow")
        self.assertEqual(self.engine.players, ("green", "yellow"))
        self.assertEqual(self.engine.current_player, "green")
        self.engine.reset(player2="A")
        self.assertEqual(self.engine.players, ("green", "A"))

    def test_reset_rejects_equal_players_without_changes(self):
        self.engine.drop(0)
        before = snapshot(self.engine)
        with self.assertRaises(InvalidPlayers):
            self.engine.reset("B", None)
        self.assertEqual(snapshot(self.engine), before)
        self.assertEqual(self.engine.players, ("A", "B"))

    def test_gravity_invariant_under_random_play(self):
        rng = random.Random(1234)
        for _ in range(20):
            engine = GameEngine(6, 7, 1, 2)
            while not engine.is_game_over():
                engine.drop(rng.choice(engine.valid_columns()))
                grid = engine.board.grid
                for col in range(engine.width):
                    occupied = [grid[row, col] is not EMPTY for row in range(engine.height)]
                    height = sum(occupied)
                    # Occupied cells form one run ending at the bottom row
                    self.assertEqual(occupied, [False] * (6 - height) + [True] * height)

    def test_any_hashable_players(self):
        engine = GameEngine(4, 4, 1, 2)
        outcomes = play(engine, [0, 1, 0, 1, 0, 1, 0])
        self.assertEqual(outcomes[-1].status, GameStatus.won(1))

    def test_turn_passes_only_between_seated_players(self):
        self.assertFalse(hasattr(self.engine, "other_player"))
        seen = {outcome.player for outcome in play(self.engine, [0, 1, 2, 3, 4])}
        self.assertEqual(seen, {"A", "B"})

    def test_drop_is_silent_at_default_level(self):
        self.addCleanup(debug.configure, level=debug.level)
        debug.configure(level=DebugLevel.INFO)
        output = io.StringIO()
        handler = logging.StreamHandler(output)
        debug.logger.addHandler(handler)
        self.addCleanup(debug.logger.removeHandler, handler)

        play(self.engine, [0, 1, 0, 1, 0, 1, 0])
        play(GameEngine(6, 7, "A", "B"), DRAW_SEQUENCE)
        self.assertEqual(output.getvalue(), "")

    def test_status_str(self):
        self.assertEqual(str(GameStatus.in_progress()), "InProgress")
        self.assertEqual(str(GameStatus.won("A")), "Won(A)")
        self.assertEqual(str(GameStatus.draw()), "Draw")

    def test_render_uses_seat_symbols(self):
        self.engine.drop(0)
        self.engine.drop(1)
        self.assertIn("|X O          |", self.engine.render())


if __name__ == '__main__':
    unittest.main()
