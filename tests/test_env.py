import unittest

import numpy as np

from connect_four.errors import GameAlreadyOver
from connect_four.game.env import ConnectFourEnv


class TestConnectFourEnv(unittest.TestCase):
    def setUp(self):
        self.env = ConnectFourEnv(players=("A", "B"))
        self.observation, self.info = self.env.reset(seed=0)

    def test_reset_observation(self):
        self.assertEqual(self.observation.shape, (6, 7))
        self.assertEqual(self.observation.dtype, np.int8)
        self.assertFalse(self.observation.any())
        self.assertTrue(self.env.observation_space.contains(self.observation))
        self.assertEqual(self.info['valid_moves'], list(range(7)))
        self.assertEqual(self.info['current_player'], "A")
        self.assertEqual(self.info['game_result'], "IN_PROGRESS")

    def test_step_encodes_seats(self):
        self.env.step(3)
        observation, reward, terminated, truncated, info = self.env.step(3)
        self.assertEqual(observation[5, 3], 1)
        self.assertEqual(observation[4, 3], 2)
        self.assertEqual(reward, ConnectFourEnv.reward_step)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertEqual(info['moves_made'], 2)
        self.assertEqual(info['last_move'], (4, 3))

    def test_invalid_action_is_truncated_without_changes(self):
        for _ in range(6):
            self.env.step(0)
        before = self.env.engine.move_count
        observation, reward, terminated, truncated, info = self.env.step(0)
        self.assertEqual(reward, ConnectFourEnv.reward_invalid_move)
        self.assertFalse(terminated)
        self.assertTrue(truncated)
        self.assertTrue(info['invalid_move'])
        self.assertEqual(self.env.engine.move_count, before)

        _, _, _, truncated, info = self.env.step(7)
        self.assertTrue(truncated)
        self.assertTrue(info['invalid_move'])

    def test_win_terminates(self):
        for action in [0, 1, 0, 1, 0, 1]:
            self.env.step(action)
        observation, reward, terminated, truncated, info = self.env.step(0)
        self.assertEqual(reward, ConnectFourEnv.reward_win)
        self.assertTrue(terminated)
        self.assertEqual(info['game_result'], "WON")
        self.assertEqual(info['winner'], "A")
        self.assertEqual(info['valid_moves'], [])
        with self.assertRaises(GameAlreadyOver):
            self.env.step(2)

    def test_reset_with_new_players(self):
        self.env.step(0)
        observation, info = self.env.reset(options={'players': ("X", "Y")})
        self.assertFalse(observation.any())
        self.assertEqual(self.env.engine.players, ("X", "Y"))
        self.assertEqual(info['current_player'], "X")

    def test_custom_dimensions(self):
        env = ConnectFourEnv(height=5, width=8)
        observation, _ = env.reset()
        self.assertEqual(observation.shape, (5, 8))
        self.assertEqual(env.action_space.n, 8)

    def test_ascii_render(self):
        env = ConnectFourEnv(render_mode="ascii")
        env.reset()
        env.step(0)
        self.assertIn("|X            |", env.render())
        self.assertIsNone(self.env.render())

    def test_unknown_render_mode(self):
        with self.assertRaises(ValueError):
            ConnectFourEnv(render_mode="rgb_array")


if __name__ == '__main__':
    unittest.main()
