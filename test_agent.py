#!/usr/bin/env python
"""
Tests for the MCTS agent and its configuration.
"""
import io
import json
import os
import random
import tempfile
import unittest

from rich.console import Console

from mcts_ai.core.errors import NoMovesError
from mcts_ai.games.nim import NimState, NimMove, score_nim
from mcts_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from mcts_ai.mcts.config import MCTSConfig, INDEPENDENT


class TestMCTSConfig(unittest.TestCase):
    """Test case for MCTS configuration."""

    def test_defaults(self):
        config = MCTSConfig()
        self.assertEqual(config.iterations, 1000)
        self.assertEqual(config.simulations, 100)
        self.assertEqual(config.exploration_weight, 1.0)
        self.assertEqual(config.weighting, "compound")
        self.assertFalse(config.randomize_unknowns)
        self.assertIsNone(config.seed)

    def test_validation(self):
        with self.assertRaises(ValueError):
            MCTSConfig(iterations=0)
        with self.assertRaises(ValueError):
            MCTSConfig(simulations=-1)
        with self.assertRaises(ValueError):
            MCTSConfig(exploration_weight=-0.5)
        with self.assertRaises(ValueError):
            MCTSConfig(weighting="sometimes")

    def test_presets(self):
        self.assertLess(MCTSConfig.fast().iterations, MCTSConfig.default().iterations)
        self.assertGreater(MCTSConfig.deep().iterations, MCTSConfig.default().iterations)

    def test_dict_round_trip(self):
        config = MCTSConfig(iterations=50, weighting=INDEPENDENT, seed=3)
        data = config.to_dict()
        self.assertEqual(data["iterations"], 50)
        self.assertEqual(MCTSConfig.from_dict(data), config)

    def test_from_dict_ignores_unknown_keys(self):
        config = MCTSConfig.from_dict({"iterations": 20, "time_limit": 3.0})
        self.assertEqual(config.iterations, 20)

    def test_str(self):
        self.assertIn("iterations=1000", str(MCTSConfig()))


class TestMCTSAgent(unittest.TestCase):
    """Test case for the MCTS agent."""

    def setUp(self):
        """Set up test fixtures."""
        self.config = MCTSConfig(iterations=200, simulations=50)
        self.agent = MCTSAgent(
            score_nim,
            config=self.config,
            name="Test Agent",
            rng=random.Random(42)
        )

    def test_select_action(self):
        state = NimState(chips=9, player_ids=[1, 2])
        move = self.agent.select_action(state, 1)

        self.assertIn(move, state.available_moves())
        self.assertEqual(state.chips, 9)

        stats = self.agent.get_last_statistics()
        self.assertEqual(stats["iterations"], 200)
        self.assertIn("total_time", stats)
        self.assertIsNotNone(self.agent.last_root)
        self.assertEqual(self.agent.last_root.visits, 200)
        self.assertEqual(len(self.agent.action_history), 1)

    def test_forced_move(self):
        state = NimState(chips=1, player_ids=[1, 2])
        move = self.agent.select_action(state, 1)

        self.assertEqual(move, NimMove(1, 1))
        self.assertTrue(self.agent.last_stats["forced_move"])
        self.assertEqual(self.agent.get_principal_variation(), [])
        self.assertEqual(self.agent.get_action_statistics(), {})

    def test_no_moves(self):
        with self.assertRaises(NoMovesError):
            self.agent.select_action(NimState(chips=0), 1)

    def test_search_details(self):
        state = NimState(chips=10, player_ids=[1, 2])
        move = self.agent.select_action(state, 1)

        variation = self.agent.get_principal_variation()
        self.assertEqual(variation[0][0], move)

        action_stats = self.agent.get_action_statistics()
        self.assertEqual(len(action_stats), 3)
        self.assertEqual(sum(s["visits"] for s in action_stats.values()), 200)

    def test_action_callback(self):
        callback = self.agent.get_action_callback()
        state = NimState(chips=6, player_ids=[1, 2])
        self.assertIn(callback(state, 1), state.available_moves())

    def test_verbose_output(self):
        output = io.StringIO()
        agent = MCTSAgent(
            score_nim,
            config=self.config,
            verbose=True,
            rng=random.Random(1),
            console=Console(file=output, width=120)
        )
        agent.select_action(NimState(chips=8), 1)

        text = output.getvalue()
        self.assertIn("selected", text)
        self.assertIn("Top moves", text)

    def test_save_and_reset_statistics(self):
        self.agent.select_action(NimState(chips=8), 1)
        self.agent.select_action(NimState(chips=1), 1)

        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "stats.json")
            self.agent.save_statistics(path)
            with open(path) as f:
                data = json.load(f)

        self.assertEqual(data["agent_name"], "Test Agent")
        self.assertEqual(data["total_actions"], 2)
        self.assertEqual(data["config"]["iterations"], 200)
        self.assertNotIn("action_visits", data["history"][0]["stats"])

        self.agent.reset_statistics()
        self.assertEqual(self.agent.action_history, [])
        self.assertEqual(self.agent.last_stats, {})
        self.assertIsNone(self.agent.last_root)

    def test_seeded_agents_agree(self):
        config = MCTSConfig(iterations=150, simulations=30, seed=11)
        first = MCTSAgent(score_nim, config=config)
        second = MCTSAgent(score_nim, config=config)

        state = NimState(chips=13)
        self.assertEqual(first.select_action(state, 1), second.select_action(state, 1))

    def test_str(self):
        self.assertEqual(str(self.agent), "Test Agent (MCTS, 200 iterations)")


class TestMCTSAgentFactory(unittest.TestCase):
    """Test case for the agent factory."""

    def test_presets(self):
        self.assertEqual(MCTSAgentFactory.create_fast(score_nim).config.iterations, 100)
        self.assertEqual(MCTSAgentFactory.create_standard(score_nim).config.iterations, 1000)
        self.assertEqual(MCTSAgentFactory.create_strong(score_nim).config.iterations, 5000)

    def test_custom(self):
        agent = MCTSAgentFactory.create_custom(
            score_nim, iterations=30, simulations=5, weighting=INDEPENDENT, seed=4, name="Mine"
        )
        self.assertEqual(agent.name, "Mine")
        self.assertEqual(agent.config.iterations, 30)
        self.assertEqual(agent.config.weighting, INDEPENDENT)
        self.assertEqual(agent.config.seed, 4)


if __name__ == "__main__":
    unittest.main()
