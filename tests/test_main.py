"""
Tests for the command line helpers.
"""

import argparse
import json
import os
import tempfile
import unittest

from main import build_config, build_evaluator
from tetris_versus.ai.evaluation import LegacyEvaluator
from tetris_versus.core.config import CPU, GameMode
from tetris_versus.match import MatchController


def make_args(config=None, evaluator='heuristic', **overrides):
    values = {'config': config, 'evaluator': evaluator, 'mode': None, 'difficulty': None, 'seed': None}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestCommandLineConfig(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.directory.name, "match.json")
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump({'mode': 'timed', 'weights': {'holes': -5.0}}, fh)

    def tearDown(self):
        self.directory.cleanup()

    def test_config_weights_reach_the_cpu(self):
        args = make_args(self.path)
        config = build_config(args, (CPU,))
        match = MatchController(config, evaluator=build_evaluator(args, config))

        evaluator = match.players[0].controller.search.evaluator
        self.assertEqual(evaluator.weights.holes, -5.0)
        self.assertEqual(evaluator.weights.height, -0.666)

    def test_options_override_the_file(self):
        config = build_config(make_args(self.path, mode='tug_of_war', seed=9), (CPU, CPU))
        self.assertEqual(config.mode, GameMode.TUG_OF_WAR)
        self.assertEqual(config.seed, 9)
        self.assertEqual(config.players, (CPU, CPU))
        self.assertEqual(config.weights, {'holes': -5.0})

    def test_legacy_evaluator(self):
        args = make_args(self.path, evaluator='legacy')
        config = build_config(args, (CPU,))
        self.assertIsInstance(build_evaluator(args, config), LegacyEvaluator)


if __name__ == '__main__':
    unittest.main()
