"""
MCTS AI - A game-independent Monte Carlo Tree Search engine.

This package provides a UCT search over any game that satisfies the
GameState and Move contracts, an agent built on it, and Nim as an
example game.
"""

__version__ = "0.1.0"
__author__ = "MCTS AI Team"

# Make key components available at package level
from mcts_ai.core.game import GameState, Move, Scorer
from mcts_ai.mcts.search import uct, mcts_search
from mcts_ai.mcts.agent import MCTSAgent
from mcts_ai.mcts.config import MCTSConfig

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
