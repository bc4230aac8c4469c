"""
Monte Carlo Tree Search (MCTS) implementation.

This package provides a game-independent MCTS engine and an agent built on
it. The MCTS algorithm works by:

1. Selection: Starting from the root node, select child nodes using UCB1 until reaching
   a node that still has untried moves or has no children.
2. Expansion: Create a new child node by taking a previously untried move.
3. Simulation: From the new node, perform a random playout of bounded length.
4. Backpropagation: Score the playout for the searching player and update the
   statistics of all nodes on the path to the root, weighted by move probability.

The search can be configured with different iteration and playout budgets,
exploration constants and outcome weighting policies.
"""

from mcts_ai.mcts.node import MCTSNode
from mcts_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from mcts_ai.mcts.selection import upper_confidence_bound
from mcts_ai.mcts.search import (
    uct,
    mcts_search,
    select_node,
    expand_node,
    simulate_game,
    backpropagate,
    count_nodes,
    tree_depth,
    get_principal_variation,
    get_action_statistics
)
from mcts_ai.mcts.config import MCTSConfig, COMPOUND, INDEPENDENT

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=1000,          # Number of MCTS iterations per move
    simulations=100,          # Maximum random moves per playout
    exploration_weight=1.0,   # UCB1 exploration parameter
    weighting=COMPOUND        # Probabilities multiply along the path
)

__all__ = [
    'MCTSAgent',
    'MCTSAgentFactory',
    'MCTSNode',
    'MCTSConfig',
    'COMPOUND',
    'INDEPENDENT',
    'upper_confidence_bound',
    'uct',
    'mcts_search',
    'select_node',
    'expand_node',
    'simulate_game',
    'backpropagate',
    'count_nodes',
    'tree_depth',
    'get_principal_variation',
    'get_action_statistics',
    'DEFAULT_CONFIG'
]
