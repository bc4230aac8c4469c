"""
Monte Carlo Tree Search (MCTS) algorithm.

This module implements the core MCTS algorithm with the four standard phases:
1. Selection: Descend through fully expanded nodes by UCB1 score
2. Expansion: Create one new child node from an untried move
3. Simulation: Run a random playout to estimate the node's value
4. Backpropagation: Update statistics up the tree

The search uses an Upper Confidence Bound applied to Trees (UCT) and picks
the final move by visit count.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
import random
import time

from loguru import logger

from mcts_ai.core.game import GameState, Move, Scorer
from mcts_ai.core.errors import NoMovesError
from mcts_ai.mcts.node import MCTSNode
from mcts_ai.mcts.config import MCTSConfig, COMPOUND


def uct(
    state: GameState,
    iterations: int,
    simulations: int,
    ucb_c: float,
    player_id: Any,
    scorer: Scorer,
    rng: Optional[random.Random] = None,
    weighting: str = COMPOUND,
    randomize_unknowns: bool = False,
) -> Move:
    """
    Search for the best move for a player from a starting game state.

    Args:
        state: Starting game state, must have at least one legal move
        iterations: Number of tree-growth iterations, at least 1
        simulations: Maximum number of random moves per playout
        ucb_c: UCB1 constant, higher favors exploration
        player_id: Player whose point of view outcomes are scored from
        scorer: Callback scoring a state for a player (0.0-1.0)
        rng: Random source (a fresh unseeded one if None)
        weighting: Outcome weighting policy, 'compound' or 'independent'
        randomize_unknowns: Randomize hidden information before each playout

    Returns:
        The move of the root's most visited child

    Raises:
        ValueError: If the budgets are out of range or ucb_c is negative
        NoMovesError: If the state has no legal moves
    """
    config = MCTSConfig(
        iterations=iterations,
        simulations=simulations,
        exploration_weight=ucb_c,
        weighting=weighting,
        randomize_unknowns=randomize_unknowns
    )
    move, _, _ = mcts_search(state, player_id, scorer, config, rng)
    return move


def mcts_search(
    state: GameState,
    player_id: Any,
    scorer: Scorer,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None
) -> Tuple[Move, Dict[str, Any], MCTSNode]:
    """
    Run Monte Carlo Tree Search to find the best move.

    This function runs the full MCTS algorithm:
    1. Create a root node from the current state
    2. Repeatedly run selection, expansion, simulation, and backpropagation
    3. Return the best move based on visit counts

    Args:
        state: Current game state
        player_id: ID of the player making the decision
        scorer: Callback scoring a state for a player (0.0-1.0)
        config: MCTS configuration parameters
        rng: Random source (seeded from config.seed if None)

    Returns:
        Tuple of (best move, search statistics, root node)
    """
    # Use default config if none provided
    if config is None:
        config = MCTSConfig()

    if rng is None:
        rng = random.Random(config.seed)

    root = MCTSNode(state=state, ucb_c=config.exploration_weight)
    if not root.has_untried_moves():
        raise NoMovesError("Cannot search from a state with no available moves")

    stats: Dict[str, Any] = {
        "iterations": 0,
        "max_depth": 0,
        "total_simulation_steps": 0,
        "time_elapsed": 0.0,
        "node_count": 1,  # Start with the root
        "action_visits": {},
        "action_rewards": {},
    }

    logger.debug(
        "Starting search for player {} ({} legal moves, {})",
        player_id, len(root.untried_moves), config
    )
    start_time = time.time()

    for _ in range(config.iterations):
        # 1. Selection
        selected = select_node(root)

        # 2. Expansion
        node = expand_node(selected, rng)
        if node is not selected:
            stats["node_count"] += 1

        # 3. Simulation
        final_state, steps = simulate_game(
            node, config.simulations, rng, config.randomize_unknowns
        )

        # 4. Backpropagation
        outcome = scorer(player_id, final_state)
        backpropagate(node, outcome, config.weighting)

        stats["iterations"] += 1
        stats["total_simulation_steps"] += steps
        stats["max_depth"] = max(stats["max_depth"], node.depth)

    best_move = root.best_move()

    # Record statistics about each move
    for child in root.children:
        move_str = str(child.move)
        stats["action_visits"][move_str] = child.visits
        stats["action_rewards"][move_str] = child.average_outcome

    stats["time_elapsed"] = time.time() - start_time
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])
    stats["average_simulation_steps"] = stats["total_simulation_steps"] / max(1, stats["iterations"])

    logger.debug(
        "Search finished: {} iterations, {} nodes, best move {} ({:.3f}s)",
        stats["iterations"], stats["node_count"], best_move, stats["time_elapsed"]
    )

    return best_move, stats, root


def select_node(root: MCTSNode) -> MCTSNode:
    """
    Descend from the root to the node to expand next.

    While a node has no untried moves left but does have children, focus
    moves to its most promising child.

    Args:
        root: Root node of the MCTS tree

    Returns:
        A node with untried moves, or one with no children at all
    """
    node = root
    while not node.has_untried_moves() and node.children:
        node = node.select_child()
    return node


def expand_node(node: MCTSNode, rng: random.Random) -> MCTSNode:
    """
    Expand a node by adding a child, if it has untried moves.

    Args:
        node: Node to expand
        rng: Random source used to pick the move

    Returns:
        The new child node, or the node itself if it is terminal
    """
    if node.has_untried_moves():
        return node.expand(rng)
    return node


def simulate_game(
    node: MCTSNode,
    simulations: int,
    rng: random.Random,
    randomize_unknowns: bool = False
) -> Tuple[GameState, int]:
    """
    Run a random playout from a node.

    The playout works on a clone of the node's state and may pass through
    any player's turns. It stops when the game is over or the step budget is
    spent.

    Args:
        node: Node to simulate from
        simulations: Maximum number of random moves
        rng: Random source used to pick moves
        randomize_unknowns: Randomize hidden information before playing

    Returns:
        Tuple of (final state, number of moves made)
    """
    state = node.state.clone()
    if randomize_unknowns:
        state.randomize_unknowns()

    steps = 0
    while steps < simulations:
        available_moves = state.available_moves()
        if not available_moves:
            break
        move = available_moves[rng.randrange(len(available_moves))]
        state.make_move(move)
        steps += 1

    return state, steps


def backpropagate(node: MCTSNode, outcome: float, weighting: str = COMPOUND) -> None:
    """
    Update statistics from a node up to the root.

    Args:
        node: Node the playout started from
        outcome: Scorer result for the playout's final state
        weighting: Outcome weighting policy
    """
    node.add_outcome(outcome, weighting)


def count_nodes(root: MCTSNode) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        root: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.children)
    return count


def tree_depth(root: MCTSNode) -> int:
    """Depth of the deepest node below the root (0 for a lone root)."""
    deepest = 0
    stack = [root]
    while stack:
        node = stack.pop()
        deepest = max(deepest, node.depth - root.depth)
        stack.extend(node.children)
    return deepest


def get_principal_variation(root: MCTSNode, max_depth: int = 10) -> List[Tuple[Move, float]]:
    """
    Get the principal variation (most visited path) from the root.

    This is useful for analysis and debugging.

    Args:
        root: Root node of the MCTS tree
        max_depth: Maximum depth to explore

    Returns:
        List of (move, average outcome) pairs along the most visited path
    """
    result = []
    current = root

    while current.children and len(result) < max_depth:
        best_child = current.best_child()
        result.append((best_child.move, best_child.average_outcome))
        current = best_child

    return result


def get_action_statistics(root: MCTSNode) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all moves from the root.

    Args:
        root: Root node of the MCTS tree

    Returns:
        Dictionary mapping move strings to statistics
    """
    result = {}

    for child in root.children:
        result[str(child.move)] = {
            "visits": child.visits,
            "outcome": child.total_outcome,
            "value": child.average_outcome,
            "probability": child.probability,
            "selection_score": child.selection_score,
        }

    return result
