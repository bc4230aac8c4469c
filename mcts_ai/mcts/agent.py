"""
Monte Carlo Tree Search Agent.

This module provides the MCTSAgent class, a ready-to-use player that uses
Monte Carlo Tree Search to pick moves in any game satisfying the GameState
contract. The agent can be configured with different parameters and keeps
statistics about its search process.
"""
from typing import Dict, List, Optional, Tuple, Any, Callable
import json
import random
import time

from loguru import logger
from rich.console import Console
from rich.table import Table

from mcts_ai.core.game import GameState, Move, Scorer
from mcts_ai.core.errors import NoMovesError
from mcts_ai.mcts.node import MCTSNode
from mcts_ai.mcts.config import MCTSConfig
from mcts_ai.mcts.search import (
    mcts_search, get_action_statistics, get_principal_variation
)


class MCTSAgent:
    """
    Monte Carlo Tree Search agent.

    This agent uses MCTS to select moves. Outcomes are judged by the scorer
    it is given, from the point of view of the player it moves for.
    """

    def __init__(
        self,
        scorer: Scorer,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
        verbose: bool = False,
        rng: Optional[random.Random] = None,
        console: Optional[Console] = None
    ):
        """
        Initialize an MCTS agent.

        Args:
            scorer: Callback scoring a state for a player (0.0-1.0)
            config: MCTS configuration parameters
            name: Name of the agent
            verbose: Whether to print detailed information after each search
            rng: Random source (seeded from config.seed if None)
            console: Console for verbose output
        """
        self.scorer = scorer
        self.config = config or MCTSConfig()
        self.name = name
        self.verbose = verbose
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.console = console or Console()

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all moves and their statistics
        self.action_history: List[Tuple[Move, Dict[str, Any]]] = []

        # Root node of the last search
        self.last_root: Optional[MCTSNode] = None

    def select_action(self, state: GameState, player_id: Any) -> Move:
        """
        Select a move using Monte Carlo Tree Search.

        Args:
            state: Current game state
            player_id: ID of the player making the decision

        Returns:
            Selected move

        Raises:
            NoMovesError: If the game is already over
        """
        valid_moves = state.available_moves()
        if not valid_moves:
            raise NoMovesError(f"No moves available for player {player_id}")

        # If there's only one valid move, no need to search
        if len(valid_moves) == 1:
            move = valid_moves[0]
            logger.debug("{} has a forced move: {}", self.name, move)
            self.last_stats = {"iterations": 0, "forced_move": True}
            self.last_root = None
            self.action_history.append((move, self.last_stats))
            return move

        start_time = time.time()
        move, stats, root = mcts_search(state, player_id, self.scorer, self.config, self.rng)
        stats["total_time"] = time.time() - start_time

        self.last_stats = stats
        self.last_root = root
        self.action_history.append((move, stats))

        if self.verbose:
            self._print_search_info(move, stats)

        return move

    def _print_search_info(self, move: Move, stats: Dict[str, Any]) -> None:
        """
        Print information about the search.

        Args:
            move: Selected move
            stats: Search statistics
        """
        self.console.print(f"\n[bold]{self.name}[/bold] selected: {move}")
        self.console.print(
            f"Iterations: {stats['iterations']}  "
            f"Time: {stats['time_elapsed']:.3f}s ({stats['iterations_per_second']:.1f} it/s)  "
            f"Nodes: {stats['node_count']}  Max depth: {stats['max_depth']}"
        )

        # Top moves by visit count
        table = Table(title="Top moves")
        table.add_column("#", justify="right")
        table.add_column("Move")
        table.add_column("Visits", justify="right")
        table.add_column("Value", justify="right")

        moves_by_visits = sorted(
            stats["action_visits"].items(),
            key=lambda x: x[1],
            reverse=True
        )
        for i, (move_str, visits) in enumerate(moves_by_visits[:5]):
            value = stats["action_rewards"].get(move_str, 0.0)
            table.add_row(str(i + 1), move_str, str(visits), f"{value:.3f}")

        self.console.print(table)

    def get_action_callback(self) -> Callable[[GameState, Any], Move]:
        """
        Get a callback function for selecting moves.

        Returns:
            Callback that takes a game state and player ID and returns a move
        """
        return lambda state, player_id: self.select_action(state, player_id)

    def get_last_statistics(self) -> Dict[str, Any]:
        return self.last_stats

    def get_principal_variation(self) -> List[Tuple[Move, float]]:
        """
        Get the principal variation (most visited path) from the last search.

        Returns:
            List of (move, value) pairs representing the principal variation
        """
        if self.last_root is None:
            return []

        return get_principal_variation(self.last_root)

    def get_action_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Get statistics for all moves from the last search.

        Returns:
            Dictionary mapping move strings to statistics
        """
        if self.last_root is None:
            return {}

        return get_action_statistics(self.last_root)

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.action_history = []
        self.last_root = None

    def save_statistics(self, filename: str) -> None:
        """
        Save statistics to a file.

        Args:
            filename: Name of the file to save to
        """
        # Convert moves to strings for JSON serialization
        history = []
        for move, stats in self.action_history:
            history.append({
                "action": str(move),
                "stats": {k: v for k, v in stats.items() if not isinstance(v, dict)}
            })

        data = {
            "agent_name": self.name,
            "config": self.config.to_dict(),
            "history": history,
            "total_actions": len(self.action_history)
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return f"{self.name} (MCTS, {self.config.iterations} iterations)"


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different configurations.

    Every agent needs the scorer of the game it will play.
    """

    @staticmethod
    def create_fast(scorer: Scorer) -> MCTSAgent:
        return MCTSAgent(scorer, config=MCTSConfig.fast(), name="Fast MCTS")

    @staticmethod
    def create_standard(scorer: Scorer) -> MCTSAgent:
        return MCTSAgent(scorer, config=MCTSConfig.default(), name="Standard MCTS")

    @staticmethod
    def create_strong(scorer: Scorer) -> MCTSAgent:
        return MCTSAgent(scorer, config=MCTSConfig.deep(), name="Strong MCTS")

    @staticmethod
    def create_custom(
        scorer: Scorer,
        iterations: int = 1000,
        simulations: int = 100,
        exploration_weight: float = 1.0,
        weighting: str = "compound",
        seed: Optional[int] = None,
        name: str = "Custom MCTS"
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            scorer: Callback scoring a state for a player
            iterations: Number of MCTS iterations
            simulations: Maximum number of moves per playout
            exploration_weight: UCB1 exploration parameter
            weighting: Outcome weighting policy
            seed: Seed for the agent's random source
            name: Name of the agent

        Returns:
            MCTSAgent
        """
        config = MCTSConfig(
            iterations=iterations,
            simulations=simulations,
            exploration_weight=exploration_weight,
            weighting=weighting,
            seed=seed
        )
        return MCTSAgent(scorer, config=config, name=name)
