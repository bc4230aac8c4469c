#!/usr/bin/env python
"""
Nim experiment: two MCTS players play Nim against each other.

Example usage:
    # One game from 100 chips, reporting every move
    mcts-nim --ucbc 1.0 --chips 100

    # A 20 game match with a fixed seed
    mcts-nim --chips 21 --games 20 --seed 7
"""
import argparse
import random
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from mcts_ai.core.game import GameState, Move
from mcts_ai.games.nim import create_nim_game, score_nim
from mcts_ai.mcts.agent import MCTSAgent
from mcts_ai.mcts.config import MCTSConfig, WEIGHTING_POLICIES
from mcts_ai.arena import play_game, run_match
from mcts_ai.utils.logging import setup_logging


# Our two intrepid players, the first goes first
PLAYER_A = 1
PLAYER_B = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the experiment."""
    parser = argparse.ArgumentParser(description="Play Nim between two MCTS agents")

    # Search configuration
    parser.add_argument("--ucbc", type=float, default=1.0,
                        help="The constant biasing exploitation vs exploration")
    parser.add_argument("--iterations", type=int, default=1000,
                        help="Number of MCTS iterations per move")
    parser.add_argument("--simulations", type=int, default=100,
                        help="Maximum number of random moves per playout")
    parser.add_argument("--weighting", type=str, default="compound",
                        choices=list(WEIGHTING_POLICIES),
                        help="How move probabilities weight outcomes")

    # Game configuration
    parser.add_argument("--chips", type=int, default=100,
                        help="The number of chips in the starting state")
    parser.add_argument("--games", type=int, default=1,
                        help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")

    # Output
    parser.add_argument("--verbose", action="store_true",
                        help="Print search details for every move")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Minimum log level")

    return parser.parse_args(argv)


def create_agents(args: argparse.Namespace) -> Dict[Any, MCTSAgent]:
    """Create one MCTS agent per player from the command-line arguments."""
    agents = {}
    for i, player_id in enumerate((PLAYER_A, PLAYER_B)):
        config = MCTSConfig(
            iterations=args.iterations,
            simulations=args.simulations,
            exploration_weight=args.ucbc,
            weighting=args.weighting
        )
        rng = random.Random(args.seed + i) if args.seed is not None else None
        agents[player_id] = MCTSAgent(
            score_nim,
            config=config,
            name=f"Player {player_id}",
            verbose=args.verbose,
            rng=rng
        )
    return agents


def run_single_game(args: argparse.Namespace, console: Console) -> Optional[Any]:
    """
    Play one game, reporting the pile before each move and every move.

    Returns:
        The winning player ID
    """
    agents = create_agents(args)
    state = create_nim_game(args.chips, [PLAYER_A, PLAYER_B])

    def report(state: GameState, player_id: Any, move: Move) -> None:
        console.print(str(state))
        console.print(f"  {move}")

    record = play_game(state, agents, on_move=report)

    console.print(f"[bold green]PLAYER {record.winner} WINS![/bold green]")
    return record.winner


def run_series(args: argparse.Namespace, console: Console) -> Dict[str, Any]:
    """Play a series of games and print a summary table."""
    agents = create_agents(args)
    results = run_match(
        lambda: create_nim_game(args.chips, [PLAYER_A, PLAYER_B]),
        agents,
        num_games=args.games
    )

    table = Table(title=f"Nim from {args.chips} chips, {args.games} games")
    table.add_column("Player")
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    for player_id in agents:
        table.add_row(
            str(player_id),
            str(results["wins"][player_id]),
            f"{results['win_rates'][player_id]:.2f}"
        )
    console.print(table)
    console.print(f"Mean moves per game: {results['mean_moves']:.1f}")
    console.print(f"Mean time per game: {results['mean_time']:.2f}s")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    """Run the Nim experiment with command-line arguments."""
    args = parse_args(argv)
    setup_logging(args.log_level)
    console = Console()

    if args.chips < 1:
        console.print("[red]Error: --chips must be at least 1[/red]")
        return 1

    console.print(f"Experiment: '{sys.argv[0]}'")

    if args.games > 1:
        run_series(args, console)
    else:
        run_single_game(args, console)

    console.print("Experiment Complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
