"""
Arena for playing complete games between agents.

This module runs games to completion, asking the agent registered for the
active player for every move, and summarises the results of a series of
games.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union
import time

import numpy as np
from tqdm import tqdm

from mcts_ai.core.game import GameState, Move, is_terminal


# An agent is either an object with select_action() or a bare callback
AgentCallback = Callable[[GameState, Any], Move]


@dataclass
class GameRecord:
    """Result of one game played in the arena."""
    winner: Optional[Any]
    moves: List[Move] = field(default_factory=list)
    elapsed_time: float = 0.0
    finished: bool = True

    @property
    def num_moves(self) -> int:
        return len(self.moves)


def _active_player(state: GameState) -> Any:
    return state.active_player_id


def _winner(state: GameState) -> Optional[Any]:
    return state.winner


def _as_callback(agent: Union[AgentCallback, Any]) -> AgentCallback:
    if hasattr(agent, "get_action_callback"):
        return agent.get_action_callback()
    return agent


def play_game(
    state: GameState,
    agents: Dict[Any, Union[AgentCallback, Any]],
    on_move: Optional[Callable[[GameState, Any, Move], None]] = None,
    max_moves: Optional[int] = None,
    player_of: Callable[[GameState], Any] = _active_player,
    winner_of: Callable[[GameState], Optional[Any]] = _winner
) -> GameRecord:
    """
    Play a game until no moves are left.

    The state is advanced in place.

    Args:
        state: Starting game state
        agents: Agent (or move callback) for each player ID
        on_move: Called before each move with (state, player ID, move)
        max_moves: Optional cap on the number of moves
        player_of: Returns the ID of the player to move in a state. The
            default reads `state.active_player_id` (as NimState does);
            other games must pass their own.
        winner_of: Returns the winner of a finished state. The default
            reads `state.winner`; other games must pass their own.

    Returns:
        Record of the game
    """
    callbacks = {player_id: _as_callback(agent) for player_id, agent in agents.items()}
    moves: List[Move] = []

    start_time = time.time()
    while not is_terminal(state):
        if max_moves is not None and len(moves) >= max_moves:
            return GameRecord(
                winner=None,
                moves=moves,
                elapsed_time=time.time() - start_time,
                finished=False
            )

        player_id = player_of(state)
        if player_id not in callbacks:
            raise ValueError(f"No agent registered for player {player_id}")

        move = callbacks[player_id](state, player_id)
        if on_move is not None:
            on_move(state, player_id, move)

        state.make_move(move)
        moves.append(move)

    return GameRecord(
        winner=winner_of(state),
        moves=moves,
        elapsed_time=time.time() - start_time
    )


def run_match(
    make_state: Callable[[], GameState],
    agents: Dict[Any, Union[AgentCallback, Any]],
    num_games: int = 10,
    show_progress: bool = True,
    **play_kwargs
) -> Dict[str, Any]:
    """
    Play a series of games and summarise the results.

    Args:
        make_state: Creates a fresh starting state for each game
        agents: Agent (or move callback) for each player ID
        num_games: Number of games to play
        show_progress: Whether to show a progress bar
        **play_kwargs: Passed on to play_game()

    Returns:
        Dictionary of match statistics
    """
    if num_games <= 0:
        raise ValueError("num_games must be positive")

    records: List[GameRecord] = []
    for _ in tqdm(range(num_games), desc="Playing games", disable=not show_progress):
        records.append(play_game(make_state(), agents, **play_kwargs))

    winners = [record.winner for record in records]
    wins = {player_id: winners.count(player_id) for player_id in agents}
    win_rates = {
        player_id: float(np.mean([winner == player_id for winner in winners]))
        for player_id in agents
    }

    return {
        "games": num_games,
        "wins": wins,
        "win_rates": win_rates,
        "unfinished": sum(1 for record in records if not record.finished),
        "mean_moves": float(np.mean([record.num_moves for record in records])),
        "mean_time": float(np.mean([record.elapsed_time for record in records])),
        "records": records,
    }
