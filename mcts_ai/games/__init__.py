"""
Example games for the MCTS engine.

Each game implements the GameState and Move contracts from mcts_ai.core and
supplies a scorer for judging states from a player's point of view.
"""

from mcts_ai.games.nim import (
    NimState, NimMove, MAX_PICKABLE_CHIPS,
    score_nim, create_nim_game
)

__all__ = [
    'NimState', 'NimMove', 'MAX_PICKABLE_CHIPS',
    'score_nim', 'create_nim_game'
]
