"""
MCTS AI Core Package

This package contains what the search engine shares with game plugins:
- Move and GameState capability contracts
- The scorer callback type and standard outcome values
- Contract violation errors

All core components can be imported directly from this package.
"""

# Contracts
from mcts_ai.core.game import (
    Move, GameState, Scorer,
    WIN, LOSS, UNDECIDED, is_terminal
)

# Errors
from mcts_ai.core.errors import (
    ContractViolationError, InvalidProbabilityError,
    ExpansionError, SelectionError, SelectionPreconditionError,
    NoMovesError
)

__all__ = [
    # Contracts
    'Move', 'GameState', 'Scorer',
    'WIN', 'LOSS', 'UNDECIDED', 'is_terminal',

    # Errors
    'ContractViolationError', 'InvalidProbabilityError',
    'ExpansionError', 'SelectionError', 'SelectionPreconditionError',
    'NoMovesError'
]
