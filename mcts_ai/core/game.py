"""
Capability contracts for games searched by MCTS.

This module defines the interfaces a domain plugin must satisfy for the
search engine to explore it:
- Move: a single action, with the probability that it actually takes place
- GameState: a position that can be cloned, advanced and inspected for moves
- Scorer: a callback judging a state from one player's point of view

The contracts are structural (typing.Protocol), so concrete games never need
to inherit from them.
"""
from __future__ import annotations
from typing import Any, Callable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Move(Protocol):
    """A move in a game."""

    def probability(self) -> float:
        """
        Chance that this move takes place.

        Moves involving randomness (a dice roll, a card draw) report how
        likely they are, as 0.0-1.0. Deterministic games always return 1.0.

        Returns:
            Probability of the move
        """
        ...


@runtime_checkable
class GameState(Protocol):
    """
    A game position the search engine can explore.

    Implementations own all of their game rules; the search engine only
    ever clones states, lists their moves and applies moves to them.
    """

    def clone(self) -> GameState:
        """
        Deep copy the game state.

        The copy must share no mutable data with the original.

        Returns:
            Independent copy of the state
        """
        ...

    def available_moves(self) -> Sequence[Move]:
        """
        Get all the moves that can be made from this state.

        Returns:
            Legal moves, empty when the game is over
        """
        ...

    def make_move(self, move: Move) -> None:
        """
        Apply a move, changing the state in place.

        Args:
            move: Move to apply, one returned by available_moves()
        """
        ...

    def randomize_unknowns(self) -> None:
        """Randomize any hidden information (card order and similar)."""
        ...


# Judges a state for a player: 1.0 won, 0.0 lost, 0.5 undecided.
Scorer = Callable[[Any, GameState], float]

# Outcome values reported by scorers
WIN: float = 1.0
LOSS: float = 0.0
UNDECIDED: float = 0.5


def is_terminal(state: GameState) -> bool:
    """Check whether a state has no moves left."""
    return not state.available_moves()
