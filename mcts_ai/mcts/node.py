"""
Monte Carlo Tree Search Node.

This module defines the MCTSNode class which represents a node in the MCTS tree.
Each node holds a game state and the statistics (visits, weighted outcomes) of
the playouts that passed through it, and owns its child nodes.
"""
from __future__ import annotations
from typing import List, Optional
import random
import weakref

from mcts_ai.core.game import GameState, Move
from mcts_ai.core.errors import (
    InvalidProbabilityError, ExpansionError, SelectionError
)
from mcts_ai.mcts.config import COMPOUND
from mcts_ai.mcts.selection import upper_confidence_bound


class MCTSNode:
    """
    A node in the Monte Carlo Tree Search.

    Each node represents the game state reached by a move and tracks
    statistics about the playouts that pass through it. Outcomes are all
    from the point of view of a single player.

    A node owns its children; the link back to its parent is a weak
    reference, so the tree contains no reference cycles.
    """

    def __init__(
        self,
        state: GameState,
        parent: Optional[MCTSNode] = None,
        move: Optional[Move] = None,
        ucb_c: float = 1.0,
    ):
        """
        Initialize an MCTS node.

        Args:
            state: The game state this node represents
            parent: The parent node (None for root)
            move: The move that led to this state (None for root)
            ucb_c: UCB1 constant, shared by the whole tree

        Raises:
            InvalidProbabilityError: If the move's probability is outside 0.0-1.0
        """
        # Rare moves weight the outcomes they take part in
        probability = move.probability() if move is not None else 1.0
        if not 0.0 <= probability <= 1.0:
            raise InvalidProbabilityError(probability)

        self.state = state
        self.move = move
        self.ucb_c = ucb_c
        self.probability = probability
        self._parent = weakref.ref(parent) if parent is not None else None
        self.depth = parent.depth + 1 if parent is not None else 0

        # Node statistics
        self.total_outcome = 0.0
        self.visits = 0
        self.selection_score = 0.0

        # Every legal move starts out untried
        self.untried_moves: List[Move] = list(state.available_moves() or [])
        self.children: List[MCTSNode] = []

    @property
    def parent(self) -> Optional[MCTSNode]:
        """The parent node, None for the root."""
        if self._parent is None:
            return None
        return self._parent()

    def is_root(self) -> bool:
        return self.parent is None

    def has_untried_moves(self) -> bool:
        return bool(self.untried_moves)

    def is_fully_expanded(self) -> bool:
        """
        Check if all legal moves from this node have been expanded.

        Returns:
            True if every move has a child node, False otherwise
        """
        return not self.untried_moves

    def is_terminal(self) -> bool:
        """
        Check if this node represents a finished game.

        Returns:
            True if the state had no legal moves, False otherwise
        """
        return not self.untried_moves and not self.children

    @property
    def average_outcome(self) -> float:
        """Mean weighted outcome per visit (0.0 when unvisited)."""
        if self.visits == 0:
            return 0.0
        return self.total_outcome / self.visits

    def expand(self, rng: random.Random) -> MCTSNode:
        """
        Expand the tree by adding a new child node.

        This implements the expansion phase of MCTS: a random untried move is
        removed from the untried moves, applied to a clone of this node's
        state and wrapped in a new child.

        Args:
            rng: Random source used to pick the move

        Returns:
            The new child node

        Raises:
            ExpansionError: If there are no untried moves
        """
        if not self.untried_moves:
            raise ExpansionError("Cannot expand a node with no untried moves")

        # Pick and remove a random untried move
        index = rng.randrange(len(self.untried_moves))
        move = self.untried_moves.pop(index)

        # Clone the state so this node's state is never altered
        new_state = self.state.clone()
        new_state.make_move(move)

        child = MCTSNode(
            state=new_state,
            parent=self,
            move=move,
            ucb_c=self.ucb_c
        )
        self.children.append(child)

        return child

    def select_child(self) -> MCTSNode:
        """
        Select the child with the highest cached UCB1 score.

        Ties go to the child expanded first.

        Returns:
            Selected child node

        Raises:
            SelectionError: If the node has no children
        """
        if not self.children:
            raise SelectionError("Cannot select child from node with no children")

        return max(self.children, key=lambda child: child.selection_score)

    def update_selection_score(self) -> None:
        """Recompute the cached UCB1 score (the root has none)."""
        parent = self.parent
        if parent is None:
            return
        self.selection_score = upper_confidence_bound(
            self.total_outcome, self.ucb_c, parent.visits, self.visits
        )

    def add_outcome(self, outcome: float, weighting: str = COMPOUND) -> None:
        """
        Add a playout outcome to this node and every ancestor.

        This implements the backpropagation phase of MCTS. Each node on the
        path to the root scales the value it receives by its own move
        probability before adding it. With 'compound' weighting the scaled
        value is what the parent receives, so probabilities multiply along
        the path; with 'independent' weighting every node receives the raw
        outcome.

        Scores are recomputed once all visit counts on the path are updated,
        since a node's score depends on its parent's visits.

        Args:
            outcome: Raw outcome from the scorer, 0.0-1.0
            weighting: 'compound' or 'independent'
        """
        path = []
        incoming = outcome
        node: Optional[MCTSNode] = self
        while node is not None:
            weighted = incoming * node.probability
            node.total_outcome += weighted
            node.visits += 1
            path.append(node)

            incoming = weighted if weighting == COMPOUND else outcome
            node = node.parent

        for node in path:
            node.update_selection_score()

    def best_child(self) -> MCTSNode:
        """
        Get the most visited child.

        Visit counts are a steadier guide than average outcomes. Ties go to
        the child expanded first.

        Returns:
            Most visited child node

        Raises:
            SelectionError: If the node has no children
        """
        if not self.children:
            raise SelectionError("Cannot pick the best child of a node with no children")

        return max(self.children, key=lambda child: child.visits)

    def best_move(self) -> Optional[Move]:
        """
        Get the best move from this node based on visit counts.

        This is typically called at the root node to determine the final move.

        Returns:
            The best move, or None if no children
        """
        if not self.children:
            return None
        return self.best_child().move

    def __str__(self) -> str:
        return (f"MCTSNode(move={self.move}, "
                f"visits={self.visits}, "
                f"outcome={self.total_outcome:.2f}, "
                f"score={self.selection_score:.3f}, "
                f"children={len(self.children)}, "
                f"untried={len(self.untried_moves)})")
