"""
The game of Nim.

Players alternately take 1, 2 or 3 chips; the player who takes the last chip
wins. Any starting pile of the form 4n+k (k = 1, 2, 3) is a win for the first
player, who takes k chips and then keeps the pile at a multiple of 4. Any
starting pile of 4n is a win for the second player.

Nim has no randomness and no hidden information, which makes it a handy
check that the search converges on a provably correct move.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional

from mcts_ai.core.game import GameState, WIN, LOSS, UNDECIDED


# The most chips a player can take on their move
MAX_PICKABLE_CHIPS = 3


@dataclass(frozen=True)
class NimMove:
    """A single move in a Nim game: a player taking some chips."""
    player_id: Any
    chips: int

    def __post_init__(self):
        """Validate the move after initialization."""
        if self.chips < 1 or self.chips > MAX_PICKABLE_CHIPS:
            raise ValueError(f"Nim move cannot be to remove {self.chips} chips")

    def probability(self) -> float:
        # No randomness in Nim
        return 1.0

    def __str__(self) -> str:
        return f"player {self.player_id} takes {self.chips} chips"


@dataclass
class NimState:
    """
    State of a Nim game.

    Only two players take part; the first player listed moves first.
    """
    chips: int
    player_ids: List[Any] = field(default_factory=lambda: [1, 2])

    # Whose turn it is, and who moved last (None before the first move)
    active_player_id: Any = None
    just_moved_player_id: Optional[Any] = None

    def __post_init__(self):
        """Validate the state and fill in the first player."""
        if self.chips < 0:
            raise ValueError("chips must be non-negative")

        if len(self.player_ids) < 2:
            raise ValueError("Nim needs two players")

        self.player_ids = list(self.player_ids[:2])
        if self.active_player_id is None:
            self.active_player_id = self.player_ids[0]

    def clone(self) -> NimState:
        """
        Make a deep copy of the game state.

        Returns:
            Independent copy of the state
        """
        return NimState(
            chips=self.chips,
            player_ids=list(self.player_ids),
            active_player_id=self.active_player_id,
            just_moved_player_id=self.just_moved_player_id
        )

    def available_moves(self) -> List[NimMove]:
        """
        Get all moves the active player can make.

        Returns:
            Moves taking 1 up to 3 chips, empty once the pile is gone
        """
        max_pickable = min(self.chips, MAX_PICKABLE_CHIPS)
        return [NimMove(self.active_player_id, chips) for chips in range(1, max_pickable + 1)]

    def make_move(self, move: NimMove) -> None:
        """
        Take chips from the pile and pass the turn.

        Args:
            move: Move to make

        Raises:
            ValueError: If the move takes more chips than are left
        """
        if move.chips > self.chips:
            raise ValueError(f"Cannot take {move.chips} chips, only {self.chips} left")

        self.chips -= move.chips
        self.just_moved_player_id = self.active_player_id
        self._next_player_active()

    def _next_player_active(self) -> None:
        # Whichever of the two players is not active becomes active
        first, second = self.player_ids
        self.active_player_id = second if self.active_player_id == first else first

    def randomize_unknowns(self) -> None:
        # Nim has no hidden information
        pass

    def is_over(self) -> bool:
        return self.chips == 0

    @property
    def winner(self) -> Optional[Any]:
        """The player who took the last chip, None while the game goes on."""
        if not self.is_over():
            return None
        return self.just_moved_player_id

    def __str__(self) -> str:
        return f"CHIPS: {self.chips}"


def score_nim(player_id: Any, state: GameState) -> float:
    """
    Score a Nim state from a player's perspective.

    Args:
        player_id: Player to score for
        state: Nim state to score

    Returns:
        0.0 (lost), 0.5 (in progress) or 1.0 (won)
    """
    # Is the game still in progress?
    if state.available_moves():
        return UNDECIDED

    # The game is over, the last player to move took the last chip
    if player_id == state.just_moved_player_id:
        return WIN
    return LOSS


def create_nim_game(chips: int = 100, player_ids: Optional[List[Any]] = None) -> NimState:
    """
    Create a new Nim game.

    Args:
        chips: Number of chips in the starting pile
        player_ids: The two players, first moves first (default [1, 2])

    Returns:
        Starting NimState
    """
    return NimState(chips=chips, player_ids=list(player_ids) if player_ids else [1, 2])
