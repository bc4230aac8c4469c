"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS algorithm,
including the iteration and playout budgets, the exploration constant and
the outcome weighting policy.
"""
from dataclasses import dataclass
from typing import Optional, Literal


# Outcome weighting policies
COMPOUND = "compound"
INDEPENDENT = "independent"
WEIGHTING_POLICIES = (COMPOUND, INDEPENDENT)


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the MCTS algorithm,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = 1000
    """Number of tree-growth iterations to perform per move decision"""

    simulations: int = 100
    """Maximum number of random moves in each playout"""

    exploration_weight: float = 1.0
    """UCB1 constant, higher favors exploration over exploitation"""

    # Strategy parameters
    weighting: Literal["compound", "independent"] = COMPOUND
    """
    How move probabilities weight outcomes on the way to the root.
    'compound' passes each node's weighted value on to its parent, so
    probabilities multiply along the path. 'independent' weights the raw
    outcome by each node's own probability only.
    """

    randomize_unknowns: bool = False
    """Whether to randomize hidden information before each playout"""

    # Reproducibility
    seed: Optional[int] = None
    """Seed for the agent's random source (None = unseeded)"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.simulations < 0:
            raise ValueError("simulations must be non-negative")

        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")

        if self.weighting not in WEIGHTING_POLICIES:
            raise ValueError("weighting must be 'compound' or 'independent'")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(
            iterations=100,
            simulations=50
        )

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=5000,
            simulations=200,
            exploration_weight=0.8  # Slightly less exploration
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                       if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
        }

    def __str__(self) -> str:
        params = [f"{name}={value}" for name, value in self.to_dict().items()]
        return f"MCTSConfig({', '.join(params)})"
