"""
Errors raised when the search engine's contracts are broken.

All of these signal programming mistakes, either in a game plugin or in a
caller of the search, and are never caught inside the library.
"""


class ContractViolationError(RuntimeError):
    """Base class for contract violations."""


class InvalidProbabilityError(ContractViolationError):
    """A move reported a probability outside of 0.0-1.0."""

    def __init__(self, probability: float):
        super().__init__(
            f"Move cannot have a probability outside of the range 0.0-1.0: {probability}"
        )
        self.probability = probability


class ExpansionError(ContractViolationError):
    """A node was expanded although it has no untried moves."""


class SelectionError(ContractViolationError):
    """A child was selected from a node that has no children."""


class SelectionPreconditionError(ContractViolationError):
    """The UCB1 score was requested for an unvisited child or parent."""


class NoMovesError(ContractViolationError):
    """A search was started from a state with no legal moves."""
