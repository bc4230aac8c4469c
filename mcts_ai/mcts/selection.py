"""
Selection formula for Monte Carlo Tree Search.

UCB1 balances exploitation (children that have scored well so far) against
exploration (children that have been visited little).
"""
import math

from mcts_ai.core.errors import SelectionPreconditionError


def upper_confidence_bound(
    child_aggregate_outcome: float,
    ucb_c: float,
    parent_visits: int,
    child_visits: int
) -> float:
    """
    Calculate the UCB1 score of a child node relative to its parent.

    UCB1 = average_outcome + c * sqrt(2 * ln(parent_visits) / child_visits)

    Args:
        child_aggregate_outcome: Sum of the (weighted) outcomes seen by the child
        ucb_c: Bias parameter, higher favors exploration, lower exploitation
        parent_visits: Visits to the parent node, at least 1
        child_visits: Visits to the child node, at least 1

    Returns:
        UCB1 score

    Raises:
        SelectionPreconditionError: If the child or parent was never visited
    """
    if child_visits < 1 or parent_visits < 1:
        raise SelectionPreconditionError(
            f"UCB1 needs visited nodes (parent_visits={parent_visits}, child_visits={child_visits})"
        )

    exploitation = child_aggregate_outcome / child_visits
    exploration = math.sqrt(2 * math.log(parent_visits) / child_visits)
    return exploitation + ucb_c * exploration
