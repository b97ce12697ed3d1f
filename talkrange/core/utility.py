from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Tuple, TypeVar


Action = TypeVar("Action")
State = TypeVar("State")
UtilityFunction = Callable[[Action, State], float]


def value_of_action(
    action: Action,
    belief_over_states: Dict[State, float],
    utility: UtilityFunction[Action, State],
) -> float:
    """Expected value of a specific action under a belief distribution."""

    return sum(prob * utility(action, state) for state, prob in belief_over_states.items())


def rank_by_value(items: Iterable[Tuple[Action, float]]) -> List[Tuple[Action, float]]:
    """Sort (action, value) pairs by value, highest first.

    The sort is stable, so actions with equal value keep their input order.
    """

    return sorted(items, key=lambda pair: pair[1], reverse=True)
