"""The closed transition table of the agent state machine."""

from __future__ import annotations

from artemis.core.errors import InvalidTransitionError
from artemis.models.state import AgentState

S = AgentState

# Every (current, next) pair a state handler may propose. Anything else is a defect.
TRANSITIONS: frozenset[tuple[AgentState, AgentState]] = frozenset(
    {
        (S.INIT, S.EXPLORE),
        (S.EXPLORE, S.EXPLORE),
        (S.EXPLORE, S.LOCATE),
        (S.LOCATE, S.LOCATE),
        (S.LOCATE, S.GATHER),
        (S.LOCATE, S.EXPLORE),
        (S.GATHER, S.LOCATE),
        (S.GATHER, S.RENDER),
        (S.RENDER, S.EXPLORE),
        (S.RENDER, S.LOCATE),
        (S.RENDER, S.TERMINATE),
        (S.TERMINATE, S.TERMINATE),
    }
)


def is_valid_transition(current: AgentState, proposed: AgentState) -> bool:
    """Check whether ``current -> proposed`` is in the table."""
    return (current, proposed) in TRANSITIONS


def validate_transition(current: AgentState, proposed: AgentState) -> AgentState:
    """Return ``proposed`` if the transition is allowed.

    Raises:
        InvalidTransitionError: If the pair is not in the table.
    """
    if not is_valid_transition(current, proposed):
        raise InvalidTransitionError(current, proposed)
    return proposed


def successors(state: AgentState) -> frozenset[AgentState]:
    """All states reachable from ``state`` in one step."""
    return frozenset(nxt for cur, nxt in TRANSITIONS if cur == state)
