"""Error taxonomy for the agent's step loop.

Collaborator failures are soft: they surface as ``RecoverableError``
subclasses and the agent simply makes no progress that step. Protocol
violations inside the agent are hard: they surface as ``FatalError``
subclasses and the agent stops.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from artemis.models.state import AgentState


class RecoverableError(Exception):
    """Error the agent recovers from by retrying on the next step."""

    pass


class FatalError(Exception):
    """Error that requires stopping the agent."""

    pass


class StepFailure(RecoverableError):
    """A state handler could not make progress this step.

    Attributes:
        state: State whose handler failed.
        collaborator: Short name of the failing collaborator.
    """

    def __init__(self, state: AgentState, collaborator: str, message: str) -> None:
        super().__init__(f"{state.value}: {message}")
        self.state = state
        self.collaborator = collaborator


class InvalidTransitionError(FatalError):
    """A handler proposed a (current, next) pair outside the transition table."""

    def __init__(self, current: AgentState, proposed: AgentState) -> None:
        super().__init__(f"Invalid state transition: {current.value} -> {proposed.value}")
        self.current = current
        self.proposed = proposed


class AgentHaltedError(FatalError):
    """The agent was stepped after a fatal defect halted it."""

    pass
