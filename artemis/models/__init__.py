"""Shared data models for Artemis.

All models use Pydantic for validation and serialization.
"""

from artemis.models.artifacts import Artifact
from artemis.models.events import TerminationEvent
from artemis.models.geometry import Coordinate, Direction
from artemis.models.navigation import ActionKind, NavigationAction
from artemis.models.outcomes import RenderStatus, ScanResult, ScanStatus
from artemis.models.state import AgentState

__all__ = [
    "ActionKind",
    "AgentState",
    "Artifact",
    "Coordinate",
    "Direction",
    "NavigationAction",
    "RenderStatus",
    "ScanResult",
    "ScanStatus",
    "TerminationEvent",
]
