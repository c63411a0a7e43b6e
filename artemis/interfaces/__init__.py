"""Interface definitions for the collaborators the agent depends on.

The agent never implements scanning, path planning, collection or rendering
itself; the surrounding simulation supplies implementations of these
interfaces.
"""

from artemis.interfaces.collector import CollectionError, ResourceCollector
from artemis.interfaces.errors import CollaboratorError
from artemis.interfaces.events import EventSink
from artemis.interfaces.planner import PathPlanner, PlanningError
from artemis.interfaces.renderer import ArtifactRenderer, RenderError
from artemis.interfaces.scanner import AreaScanner, ScanError, TilePredicate
from artemis.interfaces.world import MovementError, WorldView, WorldViewError

__all__ = [
    "AreaScanner",
    "ArtifactRenderer",
    "CollaboratorError",
    "CollectionError",
    "EventSink",
    "MovementError",
    "PathPlanner",
    "PlanningError",
    "RenderError",
    "ResourceCollector",
    "ScanError",
    "TilePredicate",
    "WorldView",
    "WorldViewError",
]
