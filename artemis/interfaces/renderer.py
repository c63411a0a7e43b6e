"""Artifact renderer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from artemis.interfaces.errors import CollaboratorError
from artemis.models.artifacts import Artifact
from artemis.models.geometry import Coordinate
from artemis.models.outcomes import RenderStatus


class ArtifactRenderer(ABC):
    """Abstract interface for rendering an artifact onto the world.

    A call runs the renderer as far as it can go (until the artifact is done
    or it runs out of energy or materials) and reports where it stopped.
    """

    @abstractmethod
    def advance(self, world: Any, artifact: Artifact, position: Coordinate) -> RenderStatus:
        """Render as much of ``artifact`` anchored at ``position`` as possible.

        Raises:
            RenderError: If rendering could not proceed.
        """
        ...


class RenderError(CollaboratorError):
    """Error raised when rendering fails."""

    pass
