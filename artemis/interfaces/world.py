"""World view accessor interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from artemis.interfaces.errors import CollaboratorError
from artemis.models.geometry import Coordinate, Direction


class WorldView(ABC):
    """Abstract interface for the agent's window onto the simulated world.

    The world and the agent's body (position, energy) are owned by the
    simulation. The agent reads and moves through this accessor only.
    """

    @abstractmethod
    def position(self, world: Any) -> Coordinate:
        """Current tile of the agent."""
        ...

    @abstractmethod
    def energy(self, world: Any) -> int:
        """Current energy level of the agent."""
        ...

    @abstractmethod
    def move(self, world: Any, direction: Direction) -> None:
        """Move one tile.

        Raises:
            MovementError: If the move is not possible.
        """
        ...

    @abstractmethod
    def teleport(self, world: Any, coordinate: Coordinate) -> None:
        """Teleport to ``coordinate``.

        Raises:
            MovementError: If the teleport is not possible.
        """
        ...

    @abstractmethod
    def refresh_view(self, world: Any) -> None:
        """Reveal the tiles surrounding the agent after it moved."""
        ...

    @abstractmethod
    def snapshot(self, world: Any) -> Any:
        """Return the grid of tiles the agent has discovered so far.

        Raises:
            WorldViewError: If the map is not available.
        """
        ...


class WorldViewError(CollaboratorError):
    """Error raised when the world view cannot be read."""

    pass


class MovementError(WorldViewError):
    """Error raised when a move or teleport fails."""

    pass
