"""Resource collector interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from artemis.interfaces.errors import CollaboratorError


class ResourceCollector(ABC):
    """Abstract interface for collecting resources next to the agent."""

    @abstractmethod
    def collect_nearby(self, world: Any, category: str) -> int:
        """Collect every instantly reachable resource of ``category``.

        Args:
            world: Simulation world handle.
            category: Resource category, e.g. ``"rock"`` or ``"tree"``.

        Returns:
            Number of units collected (may be zero).

        Raises:
            CollectionError: If collection could not be attempted.
        """
        ...


class CollectionError(CollaboratorError):
    """Error raised when resource collection fails."""

    pass
