"""Path planner interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from artemis.interfaces.errors import CollaboratorError
from artemis.models.geometry import Coordinate
from artemis.models.navigation import NavigationAction


class PathPlanner(ABC):
    """Abstract interface for turning target tiles into navigation steps.

    The planner keeps an internal cost model built from a world snapshot by
    ``plan``; the query methods answer against the latest model.
    """

    @abstractmethod
    def plan(self, snapshot: Any, start: Coordinate) -> None:
        """Rebuild the cost model from a snapshot, starting at ``start``.

        Raises:
            PlanningError: If the cost model cannot be built.
        """
        ...

    @abstractmethod
    def actions_to(self, target: Coordinate) -> list[NavigationAction]:
        """Return the navigation steps that lead to ``target``.

        Raises:
            PlanningError: If ``target`` is unreachable or unknown.
        """
        ...

    @abstractmethod
    def coordinates_matching(self, category: str) -> list[Coordinate]:
        """Return known tiles holding a resource of ``category``."""
        ...


class PlanningError(CollaboratorError):
    """Error raised when a route cannot be planned."""

    pass
