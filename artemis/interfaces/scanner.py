"""Area scanner interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from artemis.interfaces.errors import CollaboratorError
from artemis.models.geometry import Coordinate
from artemis.models.outcomes import ScanResult

# Receives a world tile (simulation-owned type) and says whether it is of interest.
TilePredicate = Callable[[Any], bool]


class AreaScanner(ABC):
    """Abstract interface for discovering tiles around the agent.

    A scan reveals tiles within ``radius`` of ``position`` to the agent,
    spending at most ``energy_budget`` energy, and reports the tiles that
    satisfy ``predicate``.
    """

    @abstractmethod
    def scan(
        self,
        world: Any,
        position: Coordinate,
        radius: int,
        world_size: int,
        energy_budget: int | None,
        predicate: TilePredicate,
        *,
        scan_budget: float | None = None,
    ) -> ScanResult:
        """Scan the area around a position.

        Args:
            world: Simulation world handle.
            position: Center of the scan.
            radius: Scan radius in tiles.
            world_size: Side length of the (square) world.
            energy_budget: Energy the scan may spend, or None for unlimited.
            predicate: Tile filter selecting tiles of interest.
            scan_budget: Optional scanner-specific discovery budget.

        Returns:
            Scan result with completion status and matching coordinates.

        Raises:
            ScanError: If the scan could not run at all.
        """
        ...


class ScanError(CollaboratorError):
    """Error raised when an area scan fails."""

    pass
