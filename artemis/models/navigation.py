"""Primitive navigation commands produced by a path planner."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from artemis.models.geometry import Coordinate, Direction


class ActionKind(StrEnum):
    """Kinds of primitive navigation commands."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    TELEPORT = "teleport"


_HEADINGS: dict[ActionKind, Direction] = {
    ActionKind.NORTH: Direction.UP,
    ActionKind.SOUTH: Direction.DOWN,
    ActionKind.EAST: Direction.RIGHT,
    ActionKind.WEST: Direction.LEFT,
}


class NavigationAction(BaseModel):
    """A single step on the way to a target tile.

    Either a compass move of one tile or a teleport to an absolute
    coordinate. Actions are immutable.
    """

    kind: ActionKind = Field(..., description="Move heading or teleport")
    target: Coordinate | None = Field(default=None, description="Teleport destination")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_target(self) -> NavigationAction:
        if self.kind == ActionKind.TELEPORT and self.target is None:
            raise ValueError("teleport action requires a target coordinate")
        if self.kind != ActionKind.TELEPORT and self.target is not None:
            raise ValueError(f"{self.kind.value} action does not take a target")
        return self

    @classmethod
    def north(cls) -> NavigationAction:
        return cls(kind=ActionKind.NORTH)

    @classmethod
    def south(cls) -> NavigationAction:
        return cls(kind=ActionKind.SOUTH)

    @classmethod
    def east(cls) -> NavigationAction:
        return cls(kind=ActionKind.EAST)

    @classmethod
    def west(cls) -> NavigationAction:
        return cls(kind=ActionKind.WEST)

    @classmethod
    def teleport(cls, row: int, col: int) -> NavigationAction:
        """Create a teleport action to ``(row, col)``."""
        return cls(kind=ActionKind.TELEPORT, target=Coordinate(row=row, col=col))

    @property
    def is_teleport(self) -> bool:
        return self.kind == ActionKind.TELEPORT

    @property
    def direction(self) -> Direction | None:
        """World-view direction for a compass move, None for a teleport."""
        return _HEADINGS.get(self.kind)
