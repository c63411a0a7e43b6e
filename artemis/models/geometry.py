"""Tile coordinates and movement directions."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, Field


class Direction(StrEnum):
    """Directions accepted by the world view for a single move."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Coordinate(BaseModel):
    """A tile position in the world grid (row, column)."""

    row: Annotated[int, Field(ge=0)] = Field(..., description="Row index")
    col: Annotated[int, Field(ge=0)] = Field(..., description="Column index")

    model_config = {"frozen": True}

    @classmethod
    def of(cls, row: int, col: int) -> Coordinate:
        """Create a coordinate from positional row/column values."""
        return cls(row=row, col=col)

    def as_tuple(self) -> tuple[int, int]:
        """Return the coordinate as a ``(row, col)`` tuple."""
        return (self.row, self.col)

    def __repr__(self) -> str:
        return f"Coordinate({self.row}, {self.col})"
