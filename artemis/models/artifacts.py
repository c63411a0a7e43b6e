"""Artifact descriptors handed to the renderer."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Artifact(BaseModel):
    """An artifact the agent can render onto the world.

    ``image`` holds the loaded picture (a Pillow image) once the catalog has
    loaded it; it is excluded from serialization.
    """

    name: str = Field(..., min_length=1, description="Catalog name, e.g. a file name")
    path: Path = Field(..., description="Source image path")
    height: int = Field(default=50, ge=1, description="Render height in tiles")
    terminal: bool = Field(default=False, description="Rendered last, before retiring")
    image: Any = Field(default=None, exclude=True, repr=False)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}
