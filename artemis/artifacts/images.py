"""Loading artifact images from disk with Pillow."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)


class ArtifactLoadError(Exception):
    """Error raised when an artifact image cannot be loaded."""

    pass


def load_artifact_image(path: str | Path, height: int) -> Image.Image:
    """Load an image and scale it to ``height`` pixels, keeping its aspect ratio.

    Args:
        path: Image file path.
        height: Target height in pixels (one pixel per world tile).

    Returns:
        RGBA image of the requested height.

    Raises:
        ArtifactLoadError: If the file is missing or not a readable image.
    """
    if height < 1:
        raise ValueError(f"Artifact height must be positive: {height}")
    path = Path(path)
    try:
        with Image.open(path) as img:
            img = img.convert("RGBA")
    except OSError as e:
        raise ArtifactLoadError(f"Cannot load artifact image {path}: {e}") from e

    width = max(1, round(img.width * height / img.height))
    if img.size != (width, height):
        img = img.resize((width, height), Image.Resampling.LANCZOS)
    logger.debug("Loaded artifact %s at %dx%d", path.name, width, height)
    return img
