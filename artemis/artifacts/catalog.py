"""Catalog of artifacts the agent can render.

The catalog holds a list of image files and one terminal image. While the
agent still has render budget it picks a random entry; once the budget is
spent it renders the terminal artifact before retiring.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

from artemis.artifacts.images import load_artifact_image
from artemis.models.artifacts import Artifact

logger = logging.getLogger(__name__)


class ArtifactCatalog:
    """Chooses and loads artifacts.

    Args:
        directory: Directory holding the artifact images.
        names: File names eligible for random selection.
        terminal: File name of the final artifact.
        height: Render height in pixels/tiles.
        load_images: Whether to load image data with Pillow when an artifact
            is chosen. When False, artifacts carry only their path.
    """

    def __init__(
        self,
        directory: str | Path,
        names: list[str],
        terminal: str,
        height: int = 50,
        load_images: bool = True,
    ) -> None:
        if not names:
            raise ValueError("Artifact catalog needs at least one artifact name")
        self._directory = Path(directory)
        self._names = list(names)
        self._terminal = terminal
        self._height = height
        self._load_images = load_images

    @property
    def names(self) -> list[str]:
        return list(self._names)

    @property
    def terminal_name(self) -> str:
        return self._terminal

    def random_artifact(self, rng: random.Random) -> Artifact:
        """Pick a random artifact using the supplied RNG.

        Raises:
            ArtifactLoadError: If image loading is enabled and the image is unreadable.
        """
        name = self._names[rng.randrange(len(self._names))]
        logger.debug("Artifact chosen: %s", self._directory / name)
        return self._build(name, terminal=False)

    def terminal_artifact(self) -> Artifact:
        """Return the final artifact.

        Raises:
            ArtifactLoadError: If image loading is enabled and the image is unreadable.
        """
        return self._build(self._terminal, terminal=True)

    def _build(self, name: str, terminal: bool) -> Artifact:
        path = self._directory / name
        image = load_artifact_image(path, self._height) if self._load_images else None
        return Artifact(name=name, path=path, height=self._height, terminal=terminal, image=image)
