"""Artifact catalog and image loading."""

from artemis.artifacts.catalog import ArtifactCatalog
from artemis.artifacts.images import ArtifactLoadError, load_artifact_image

__all__ = ["ArtifactCatalog", "ArtifactLoadError", "load_artifact_image"]
