"""Dotenv support for ``ARTEMIS_*`` configuration overrides.

A run can keep its overrides in a dotenv file instead of the shell. The file
is looked up in this order:

1. the path passed explicitly (``--env-file``), relative to the working directory
2. the path in ``ARTEMIS_ENV_FILE``
3. ``.env`` next to the YAML config file in use
4. ``.env`` in the working directory

Only keys starting with ``ARTEMIS_`` are exported; anything else in the file
is left alone so a shared ``.env`` cannot leak unrelated settings.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

ENV_PREFIX = "ARTEMIS_"
ENV_FILE_VAR = "ARTEMIS_ENV_FILE"


def find_environment_file(
    env_file: str | Path | None = None,
    *,
    config_path: str | Path | None = None,
    cwd: Path | None = None,
) -> Path | None:
    """Return the dotenv file a run should use, or None if there is none.

    An explicit or ``ARTEMIS_ENV_FILE`` path is returned even if it does not
    exist, so the caller can report it.
    """
    base = (cwd or Path.cwd()).resolve()
    explicit = env_file or os.environ.get(ENV_FILE_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        return (path if path.is_absolute() else base / path).resolve()

    candidates = []
    if config_path is not None:
        candidates.append(Path(config_path).expanduser().resolve().parent / ".env")
    candidates.append(base / ".env")
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_environment_file(
    env_file: str | Path | None = None,
    *,
    config_path: str | Path | None = None,
    override: bool = False,
    strict: bool = True,
    cwd: Path | None = None,
) -> dict[str, str]:
    """Export the ``ARTEMIS_*`` entries of a dotenv file into ``os.environ``.

    Args:
        env_file: Explicit dotenv path.
        config_path: YAML config in use; its directory is searched for ``.env``.
        override: Replace variables that are already set.
        strict: Raise if an explicitly named file is missing.
        cwd: Directory used for relative paths and the last lookup.

    Returns:
        The variables that were exported.

    Raises:
        FileNotFoundError: If ``strict`` and the named file does not exist.
    """
    path = find_environment_file(env_file, config_path=config_path, cwd=cwd)
    if path is None:
        return {}
    if not path.is_file():
        if strict:
            raise FileNotFoundError(f"Dotenv file not found: {path}")
        logger.debug("Dotenv file %s not found; skipping", path)
        return {}

    exported: dict[str, str] = {}
    for key, value in dotenv_values(path).items():
        if not key.startswith(ENV_PREFIX) or key == ENV_FILE_VAR:
            logger.debug("Ignoring %s from %s", key, path.name)
            continue
        if value is None or (key in os.environ and not override):
            continue
        os.environ[key] = value
        exported[key] = value

    logger.info("Loaded %d overrides from %s", len(exported), path)
    return exported
