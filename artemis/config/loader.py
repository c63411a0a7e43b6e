"""Configuration loader for Artemis.

Loads configuration from YAML files and environment variables.
Environment variables override YAML values using the ARTEMIS_ prefix.
Nested keys use double underscores: ARTEMIS_EXPLORE__RADIUS=12
List values are given comma-separated: ARTEMIS_EXPLORE__CATEGORIES=rock,tree
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

DEFAULT_ARTIFACTS = [
    "agentileschi_giodittaoloferne.png",
    "fontana_concettospaziale.png",
    "giulialama_martirioeurosia.png",
    "meow.png",
    "paularego_war.png",
    "remediosvaro_fenomeno.png",
]


class AgentConfig(BaseModel):
    """Agent core settings."""

    name: str = Field(default="artemis", min_length=1)
    debug: bool = Field(default=False, description="Log agent internals at DEBUG")
    seed: int | None = Field(default=None, description="Seed for budget/artifact draws")
    render_budget_min: int = Field(default=0, ge=0, le=1000)
    render_budget_max: int = Field(default=13, ge=0, le=1000)
    max_ticks: int = Field(default=300, ge=1, description="Ticks per run")
    tick_interval_ms: float = Field(default=0.0, ge=0.0, le=60000.0)
    max_consecutive_errors: int = Field(default=5, ge=1, le=100)


class WorldConfig(BaseModel):
    """Simulated world settings."""

    size: int = Field(default=200, ge=1, le=100000, description="World side length in tiles")


class ExploreConfig(BaseModel):
    """Exploration settings."""

    radius: int = Field(default=10, ge=1, le=1000)
    scan_budget: float | None = Field(default=None, ge=0.0, description="Defaults to size/2")
    categories: list[str] = Field(default_factory=lambda: ["rock", "tree"], min_length=1)


class TrackerConfig(BaseModel):
    """Completion tracker settings."""

    target: int = Field(default=20, ge=0)
    report_category: str | None = Field(default="tree")
    wildcard: bool = Field(default=False, description="Quota accepts any category")


class ArtifactsConfig(BaseModel):
    """Artifact catalog settings."""

    directory: str = Field(default="res/img")
    names: list[str] = Field(default_factory=lambda: list(DEFAULT_ARTIFACTS), min_length=1)
    terminal: str = Field(default="meow.png", min_length=1)
    height: int = Field(default=50, ge=1, le=10000)
    load_images: bool = Field(default=False, description="Load and resize images with Pillow")


class SimulationConfig(BaseModel):
    """Surrounding simulation settings."""

    factory: str | None = Field(
        default=None,
        pattern=r"^[\w.]+:[\w.]+$",
        description="'module:callable' building the simulation bundle",
    )


class ObserverConfig(BaseModel):
    """Event stream settings."""

    max_events: int = Field(default=500, ge=1, le=1000000)


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="readable", pattern="^(readable|json)$")


class Config(BaseModel):
    """Root configuration model."""

    agent: AgentConfig = Field(default_factory=AgentConfig)
    world: WorldConfig = Field(default_factory=WorldConfig)
    explore: ExploreConfig = Field(default_factory=ExploreConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    observer: ObserverConfig = Field(default_factory=ObserverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _check_budget_range(self) -> Config:
        if self.agent.render_budget_min > self.agent.render_budget_max:
            raise ValueError("agent.render_budget_min must not exceed agent.render_budget_max")
        return self


def _get_env_value(key: str) -> str | None:
    """Get environment variable with ARTEMIS_ prefix."""
    env_key = f"ARTEMIS_{key.upper()}"
    return os.environ.get(env_key)


def _apply_env_overrides(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Apply environment variable overrides to config data.

    Environment variables use ARTEMIS_ prefix with double underscores for nesting.
    Example: ARTEMIS_AGENT__MAX_TICKS=50 sets agent.max_ticks to 50
    """
    result = data.copy()

    for key, value in result.items():
        env_key = f"{prefix}__{key}" if prefix else key

        if isinstance(value, dict):
            result[key] = _apply_env_overrides(value, env_key)
        else:
            env_value = _get_env_value(env_key)
            if env_value is not None:
                # Convert to appropriate type based on original value
                if isinstance(value, bool):
                    result[key] = env_value.lower() in ("true", "1", "yes")
                elif isinstance(value, int):
                    result[key] = int(env_value)
                elif isinstance(value, float):
                    result[key] = float(env_value)
                elif isinstance(value, list):
                    result[key] = [item.strip() for item in env_value.split(",") if item.strip()]
                else:
                    result[key] = env_value

    return result


def default_config_path() -> Path:
    """Path of the bundled default configuration file."""
    project_root = Path(__file__).parent.parent.parent
    return project_root / "configs" / "default.yaml"


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML config file. If None, uses default.yaml.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config values are invalid.
    """
    config_path = default_config_path() if config_path is None else Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    data = _apply_env_overrides(data)

    return Config.model_validate(data)


def get_default_config() -> Config:
    """Get default configuration without loading from file."""
    return Config()
