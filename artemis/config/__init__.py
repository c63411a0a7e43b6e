"""Configuration management for Artemis."""

from artemis.config.env import load_environment_file
from artemis.config.loader import Config, get_default_config, load_config

__all__ = ["Config", "get_default_config", "load_config", "load_environment_file"]
