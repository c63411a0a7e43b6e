"""Artemis: a step-driven resource-gathering and painting agent for tile worlds."""

__version__ = "0.1.0"
