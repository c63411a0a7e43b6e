"""Runtime assembly: turning configuration and collaborators into an agent."""

from artemis.runtime.assembly import (
    FactoryResolutionError,
    SimulationBundle,
    build_agent,
    build_catalog,
    build_event_stream,
    build_settings,
    resolve_factory,
)

__all__ = [
    "FactoryResolutionError",
    "SimulationBundle",
    "build_agent",
    "build_catalog",
    "build_event_stream",
    "build_settings",
    "resolve_factory",
]
