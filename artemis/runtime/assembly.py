"""Building an agent from configuration and simulation-provided collaborators."""

from __future__ import annotations

import importlib
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from artemis.artifacts.catalog import ArtifactCatalog
from artemis.config.loader import Config
from artemis.core.controller import Agent, AgentSettings
from artemis.core.metrics import MetricsCollector
from artemis.interfaces.collector import ResourceCollector
from artemis.interfaces.events import EventSink
from artemis.interfaces.planner import PathPlanner
from artemis.interfaces.renderer import ArtifactRenderer
from artemis.interfaces.scanner import AreaScanner
from artemis.interfaces.world import WorldView
from artemis.observer.events import EventStream, LoggingEventSink

logger = logging.getLogger(__name__)


@dataclass
class SimulationBundle:
    """What the surrounding simulation hands over to run an agent."""

    world: Any
    scanner: AreaScanner
    planner: PathPlanner
    collector: ResourceCollector
    renderer: ArtifactRenderer
    world_view: WorldView
    event_sink: EventSink | None = None


BundleFactory = Callable[[Config], SimulationBundle]


class FactoryResolutionError(Exception):
    """Error raised when a simulation factory cannot be imported."""

    pass


def resolve_factory(spec: str) -> BundleFactory:
    """Import a ``module:callable`` simulation factory.

    Raises:
        FactoryResolutionError: If the module or attribute is missing or not callable.
    """
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise FactoryResolutionError(f"Factory must look like 'module:callable', got {spec!r}")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise FactoryResolutionError(f"Cannot import factory module {module_name}: {e}") from e
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise FactoryResolutionError(f"{module_name} has no attribute {attr_path}") from e
    if not callable(target):
        raise FactoryResolutionError(f"Factory {spec} is not callable")
    return target


def build_settings(config: Config) -> AgentSettings:
    """Translate configuration into agent settings."""
    return AgentSettings(
        name=config.agent.name,
        world_size=config.world.size,
        explore_radius=config.explore.radius,
        scan_budget=config.explore.scan_budget,
        categories=tuple(config.explore.categories),
        report_category=config.tracker.report_category,
        render_budget_min=config.agent.render_budget_min,
        render_budget_max=config.agent.render_budget_max,
        quota_target=config.tracker.target,
        wildcard_quota=config.tracker.wildcard,
    )


def build_catalog(config: Config) -> ArtifactCatalog:
    return ArtifactCatalog(
        directory=config.artifacts.directory,
        names=config.artifacts.names,
        terminal=config.artifacts.terminal,
        height=config.artifacts.height,
        load_images=config.artifacts.load_images,
    )


def build_event_stream(config: Config) -> EventStream:
    """Bounded event stream a simulation factory can hand back as its event sink."""
    return EventStream(max_events=config.observer.max_events)


def build_agent(
    config: Config,
    bundle: SimulationBundle,
    *,
    rng: random.Random | None = None,
    metrics: MetricsCollector | None = None,
) -> Agent:
    """Assemble an agent wired to the bundle's collaborators."""
    if rng is None:
        rng = random.Random(config.agent.seed)
    event_sink = bundle.event_sink or LoggingEventSink()
    agent = Agent(
        scanner=bundle.scanner,
        planner=bundle.planner,
        collector=bundle.collector,
        renderer=bundle.renderer,
        world_view=bundle.world_view,
        catalog=build_catalog(config),
        event_sink=event_sink,
        settings=build_settings(config),
        rng=rng,
        metrics=metrics,
    )
    logger.debug("Assembled agent %s (seed=%s)", agent.name, config.agent.seed)
    return agent
