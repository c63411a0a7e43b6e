"""Shared fakes and fixtures for agent tests."""

from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from artemis.artifacts.catalog import ArtifactCatalog
from artemis.core.controller import Agent, AgentSettings
from artemis.core.metrics import MetricsCollector
from artemis.core.tracker import CompletionTracker
from artemis.interfaces.collector import ResourceCollector
from artemis.interfaces.events import EventSink
from artemis.interfaces.planner import PathPlanner, PlanningError
from artemis.interfaces.renderer import ArtifactRenderer
from artemis.interfaces.scanner import AreaScanner, TilePredicate
from artemis.interfaces.world import MovementError, WorldView, WorldViewError
from artemis.models.artifacts import Artifact
from artemis.models.events import TerminationEvent
from artemis.models.geometry import Coordinate, Direction
from artemis.models.navigation import NavigationAction
from artemis.models.outcomes import RenderStatus, ScanResult
from artemis.models.state import AgentState
from artemis.runtime.assembly import SimulationBundle

WORLD = object()


class FixedBudgetRandom(random.Random):
    """Random source whose ``randint`` always returns the same budget."""

    def __init__(self, budget: int) -> None:
        super().__init__(0)
        self.budget = budget
        self.randint_calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self.budget


class FakeWorldView(WorldView):
    """In-memory world view recording every move."""

    def __init__(self, position: Coordinate | None = None, energy: int = 100) -> None:
        self.current = position or Coordinate.of(10, 10)
        self.current_energy = energy
        self.moves: list[Direction] = []
        self.teleports: list[Coordinate] = []
        self.refreshes = 0
        self.snapshots = 0
        self.fail_moves = False
        self.fail_position = False
        self.fail_snapshot = False
        self.fail_refresh = False

    def position(self, world: Any) -> Coordinate:
        if self.fail_position:
            raise WorldViewError("agent is not on the map")
        return self.current

    def energy(self, world: Any) -> int:
        return self.current_energy

    def move(self, world: Any, direction: Direction) -> None:
        if self.fail_moves:
            raise MovementError(f"blocked {direction.value}")
        self.moves.append(direction)

    def teleport(self, world: Any, coordinate: Coordinate) -> None:
        if self.fail_moves:
            raise MovementError("teleport blocked")
        self.teleports.append(coordinate)
        self.current = coordinate

    def refresh_view(self, world: Any) -> None:
        if self.fail_refresh:
            raise WorldViewError("view unavailable")
        self.refreshes += 1

    def snapshot(self, world: Any) -> Any:
        if self.fail_snapshot:
            raise WorldViewError("map unavailable")
        self.snapshots += 1
        return {"discovered": self.snapshots}


class FakeScanner(AreaScanner):
    """Scanner returning a configured result."""

    def __init__(self, result: ScanResult | None = None) -> None:
        self.result = result or ScanResult.complete()
        self.error: Exception | None = None
        self.calls: list[dict[str, Any]] = []

    def scan(
        self,
        world: Any,
        position: Coordinate,
        radius: int,
        world_size: int,
        energy_budget: int | None,
        predicate: TilePredicate,
        *,
        scan_budget: float | None = None,
    ) -> ScanResult:
        self.calls.append(
            {
                "position": position,
                "radius": radius,
                "world_size": world_size,
                "energy_budget": energy_budget,
                "predicate": predicate,
                "scan_budget": scan_budget,
            }
        )
        if self.error is not None:
            raise self.error
        return self.result


class FakePlanner(PathPlanner):
    """Planner with canned coordinates and routes."""

    def __init__(
        self,
        coordinates: dict[str, list[Coordinate]] | None = None,
        routes: dict[Coordinate, list[NavigationAction]] | None = None,
        default_route: list[NavigationAction] | None = None,
    ) -> None:
        self.coordinates = coordinates or {}
        self.routes = routes or {}
        if default_route is None:
            default_route = [NavigationAction.north()]
        self.default_route = default_route
        self.fail_routes = False
        self.fail_matching = False
        self.plans: list[Coordinate] = []
        self.requested: list[Coordinate] = []

    def plan(self, snapshot: Any, start: Coordinate) -> None:
        self.plans.append(start)

    def actions_to(self, target: Coordinate) -> list[NavigationAction]:
        self.requested.append(target)
        if self.fail_routes:
            raise PlanningError(f"no route to {target}")
        return list(self.routes.get(target, self.default_route))

    def coordinates_matching(self, category: str) -> list[Coordinate]:
        if self.fail_matching:
            raise PlanningError("planner has no map")
        return list(self.coordinates.get(category, []))


class FakeCollector(ResourceCollector):
    """Collector yielding configured amounts, or raising for failing categories."""

    def __init__(self, yields: dict[str, int | Exception] | None = None) -> None:
        self.yields: dict[str, int | Exception] = yields or {}
        self.calls: list[str] = []

    def collect_nearby(self, world: Any, category: str) -> int:
        self.calls.append(category)
        outcome = self.yields.get(category, 0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeRenderer(ArtifactRenderer):
    """Renderer returning queued statuses (the last one repeats)."""

    def __init__(self, statuses: list[RenderStatus | Exception] | None = None) -> None:
        self.statuses: list[RenderStatus | Exception] = statuses or [RenderStatus.FINISHED]
        self.rendered: list[Artifact] = []

    def advance(self, world: Any, artifact: Artifact, position: Coordinate) -> RenderStatus:
        self.rendered.append(artifact)
        outcome = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSink(EventSink):
    """Event sink remembering every notification and tick."""

    def __init__(self) -> None:
        self.events: list[TerminationEvent] = []
        self.ticks = 0

    def notify(self, event: TerminationEvent) -> None:
        self.events.append(event)

    def process_tick(self, world: Any) -> None:
        self.ticks += 1


@pytest.fixture
def world_view() -> FakeWorldView:
    return FakeWorldView()


@pytest.fixture
def scanner() -> FakeScanner:
    return FakeScanner()


@pytest.fixture
def planner() -> FakePlanner:
    return FakePlanner(coordinates={"rock": [Coordinate.of(2, 3)]})


@pytest.fixture
def collector() -> FakeCollector:
    return FakeCollector({"rock": 3, "tree": 2})


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def catalog(tmp_path: Path) -> ArtifactCatalog:
    return ArtifactCatalog(
        directory=tmp_path,
        names=["first.png", "second.png"],
        terminal="last.png",
        load_images=False,
    )


@pytest.fixture
def make_agent(
    scanner: FakeScanner,
    planner: FakePlanner,
    collector: FakeCollector,
    renderer: FakeRenderer,
    world_view: FakeWorldView,
    catalog: ArtifactCatalog,
    sink: RecordingSink,
) -> Callable[..., Agent]:
    """Factory building an agent wired to the shared fakes."""

    def _make(
        budget: int = 3,
        tracker: CompletionTracker | None = None,
        metrics: MetricsCollector | None = None,
        artifact_catalog: ArtifactCatalog | None = None,
        **settings: Any,
    ) -> Agent:
        return Agent(
            scanner=scanner,
            planner=planner,
            collector=collector,
            renderer=renderer,
            world_view=world_view,
            catalog=artifact_catalog or catalog,
            event_sink=sink,
            settings=AgentSettings(**settings),
            tracker=tracker,
            rng=FixedBudgetRandom(budget),
            metrics=metrics,
        )

    return _make


@pytest.fixture
def drive() -> Callable[[Agent, AgentState, int], None]:
    """Step an agent until it reaches ``state`` or runs out of steps."""

    def _drive(agent: Agent, state: AgentState, limit: int = 20) -> None:
        for _ in range(limit):
            if agent.state == state:
                return
            agent.step(WORLD)
        assert agent.state == state, f"agent stuck in {agent.state.value}"

    return _drive


@pytest.fixture
def bundle(
    scanner: FakeScanner,
    planner: FakePlanner,
    collector: FakeCollector,
    renderer: FakeRenderer,
    world_view: FakeWorldView,
    sink: RecordingSink,
) -> SimulationBundle:
    return SimulationBundle(
        world=WORLD,
        scanner=scanner,
        planner=planner,
        collector=collector,
        renderer=renderer,
        world_view=world_view,
        event_sink=sink,
    )
