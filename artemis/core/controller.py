"""The agent controller: a step-driven finite-state machine.

Each call to ``Agent.step`` runs the handler of the current state exactly
once. The handler talks to the collaborators, updates the agent's queues and
tracker, and proposes the next state. The proposal is checked against the
transition table before it is committed.

State flow:
    init -> explore -> locate -> gather -> render -> terminate
                ^        |  ^       |        |
                +--------+  +-------+--------+

Failure policy:
    - A collaborator failure that stops a handler raises ``StepFailure``;
      the agent logs it, counts it and keeps its current state.
    - A proposal outside the transition table raises
      ``InvalidTransitionError``; the agent halts and refuses further steps.

Example:
    >>> agent = Agent(
    ...     scanner=scanner,
    ...     planner=planner,
    ...     collector=collector,
    ...     renderer=renderer,
    ...     world_view=world_view,
    ...     catalog=catalog,
    ... )
    >>> for _ in range(300):
    ...     agent.process_tick(world)
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Any

from artemis.artifacts.catalog import ArtifactCatalog
from artemis.artifacts.images import ArtifactLoadError
from artemis.core.errors import AgentHaltedError, InvalidTransitionError, StepFailure
from artemis.core.metrics import MetricsCollector
from artemis.core.tracker import CompletionTracker, Quota
from artemis.core.transitions import validate_transition
from artemis.interfaces.collector import CollectionError, ResourceCollector
from artemis.interfaces.events import EventSink
from artemis.interfaces.planner import PathPlanner, PlanningError
from artemis.interfaces.renderer import ArtifactRenderer, RenderError
from artemis.interfaces.scanner import AreaScanner, ScanError, TilePredicate
from artemis.interfaces.world import MovementError, WorldView, WorldViewError
from artemis.models.events import TerminationEvent
from artemis.models.geometry import Coordinate
from artemis.models.navigation import NavigationAction
from artemis.models.outcomes import RenderStatus, ScanStatus
from artemis.models.state import AgentState

logger = logging.getLogger(__name__)

S = AgentState

_HANDLERS: dict[AgentState, str] = {
    S.INIT: "_do_init",
    S.EXPLORE: "_do_explore",
    S.LOCATE: "_do_locate",
    S.GATHER: "_do_gather",
    S.RENDER: "_do_render",
    S.TERMINATE: "_do_terminate",
}


@dataclass
class AgentSettings:
    """Tunable parameters of the agent.

    Attributes:
        name: Agent name used in events and logs.
        world_size: Side length of the square world.
        explore_radius: Scan radius used while exploring.
        scan_budget: Scanner discovery budget; None means ``world_size / 2``.
        categories: Resource categories searched for and collected, in order.
        report_category: Category every collected unit is reported under.
            None reports each yield under its own category.
        render_budget_min: Lower bound of the initial render budget draw.
        render_budget_max: Upper bound (inclusive) of the initial render budget draw.
        quota_target: Target of the default quota when no tracker is given.
        wildcard_quota: Make the default quota accept any category.
    """

    name: str = "artemis"
    world_size: int = 200
    explore_radius: int = 10
    scan_budget: float | None = None
    categories: tuple[str, ...] = ("rock", "tree")
    report_category: str | None = "tree"
    render_budget_min: int = 0
    render_budget_max: int = 13
    quota_target: int = 20
    wildcard_quota: bool = False

    def __post_init__(self) -> None:
        if self.render_budget_min > self.render_budget_max:
            raise ValueError(
                f"render_budget_min ({self.render_budget_min}) exceeds "
                f"render_budget_max ({self.render_budget_max})"
            )
        if not self.categories:
            raise ValueError("At least one resource category is required")

    @property
    def effective_scan_budget(self) -> float:
        if self.scan_budget is not None:
            return self.scan_budget
        return self.world_size / 2

    def default_tracker(self) -> CompletionTracker:
        """Build the tracker used when none is injected."""
        category = None if self.wildcard_quota else (self.report_category or self.categories[0])
        return CompletionTracker([Quota(name="items", target=self.quota_target, category=category)])


def content_predicate(categories: tuple[str, ...]) -> TilePredicate:
    """Predicate accepting tiles whose ``content`` is one of ``categories``."""
    wanted = frozenset(categories)

    def _matches(tile: Any) -> bool:
        content = getattr(tile, "content", tile)
        return str(getattr(content, "value", content)) in wanted

    return _matches


def _collaborator_of(error: Exception) -> str:
    """Collaborator to blame for a failure swallowed while planning a route."""
    if isinstance(error, StepFailure):
        return error.collaborator
    if isinstance(error, WorldViewError):
        return "world"
    return "planner"


class Agent:
    """Aggregate root of the decision loop.

    Owns the current state, the target and action queues, the render budget
    and the completion tracker. Nothing else writes to them; the read-only
    properties below return copies.

    Args:
        scanner: Area scanner used while exploring.
        planner: Path planner used to find targets and routes.
        collector: Resource collector used while gathering.
        renderer: Artifact renderer used while rendering.
        world_view: Accessor for position, energy and movement.
        catalog: Artifact catalog to choose from.
        event_sink: Receives the termination notification and tick callbacks.
        settings: Agent parameters. Uses defaults if None.
        tracker: Completion tracker. Built from ``settings`` if None.
        rng: Random source for budget and artifact draws.
        metrics: Metrics collector. Creates new one if None.
    """

    def __init__(
        self,
        scanner: AreaScanner,
        planner: PathPlanner,
        collector: ResourceCollector,
        renderer: ArtifactRenderer,
        world_view: WorldView,
        catalog: ArtifactCatalog,
        event_sink: EventSink | None = None,
        settings: AgentSettings | None = None,
        tracker: CompletionTracker | None = None,
        rng: random.Random | None = None,
        metrics: MetricsCollector | None = None,
        tile_predicate: TilePredicate | None = None,
    ) -> None:
        self._scanner = scanner
        self._planner = planner
        self._collector = collector
        self._renderer = renderer
        self._world_view = world_view
        self._catalog = catalog
        self._event_sink = event_sink
        self._settings = settings or AgentSettings()
        self._tracker = tracker or self._settings.default_tracker()
        self._rng = rng or random.Random()
        self._metrics = metrics or MetricsCollector()
        self._predicate = tile_predicate or content_predicate(self._settings.categories)

        self._state = S.INIT
        self._targets: deque[Coordinate] = deque()
        self._actions: deque[NavigationAction] = deque()
        self._render_budget = 1
        self._artifacts_rendered = 0
        self._steps = 0
        self._halted = False
        self._last_failure: StepFailure | None = None

        logger.debug("Agent %s initialized in state %s", self._settings.name, self._state.value)

    # Read-only views

    @property
    def name(self) -> str:
        return self._settings.name

    @property
    def state(self) -> AgentState:
        """Get the current state."""
        return self._state

    @property
    def targets(self) -> tuple[Coordinate, ...]:
        """Pending target tiles, next first."""
        return tuple(self._targets)

    @property
    def actions(self) -> tuple[NavigationAction, ...]:
        """Pending navigation steps towards the current target, next first."""
        return tuple(self._actions)

    @property
    def render_budget(self) -> int:
        return self._render_budget

    @property
    def artifacts_rendered(self) -> int:
        return self._artifacts_rendered

    @property
    def tracker(self) -> CompletionTracker:
        return self._tracker

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    @property
    def steps(self) -> int:
        """Number of times the agent has been stepped."""
        return self._steps

    @property
    def halted(self) -> bool:
        """True once a fatal defect stopped the agent."""
        return self._halted

    @property
    def terminated(self) -> bool:
        return self._state == S.TERMINATE

    @property
    def last_failure(self) -> StepFailure | None:
        """The most recent step failure (for debugging)."""
        return self._last_failure

    # Entry points

    def step(self, world: Any) -> None:
        """Run the current state's handler once and commit its proposal.

        Args:
            world: Simulation world handle, passed through to collaborators.

        Raises:
            InvalidTransitionError: If the handler proposed a transition outside
                the table. The agent is halted afterwards.
            AgentHaltedError: If the agent was already halted.
        """
        if self._halted:
            raise AgentHaltedError(f"Agent {self.name} is halted and cannot be stepped")

        current = self._state
        handler = getattr(self, _HANDLERS[current])
        self._steps += 1

        try:
            with self._metrics.time_step(current.value):
                proposed = handler(world)
        except StepFailure as e:
            self._last_failure = e
            self._metrics.record_failure(e.collaborator)
            logger.warning("Step %d failed in %s: %s", self._steps, current.value, e)
            return

        logger.debug("state transition: %s -> %s", current.value, proposed.value)
        try:
            self._state = validate_transition(current, proposed)
        except InvalidTransitionError:
            self._halted = True
            logger.error(
                "Agent %s halted: handler for %s proposed %s",
                self.name,
                current.value,
                proposed.value,
            )
            raise
        self._metrics.record_transition(current.value, proposed.value)

    def process_tick(self, world: Any) -> None:
        """Step the agent, then forward the tick to the event sink."""
        self.step(world)
        if self._event_sink is not None:
            self._event_sink.process_tick(world)

    # State handlers

    def _do_init(self, world: Any) -> AgentState:
        """Draw the render budget: the number of random artifacts before retiring."""
        self._render_budget = self._rng.randint(
            self._settings.render_budget_min,
            self._settings.render_budget_max,
        )
        self._metrics.set_render_budget(self._render_budget)
        logger.info("Agent %s will render %d artifacts", self.name, self._render_budget)
        return S.EXPLORE

    def _do_explore(self, world: Any) -> AgentState:
        """Scan around the agent and rebuild the target queue from the planner's map."""
        position = self._position(world, S.EXPLORE)
        energy = self._energy(world, S.EXPLORE)

        try:
            result = self._scanner.scan(
                world,
                position,
                self._settings.explore_radius,
                self._settings.world_size,
                energy,
                self._predicate,
                scan_budget=self._settings.effective_scan_budget,
            )
        except ScanError as e:
            raise StepFailure(S.EXPLORE, "scanner", str(e)) from e
        if result.failed:
            raise StepFailure(S.EXPLORE, "scanner", result.reason or "scan failed")
        if result.status == ScanStatus.PARTIAL:
            logger.debug("Partial scan around %s (%d tiles)", position, len(result.coordinates))

        try:
            self._refresh_planner(world, position)
            targets: deque[Coordinate] = deque()
            for category in self._settings.categories:
                targets.extend(self._planner.coordinates_matching(category))
        except (PlanningError, WorldViewError) as e:
            raise StepFailure(S.EXPLORE, "planner", str(e)) from e

        self._targets = targets
        logger.debug("Explore found %d targets", len(targets))
        return S.LOCATE if targets else S.EXPLORE

    def _do_locate(self, world: Any) -> AgentState:
        """Plan a route to the next target, then walk it one action per step.

        The last action of a route is never executed: when one action is left
        the queue is cleared and the agent starts gathering where it stands.
        """
        if not self._actions:
            if not self._targets:
                return S.EXPLORE
            target = self._targets.popleft()
            try:
                self._refresh_planner(world, self._position(world, S.LOCATE))
                route = self._planner.actions_to(target)
            except (PlanningError, WorldViewError, StepFailure) as e:
                self._metrics.record_failure(_collaborator_of(e), swallowed=True)
                logger.debug("Dropping target %s: %s", target, e)
                route = []
            self._actions = deque(route)
            logger.debug("Route to %s has %d actions", target, len(self._actions))

        if len(self._actions) > 1:
            self._execute(world, self._actions.popleft())

        if len(self._actions) == 1:
            skipped = self._actions.popleft()
            logger.debug("Arrived; skipping final action %s", skipped.kind.value)
            return S.GATHER

        return S.LOCATE

    def _do_gather(self, world: Any) -> AgentState:
        """Collect every category next to the agent and report the yields."""
        yields: dict[str, int] = {}
        errors: list[str] = []
        for category in self._settings.categories:
            try:
                yields[category] = self._collector.collect_nearby(world, category)
            except CollectionError as e:
                errors.append(f"{category}: {e}")

        if not yields:
            raise StepFailure(S.GATHER, "collector", "; ".join(errors) or "nothing collected")
        for _ in errors:
            self._metrics.record_failure("collector", swallowed=True)

        for category, count in yields.items():
            if count > 0:
                self._tracker.report(self._settings.report_category or category, count)
        self._metrics.update_quota_progress(self._tracker.progress())
        logger.debug("Gathered %s", yields)

        return S.RENDER if self._tracker.is_any_met() else S.LOCATE

    def _do_render(self, world: Any) -> AgentState:
        """Render an artifact and decide where to go next from the renderer's status."""
        position = self._position(world, S.RENDER)
        try:
            if self._render_budget > 0:
                artifact = self._catalog.random_artifact(self._rng)
            else:
                artifact = self._catalog.terminal_artifact()
        except ArtifactLoadError as e:
            raise StepFailure(S.RENDER, "catalog", str(e)) from e

        try:
            status = self._renderer.advance(world, artifact, position)
        except RenderError as e:
            raise StepFailure(S.RENDER, "renderer", f"rendering {artifact.name} failed: {e}") from e
        logger.debug("Render of %s stopped with %s", artifact.name, status.value)

        if status == RenderStatus.FINISHED:
            self._artifacts_rendered += 1
            self._metrics.record_artifact_rendered()
            if self._render_budget <= 0:
                return S.TERMINATE
            self._render_budget -= 1
            self._metrics.set_render_budget(self._render_budget)
            return S.EXPLORE
        if status in (RenderStatus.FINISHED_UNIT, RenderStatus.WAITING_FOR_ENERGY):
            return S.EXPLORE
        return S.LOCATE

    def _do_terminate(self, world: Any) -> AgentState:
        """Notify the event sink that the agent has retired."""
        event = TerminationEvent(
            agent=self.name,
            tick=self._steps,
            artifacts_rendered=self._artifacts_rendered,
        )
        if self._event_sink is not None:
            self._event_sink.notify(event)
        else:
            logger.info("Agent %s terminated after %d steps", self.name, self._steps)
        return S.TERMINATE

    # Collaborator helpers

    def _position(self, world: Any, state: AgentState) -> Coordinate:
        try:
            return self._world_view.position(world)
        except WorldViewError as e:
            raise StepFailure(state, "world", f"position unavailable: {e}") from e

    def _energy(self, world: Any, state: AgentState) -> int:
        try:
            return self._world_view.energy(world)
        except WorldViewError as e:
            raise StepFailure(state, "world", f"energy unavailable: {e}") from e

    def _refresh_planner(self, world: Any, position: Coordinate) -> None:
        snapshot = self._world_view.snapshot(world)
        self._planner.plan(snapshot, position)

    def _execute(self, world: Any, action: NavigationAction) -> None:
        """Execute one navigation action. Failures leave the agent where it is."""
        try:
            if action.is_teleport:
                self._world_view.teleport(world, action.target)
                return
            self._world_view.move(world, action.direction)
        except MovementError as e:
            self._metrics.record_failure("world", swallowed=True)
            logger.debug("Action %s failed: %s", action.kind.value, e)
            if action.is_teleport:
                return
        try:
            self._world_view.refresh_view(world)
        except WorldViewError as e:
            self._metrics.record_failure("world", swallowed=True)
            logger.debug("View refresh failed: %s", e)
