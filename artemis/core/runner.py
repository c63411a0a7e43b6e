"""Tick driver for running an agent inside a simulation.

The agent itself only reacts to being stepped. ``SimulationRunner`` plays
the part of the surrounding simulation's scheduler: it calls
``Agent.process_tick`` once per tick until the agent retires, a tick limit
is reached, or a fatal error stops it.

Example:
    >>> runner = SimulationRunner(agent, world, config=RunnerConfig(max_ticks=300))
    >>> summary = runner.run()
    >>> summary.final_state
    <AgentState.TERMINATE: 'terminate'>
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from artemis.core.errors import FatalError

if TYPE_CHECKING:
    from artemis.core.controller import Agent
    from artemis.models.state import AgentState

logger = logging.getLogger(__name__)


class RunnerState(StrEnum):
    """Possible states of the runner."""

    STOPPED = "stopped"
    RUNNING = "running"
    FINISHED = "finished"
    ERROR = "error"


@dataclass
class RunnerConfig:
    """Configuration for the simulation runner.

    Attributes:
        max_ticks: Maximum number of ticks to run.
        tick_interval_ms: Minimum wall-clock time per tick (0 disables pacing).
        max_consecutive_errors: Unexpected errors tolerated in a row before stopping.
        stop_on_terminate: Stop as soon as the agent reaches its terminal state.
    """

    max_ticks: int = 300
    tick_interval_ms: float = 0.0
    max_consecutive_errors: int = 5
    stop_on_terminate: bool = True


@dataclass(frozen=True)
class RunSummary:
    """Outcome of a run."""

    ticks: int
    final_state: AgentState
    terminated: bool
    runner_state: RunnerState


class SimulationRunner:
    """Drives an agent one tick at a time.

    Args:
        agent: The agent to step.
        world: Simulation world handle passed to the agent every tick.
        config: Runner configuration. Uses defaults if None.
    """

    def __init__(self, agent: Agent, world: Any, config: RunnerConfig | None = None) -> None:
        self._agent = agent
        self._world = world
        self._config = config or RunnerConfig()
        self._state = RunnerState.STOPPED
        self._ticks = 0
        self._consecutive_errors = 0
        self._stop_requested = False

        self._on_tick_complete: Callable[[int], None] | None = None
        self._on_error: Callable[[Exception], None] | None = None

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def ticks(self) -> int:
        return self._ticks

    def set_callbacks(
        self,
        on_tick_complete: Callable[[int], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """Set optional callbacks.

        Args:
            on_tick_complete: Called after each tick with the tick number.
            on_error: Called when a tick raises.
        """
        self._on_tick_complete = on_tick_complete
        self._on_error = on_error

    def stop(self) -> None:
        """Ask the runner to stop after the current tick."""
        self._stop_requested = True

    def run(self, max_ticks: int | None = None) -> RunSummary:
        """Run ticks until the agent terminates or the tick limit is hit.

        Raises:
            FatalError: If the agent hit a fatal defect.
            RuntimeError: If the runner is already running.
        """
        if self._state == RunnerState.RUNNING:
            raise RuntimeError("Runner is already running")

        limit = self._config.max_ticks if max_ticks is None else max_ticks
        self._stop_requested = False
        self._state = RunnerState.RUNNING
        self._agent.metrics.start()
        logger.info("Running agent %s for up to %d ticks", self._agent.name, limit)

        completed = 0
        while completed < limit and not self._stop_requested:
            tick_start = time.time()
            completed += 1
            try:
                self.tick()
            except FatalError as e:
                logger.error("Fatal error on tick %d: %s", self._ticks, e)
                self._state = RunnerState.ERROR
                self._notify_error(e)
                raise
            except Exception as e:
                logger.exception("Unexpected error on tick %d: %s", self._ticks, e)
                self._notify_error(e)
                self._consecutive_errors += 1
                if self._consecutive_errors >= self._config.max_consecutive_errors:
                    logger.error(
                        "Max consecutive errors (%d) reached", self._config.max_consecutive_errors
                    )
                    self._state = RunnerState.ERROR
                    break
            else:
                self._consecutive_errors = 0

            if self._on_tick_complete:
                try:
                    self._on_tick_complete(self._ticks)
                except Exception as e:
                    logger.warning("Tick callback error: %s", e)

            if self._config.stop_on_terminate and self._agent.terminated:
                logger.info("Agent %s terminated on tick %d", self._agent.name, self._ticks)
                break

            self._apply_pacing(tick_start)

        if self._state == RunnerState.RUNNING:
            self._state = RunnerState.FINISHED if self._agent.terminated else RunnerState.STOPPED

        return RunSummary(
            ticks=completed,
            final_state=self._agent.state,
            terminated=self._agent.terminated,
            runner_state=self._state,
        )

    def tick(self) -> None:
        """Advance the simulation by one tick."""
        self._ticks += 1
        logger.debug("Game tick %d", self._ticks)
        self._agent.process_tick(self._world)

    def _notify_error(self, error: Exception) -> None:
        if self._on_error:
            try:
                self._on_error(error)
            except Exception as e:
                logger.warning("Error callback error: %s", e)

    def _apply_pacing(self, tick_start: float) -> None:
        """Sleep so that a tick takes at least ``tick_interval_ms``."""
        if self._config.tick_interval_ms <= 0:
            return
        remaining = self._config.tick_interval_ms / 1000 - (time.time() - tick_start)
        if remaining > 0:
            time.sleep(remaining)
