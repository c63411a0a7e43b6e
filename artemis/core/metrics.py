"""Metrics collection for the agent step loop.

This module provides metrics tracking for:
- Step count, timing and rate
- Time spent in each state handler
- Committed state transitions
- Collaborator failures (step failures and swallowed movement failures)
- Render budget and quota progress

Example:
    >>> from artemis.core.metrics import MetricsCollector
    >>>
    >>> metrics = MetricsCollector()
    >>> metrics.record_step("explore", 1.5)
    >>> metrics.record_transition("explore", "locate")
    >>>
    >>> stats = metrics.get_metrics()
    >>> print(stats.transitions["explore->locate"])
    1
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AgentMetrics(BaseModel):
    """Snapshot of the agent's metrics at a point in time.

    Immutable; safe to share or serialize.

    Attributes:
        step_count: Total number of steps taken.
        step_rate_hz: Current step rate in Hz.
        avg_step_time_ms: Average time per step.
        avg_handler_time_ms: Average handler time per state name.
        transitions: Committed transitions keyed ``"from->to"``.
        current_state: State after the latest step.
        failures_total: Collaborator failures seen (step failures + swallowed).
        step_failures: Failures that stopped a step, per collaborator.
        swallowed_failures: Failures ignored without stopping, per collaborator.
        render_budget: Latest render budget value.
        artifacts_rendered: Artifacts finished so far.
        quota_progress: Progress fraction per quota.
        started_at: When collection started.
        uptime_seconds: Time since start.
    """

    step_count: int = Field(default=0, ge=0)
    step_rate_hz: float = Field(default=0.0, ge=0.0)
    avg_step_time_ms: float = Field(default=0.0, ge=0.0)
    avg_handler_time_ms: dict[str, float] = Field(default_factory=dict)

    transitions: dict[str, int] = Field(default_factory=dict)
    current_state: str = Field(default="")

    failures_total: int = Field(default=0, ge=0)
    step_failures: dict[str, int] = Field(default_factory=dict)
    swallowed_failures: dict[str, int] = Field(default_factory=dict)

    render_budget: int | None = Field(default=None)
    artifacts_rendered: int = Field(default=0, ge=0)
    quota_progress: dict[str, float] = Field(default_factory=dict)

    started_at: datetime | None = Field(default=None)
    uptime_seconds: float = Field(default=0.0, ge=0.0)

    model_config = {"frozen": True}

    @property
    def step_failure_count(self) -> int:
        return sum(self.step_failures.values())

    @property
    def failure_rate(self) -> float:
        """Fraction of steps that ended in a step failure (0.0 to 1.0)."""
        if self.step_count == 0:
            return 0.0
        return self.step_failure_count / self.step_count


@dataclass
class _TimingStats:
    """Internal helper for tracking timing statistics."""

    total_ms: float = 0.0
    count: int = 0

    def record(self, duration_ms: float) -> None:
        """Record a timing measurement."""
        self.total_ms += duration_ms
        self.count += 1

    @property
    def average_ms(self) -> float:
        """Get average duration in milliseconds."""
        if self.count == 0:
            return 0.0
        return self.total_ms / self.count


class MetricsCollector:
    """Collects metrics while the agent is stepped.

    Thread-safe, so a monitoring thread can read snapshots while the
    simulation steps the agent.
    """

    def __init__(self) -> None:
        """Initialize the metrics collector."""
        self._lock = threading.Lock()

        self._step_timing = _TimingStats()
        self._handler_timing: dict[str, _TimingStats] = {}

        self._transitions: dict[str, int] = {}
        self._current_state = ""

        self._step_failures: dict[str, int] = {}
        self._swallowed_failures: dict[str, int] = {}

        self._render_budget: int | None = None
        self._artifacts_rendered = 0
        self._quota_progress: dict[str, float] = {}

        self._started_at: datetime | None = None
        self._step_times: list[float] = []  # Last 100 step timestamps for rate calculation

        logger.debug("MetricsCollector initialized")

    def start(self) -> None:
        """Mark the start of metrics collection."""
        with self._lock:
            self._started_at = datetime.now()
            logger.debug("Metrics collection started")

    def reset(self) -> None:
        """Reset all metrics to initial state."""
        with self._lock:
            self._step_timing = _TimingStats()
            self._handler_timing.clear()
            self._transitions.clear()
            self._current_state = ""
            self._step_failures.clear()
            self._swallowed_failures.clear()
            self._render_budget = None
            self._artifacts_rendered = 0
            self._quota_progress.clear()
            self._started_at = None
            self._step_times.clear()

            logger.debug("Metrics reset")

    def record_step(self, state: str, duration_ms: float) -> None:
        """Record a completed step and the time its handler took."""
        with self._lock:
            self._step_timing.record(duration_ms)
            self._handler_timing.setdefault(state, _TimingStats()).record(duration_ms)

            self._step_times.append(time.time())
            if len(self._step_times) > 100:
                self._step_times = self._step_times[-100:]

    def record_transition(self, from_state: str, to_state: str) -> None:
        """Record a committed state transition."""
        key = f"{from_state}->{to_state}"
        with self._lock:
            self._transitions[key] = self._transitions.get(key, 0) + 1
            self._current_state = to_state

    def record_failure(self, collaborator: str, swallowed: bool = False) -> None:
        """Record a collaborator failure.

        Args:
            collaborator: Short collaborator name, e.g. ``"scanner"``.
            swallowed: True if the failure was ignored without stopping the step.
        """
        with self._lock:
            counts = self._swallowed_failures if swallowed else self._step_failures
            counts[collaborator] = counts.get(collaborator, 0) + 1

    def set_render_budget(self, budget: int) -> None:
        with self._lock:
            self._render_budget = budget

    def record_artifact_rendered(self) -> None:
        with self._lock:
            self._artifacts_rendered += 1

    def update_quota_progress(self, progress: dict[str, float]) -> None:
        """Update the quota progress snapshot."""
        with self._lock:
            self._quota_progress = dict(progress)

    @contextmanager
    def time_step(self, state: str) -> Iterator[None]:
        """Context manager to time one state handler.

        Example:
            >>> with metrics.time_step("explore"):
            ...     agent.step(world)
        """
        start = time.time()
        try:
            yield
        finally:
            duration_ms = (time.time() - start) * 1000
            self.record_step(state, duration_ms)

    def _calculate_step_rate(self) -> float:
        """Calculate current step rate in Hz."""
        if len(self._step_times) < 2:
            return 0.0

        duration = self._step_times[-1] - self._step_times[0]
        if duration <= 0:
            return 0.0

        return (len(self._step_times) - 1) / duration

    def get_metrics(self) -> AgentMetrics:
        """Get a snapshot of all current metrics."""
        with self._lock:
            uptime = 0.0
            if self._started_at is not None:
                uptime = (datetime.now() - self._started_at).total_seconds()

            return AgentMetrics(
                step_count=self._step_timing.count,
                step_rate_hz=self._calculate_step_rate(),
                avg_step_time_ms=self._step_timing.average_ms,
                avg_handler_time_ms={
                    name: stats.average_ms for name, stats in self._handler_timing.items()
                },
                transitions=dict(self._transitions),
                current_state=self._current_state,
                failures_total=sum(self._step_failures.values())
                + sum(self._swallowed_failures.values()),
                step_failures=dict(self._step_failures),
                swallowed_failures=dict(self._swallowed_failures),
                render_budget=self._render_budget,
                artifacts_rendered=self._artifacts_rendered,
                quota_progress=dict(self._quota_progress),
                started_at=self._started_at,
                uptime_seconds=uptime,
            )
