"""Core agent logic package.

This package provides:
- Agent: the step-driven state machine
- AgentSettings: tunable agent parameters
- CompletionTracker / Quota: resource quotas
- TRANSITIONS / validate_transition: the closed transition table
- SimulationRunner / RunnerConfig: tick driver
- MetricsCollector / AgentMetrics: step metrics
- RecoverableError / FatalError and their subclasses
"""

from artemis.core.controller import Agent, AgentSettings, content_predicate
from artemis.core.errors import (
    AgentHaltedError,
    FatalError,
    InvalidTransitionError,
    RecoverableError,
    StepFailure,
)
from artemis.core.metrics import AgentMetrics, MetricsCollector
from artemis.core.runner import RunnerConfig, RunnerState, RunSummary, SimulationRunner
from artemis.core.tracker import CompletionTracker, Quota
from artemis.core.transitions import (
    TRANSITIONS,
    is_valid_transition,
    successors,
    validate_transition,
)

__all__ = [
    "TRANSITIONS",
    "Agent",
    "AgentHaltedError",
    "AgentMetrics",
    "AgentSettings",
    "CompletionTracker",
    "FatalError",
    "InvalidTransitionError",
    "MetricsCollector",
    "Quota",
    "RecoverableError",
    "RunSummary",
    "RunnerConfig",
    "RunnerState",
    "SimulationRunner",
    "StepFailure",
    "content_predicate",
    "is_valid_transition",
    "successors",
    "validate_transition",
]
