"""Agent state enumeration."""

from __future__ import annotations

from enum import StrEnum


class AgentState(StrEnum):
    """Phases of the agent's decision loop.

    Exactly one state is current at any time. Transitions between them are
    restricted to the table in ``artemis.core.transitions``.
    """

    INIT = "init"
    EXPLORE = "explore"  # wander and scan to find resource tiles
    LOCATE = "locate"  # plan a route to the next target and walk it
    GATHER = "gather"  # collect resources around the current position
    RENDER = "render"  # turn collected resources into an artifact
    TERMINATE = "terminate"  # absorbing final state
