"""Event sink interface for the surrounding UI layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from artemis.models.events import TerminationEvent


class EventSink(ABC):
    """Receives agent notifications and per-tick callbacks."""

    @abstractmethod
    def notify(self, event: TerminationEvent) -> None:
        """Deliver an agent event."""
        ...

    def process_tick(self, world: Any) -> None:  # noqa: B027
        """Called once per tick after the agent stepped. No-op by default."""
        return None
