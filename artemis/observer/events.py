"""Event sinks: a bounded in-memory stream and a logging sink."""

from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime
from typing import Any

from artemis.interfaces.events import EventSink
from artemis.models.events import TerminationEvent

logger = logging.getLogger(__name__)


class EventStream(EventSink):
    """Thread-safe bounded event stream.

    Agent events are stored with increasing ids so that a consumer (a UI, a
    test, a monitoring thread) can poll for everything newer than the last
    id it saw.
    """

    def __init__(self, max_events: int = 500) -> None:
        self._max_events = max(1, max_events)
        self._lock = threading.Lock()
        self._events: deque[dict[str, Any]] = deque(maxlen=self._max_events)
        self._next_id = 1
        self._ticks = 0

    @property
    def ticks(self) -> int:
        """Number of tick callbacks received."""
        with self._lock:
            return self._ticks

    def notify(self, event: TerminationEvent) -> None:
        self.push_event(event.model_dump(mode="json"))

    def process_tick(self, world: Any) -> None:
        with self._lock:
            self._ticks += 1

    def push_event(self, payload: dict[str, Any]) -> int:
        """Push an event payload and return its assigned event id."""
        with self._lock:
            event_id = self._next_id
            self._next_id += 1
            self._events.append(
                {
                    "id": event_id,
                    "timestamp": datetime.now().isoformat(),
                    "payload": payload,
                }
            )
            return event_id

    def get_events_since(self, last_event_id: int) -> list[dict[str, Any]]:
        """Get events with id greater than ``last_event_id``."""
        with self._lock:
            return [event for event in self._events if int(event["id"]) > last_event_id]


class LoggingEventSink(EventSink):
    """Writes agent events to the log. Logs the first termination only once."""

    def __init__(self, logger_name: str = "artemis.events") -> None:
        self._logger = logging.getLogger(logger_name)
        self._terminated_agents: set[str] = set()

    def notify(self, event: TerminationEvent) -> None:
        if event.agent in self._terminated_agents:
            self._logger.debug("%s is still terminated (tick %d)", event.agent, event.tick)
            return
        self._terminated_agents.add(event.agent)
        self._logger.info(
            "%s terminated at tick %d after rendering %d artifacts",
            event.agent,
            event.tick,
            event.artifacts_rendered,
        )
