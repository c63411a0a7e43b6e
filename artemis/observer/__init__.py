"""Event sinks for observing the agent from the surrounding simulation."""

from artemis.observer.events import EventStream, LoggingEventSink

__all__ = ["EventStream", "LoggingEventSink"]
