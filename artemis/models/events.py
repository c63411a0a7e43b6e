"""Events emitted by the agent to the surrounding simulation."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class TerminationEvent(BaseModel):
    """Emitted every time the agent is stepped in its terminal state."""

    kind: Literal["terminated"] = "terminated"
    agent: str = Field(..., min_length=1, description="Name of the terminated agent")
    tick: int = Field(default=0, ge=0, description="Agent step count when emitted")
    artifacts_rendered: int = Field(default=0, ge=0, description="Finished artifacts")
    timestamp: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}
