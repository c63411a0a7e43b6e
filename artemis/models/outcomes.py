"""Outcome types reported by the scanning and rendering collaborators."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from artemis.models.geometry import Coordinate


class ScanStatus(StrEnum):
    """How far an area scan got."""

    COMPLETE = "complete"
    PARTIAL = "partial"  # stopped early, e.g. energy budget exhausted
    FAILED = "failed"


class ScanResult(BaseModel):
    """Result of an area scan around the agent."""

    status: ScanStatus = Field(..., description="Scan completion status")
    coordinates: list[Coordinate] = Field(
        default_factory=list,
        description="Tiles matching the scan predicate",
    )
    reason: str | None = Field(default=None, description="Failure reason, if any")

    model_config = {"frozen": True}

    @property
    def failed(self) -> bool:
        return self.status == ScanStatus.FAILED

    @classmethod
    def complete(cls, coordinates: list[Coordinate] | None = None) -> ScanResult:
        return cls(status=ScanStatus.COMPLETE, coordinates=list(coordinates or []))

    @classmethod
    def partial(cls, coordinates: list[Coordinate] | None = None) -> ScanResult:
        return cls(status=ScanStatus.PARTIAL, coordinates=list(coordinates or []))

    @classmethod
    def failure(cls, reason: str) -> ScanResult:
        return cls(status=ScanStatus.FAILED, reason=reason)


class RenderStatus(StrEnum):
    """Where a render cycle stopped."""

    FINISHED = "finished"  # the whole artifact is done
    FINISHED_UNIT = "finished_unit"  # one unit (cell) of the artifact is done
    WAITING_FOR_ENERGY = "waiting_for_energy"
    WAITING_FOR_MATERIALS = "waiting_for_materials"
