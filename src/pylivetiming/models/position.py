"""Car position models (``Position.z`` topic, already decompressed)."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pylivetiming.models._base import LiveTimingModel


class PositionEntry(LiveTimingModel):
    status: str | None = None
    """``OnTrack`` or ``OffTrack``."""
    x: int | None = None
    y: int | None = None
    z: int | None = None

    @property
    def is_off_track(self) -> bool:
        return self.status == "OffTrack"


class PositionTick(LiveTimingModel):
    """One timestamped sample of every car's position."""

    timestamp: datetime | None = None
    entries: dict[str, PositionEntry] = Field(default_factory=dict)


class PositionData(LiveTimingModel):
    position: list[PositionTick] = Field(default_factory=list)
