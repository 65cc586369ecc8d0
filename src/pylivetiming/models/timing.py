"""Timing data models (``TimingData`` topic).

One :class:`TimingLine` per driver, keyed by racing number.
"""

from __future__ import annotations

import enum
from typing import ClassVar

from pydantic import Field

from pylivetiming.models._base import LiveTimingModel


class StatusFlags(enum.IntFlag):
    """Flags the feed packs into segment and line ``Status`` values."""

    PERSONAL_BEST = 1
    OVERALL_BEST = 2
    PIT_LANE = 16
    """Went through this mini sector in the pit lane."""
    CHEQUERED_FLAG = 1024
    """Passed the chequered flag in a qualifying or race session."""
    SEGMENT_COMPLETE = 2048
    """Segment completed. If this is the only flag set, the segment was yellow."""


class Segment(LiveTimingModel):
    """A mini sector."""

    status: int | None = None

    @property
    def flags(self) -> StatusFlags | None:
        return StatusFlags(self.status) if self.status is not None else None


class LapSectorTime(LiveTimingModel):
    """A lap or sector time (the feed uses the same shape for both)."""

    value: str | None = None
    status: int | None = None
    overall_fastest: bool | None = None
    personal_fastest: bool | None = None
    segments: dict[str, Segment] = Field(default_factory=dict)


class BestLap(LiveTimingModel):
    value: str | None = None
    """Best lap time, e.g. ``1:31.998``. Blank when the feed resets it between qualifying segments."""
    lap: int | None = None


class Interval(LiveTimingModel):
    value: str | None = None
    """``+1.123``, or ``5L`` when more than a lap behind."""
    catching: bool | None = None


class SpeedTrap(LiveTimingModel):
    value: str | None = None
    status: int | None = None
    overall_fastest: bool | None = None
    personal_fastest: bool | None = None


class TimingLine(LiveTimingModel):
    """Timing state for a single driver."""

    LOCAL_FIELDS: ClassVar[frozenset[str]] = frozenset({"is_pit_lap"})

    gap_to_leader: str | None = None
    """``LAP 54`` for the leader, ``+1.123`` or ``5L`` for everyone else."""
    interval_to_position_ahead: Interval | None = None
    line: int | None = None
    position: str | None = None
    show_position: bool | None = None
    racing_number: str | None = None

    in_pit: bool | None = None
    pit_out: bool | None = None
    number_of_pit_stops: int | None = None
    is_pit_lap: bool | None = None
    """Whether ``in_pit`` or ``pit_out`` was set at any point during the current lap."""

    number_of_laps: int | None = None
    last_lap_time: LapSectorTime | None = None
    sectors: dict[str, LapSectorTime] = Field(default_factory=dict)
    best_lap_time: BestLap | None = None
    speeds: dict[str, SpeedTrap] = Field(default_factory=dict)

    knocked_out: bool | None = None
    """Knocked out of qualifying."""
    retired: bool | None = None
    stopped: bool | None = None
    status: int | None = None

    @property
    def best_lap_value(self) -> str | None:
        return self.best_lap_time.value if self.best_lap_time is not None else None


class TimingData(LiveTimingModel):
    lines: dict[str, TimingLine] = Field(default_factory=dict)
