"""Per-driver series: tyre stints and pit stops."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pylivetiming.models._base import LiveTimingModel


class Stint(LiveTimingModel):
    compound: str | None = None
    new: str | None = None
    """``"true"``/``"false"``; the feed sends it as a string."""
    tyres_not_changed: str | None = None
    total_laps: int | None = None
    start_laps: int | None = None
    lap_time: str | None = None
    lap_number: int | None = None


class TyreStintSeries(LiveTimingModel):
    stints: dict[str, dict[str, Stint]] = Field(default_factory=dict)
    """Driver number -> stint index -> stint."""


class PitStopEntry(LiveTimingModel):
    racing_number: str | None = None
    pit_stop_time: str | None = None
    pit_lane_time: str | None = None
    lap: str | None = None


class PitTime(LiveTimingModel):
    timestamp: datetime | None = None
    pit_stop: PitStopEntry | None = None


class PitStopSeries(LiveTimingModel):
    pit_times: dict[str, dict[str, PitTime]] = Field(default_factory=dict)
    """Driver number -> stop index -> pit stop."""
