"""Session-level models: heartbeat, lap count, track status, weather and session info."""

from __future__ import annotations

import enum
from datetime import datetime

from pylivetiming.models._base import LiveTimingModel


class Heartbeat(LiveTimingModel):
    utc: datetime | None = None


class LapCount(LiveTimingModel):
    current_lap: int | None = None
    total_laps: int | None = None


class TrackStatusCode(enum.StrEnum):
    ALL_CLEAR = "1"
    YELLOW = "2"
    GREEN = "3"
    SC_DEPLOYED = "4"
    RED = "5"
    VSC_DEPLOYED = "6"
    VSC_ENDING = "7"


class TrackStatus(LiveTimingModel):
    status: str | None = None
    """One of :class:`TrackStatusCode` values, kept as a string for unknown codes."""
    message: str | None = None

    @property
    def code(self) -> TrackStatusCode | None:
        try:
            return TrackStatusCode(self.status) if self.status is not None else None
        except ValueError:
            return None


class WeatherData(LiveTimingModel):
    """Weather readings. The feed sends every value as a string."""

    air_temp: str | None = None
    humidity: str | None = None
    pressure: str | None = None
    rainfall: str | None = None
    track_temp: str | None = None
    wind_direction: str | None = None
    wind_speed: str | None = None


class Circuit(LiveTimingModel):
    key: int | None = None
    short_name: str | None = None


class Country(LiveTimingModel):
    key: int | None = None
    code: str | None = None
    name: str | None = None


class Meeting(LiveTimingModel):
    key: int | None = None
    name: str | None = None
    official_name: str | None = None
    location: str | None = None
    country: Country | None = None
    circuit: Circuit | None = None


class SessionInfo(LiveTimingModel):
    key: int | None = None
    type: str | None = None
    name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    gmt_offset: str | None = None
    path: str | None = None
    meeting: Meeting | None = None
