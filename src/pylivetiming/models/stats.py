"""Per-driver companion topics to ``TimingData``.

``TimingAppData`` carries grid position and tyre stints, ``TimingStats``
personal bests, ``ChampionshipPrediction`` the projected standings.
"""

from __future__ import annotations

from pydantic import Field

from pylivetiming.models._base import LiveTimingModel
from pylivetiming.models.series import Stint


class TimingAppLine(LiveTimingModel):
    racing_number: str | None = None
    line: int | None = None
    grid_pos: str | None = None
    stints: dict[str, Stint] = Field(default_factory=dict)
    """Stint index -> stint. Sent as a list at session start, then patched by index."""


class TimingAppData(LiveTimingModel):
    lines: dict[str, TimingAppLine] = Field(default_factory=dict)


class RankedValue(LiveTimingModel):
    """A personal best and where it ranks in the session."""

    value: str | None = None
    position: int | None = None


class PersonalBestLap(LiveTimingModel):
    value: str | None = None
    lap: int | None = None
    position: int | None = None


class TimingStatsLine(LiveTimingModel):
    racing_number: str | None = None
    line: int | None = None
    personal_best_lap_time: PersonalBestLap | None = None
    best_sectors: dict[str, RankedValue] = Field(default_factory=dict)
    best_speeds: dict[str, RankedValue] = Field(default_factory=dict)
    """Keyed by speed trap: ``I1``, ``I2``, ``FL`` and ``ST``."""


class TimingStats(LiveTimingModel):
    withheld: bool | None = None
    session_type: str | None = None
    lines: dict[str, TimingStatsLine] = Field(default_factory=dict)


class DriverPrediction(LiveTimingModel):
    racing_number: str | None = None
    current_position: int | None = None
    predicted_position: int | None = None
    current_points: float | None = None
    predicted_points: float | None = None


class TeamPrediction(LiveTimingModel):
    team_name: str | None = None
    current_position: int | None = None
    predicted_position: int | None = None
    current_points: float | None = None
    predicted_points: float | None = None


class ChampionshipPrediction(LiveTimingModel):
    drivers: dict[str, DriverPrediction] = Field(default_factory=dict)
    teams: dict[str, TeamPrediction] = Field(default_factory=dict)
