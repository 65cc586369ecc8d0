"""Data models for live timing data points."""

from pylivetiming.models._base import LiveTimingModel
from pylivetiming.models.drivers import Driver, DriverList
from pylivetiming.models.position import PositionData, PositionEntry, PositionTick
from pylivetiming.models.series import PitStopEntry, PitStopSeries, PitTime, Stint, TyreStintSeries
from pylivetiming.models.session import (
    Circuit,
    Country,
    Heartbeat,
    LapCount,
    Meeting,
    SessionInfo,
    TrackStatus,
    TrackStatusCode,
    WeatherData,
)
from pylivetiming.models.stats import (
    ChampionshipPrediction,
    DriverPrediction,
    PersonalBestLap,
    RankedValue,
    TeamPrediction,
    TimingAppData,
    TimingAppLine,
    TimingStats,
    TimingStatsLine,
)
from pylivetiming.models.timing import (
    BestLap,
    Interval,
    LapSectorTime,
    Segment,
    SpeedTrap,
    StatusFlags,
    TimingData,
    TimingLine,
)

__all__ = [
    "BestLap",
    "ChampionshipPrediction",
    "Circuit",
    "Country",
    "Driver",
    "DriverList",
    "DriverPrediction",
    "Heartbeat",
    "Interval",
    "LapCount",
    "LapSectorTime",
    "LiveTimingModel",
    "Meeting",
    "PersonalBestLap",
    "PitStopEntry",
    "PitStopSeries",
    "PitTime",
    "PositionData",
    "PositionEntry",
    "PositionTick",
    "RankedValue",
    "Segment",
    "SessionInfo",
    "SpeedTrap",
    "StatusFlags",
    "Stint",
    "TeamPrediction",
    "TimingAppData",
    "TimingAppLine",
    "TimingData",
    "TimingLine",
    "TimingStats",
    "TimingStatsLine",
    "TrackStatus",
    "TrackStatusCode",
    "TyreStintSeries",
    "WeatherData",
]
