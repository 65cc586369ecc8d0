"""Pass-through processors: plain merges with no derived state."""

from __future__ import annotations

from pylivetiming.models.series import PitStopSeries, TyreStintSeries
from pylivetiming.models.session import Heartbeat, LapCount, SessionInfo, TrackStatus, WeatherData
from pylivetiming.models.stats import ChampionshipPrediction, TimingAppData, TimingStats
from pylivetiming.state.processor import Processor


class HeartbeatProcessor(Processor[Heartbeat]):
    data_type = Heartbeat


class LapCountProcessor(Processor[LapCount]):
    data_type = LapCount


class TrackStatusProcessor(Processor[TrackStatus]):
    data_type = TrackStatus


class WeatherProcessor(Processor[WeatherData]):
    data_type = WeatherData


class SessionInfoProcessor(Processor[SessionInfo]):
    data_type = SessionInfo

    @property
    def has_session(self) -> bool:
        """Whether a session has been announced by the feed."""
        return self.latest.name is not None


class TyreStintSeriesProcessor(Processor[TyreStintSeries]):
    data_type = TyreStintSeries


class PitStopSeriesProcessor(Processor[PitStopSeries]):
    data_type = PitStopSeries


class TimingAppDataProcessor(Processor[TimingAppData]):
    data_type = TimingAppData


class TimingStatsProcessor(Processor[TimingStats]):
    data_type = TimingStats


class ChampionshipPredictionProcessor(Processor[ChampionshipPrediction]):
    data_type = ChampionshipPrediction
