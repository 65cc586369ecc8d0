"""Session state aggregate.

One :class:`SessionState` is built per live or replayed session and passed
explicitly to whatever consumes the feed, renders or serves the state.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import timedelta

from pylivetiming.clock import DelayStep, SessionClock
from pylivetiming.config import LiveTimingConfig
from pylivetiming.models._base import LiveTimingModel
from pylivetiming.state.basic import (
    ChampionshipPredictionProcessor,
    HeartbeatProcessor,
    LapCountProcessor,
    PitStopSeriesProcessor,
    SessionInfoProcessor,
    TimingAppDataProcessor,
    TimingStatsProcessor,
    TrackStatusProcessor,
    TyreStintSeriesProcessor,
    WeatherProcessor,
)
from pylivetiming.state.drivers import DriverListProcessor
from pylivetiming.state.events import DataTopic
from pylivetiming.state.position import PositionDataProcessor
from pylivetiming.state.processor import Processor
from pylivetiming.state.timing import TimingDataProcessor

_logger = logging.getLogger(__name__)


@dataclasses.dataclass
class SessionState:
    """Every processor of one session, plus its clock."""

    clock: SessionClock = dataclasses.field(default_factory=SessionClock)
    heartbeat: HeartbeatProcessor = dataclasses.field(default_factory=HeartbeatProcessor)
    lap_count: LapCountProcessor = dataclasses.field(default_factory=LapCountProcessor)
    track_status: TrackStatusProcessor = dataclasses.field(default_factory=TrackStatusProcessor)
    weather: WeatherProcessor = dataclasses.field(default_factory=WeatherProcessor)
    session_info: SessionInfoProcessor = dataclasses.field(default_factory=SessionInfoProcessor)
    timing_data: TimingDataProcessor = dataclasses.field(default_factory=TimingDataProcessor)
    driver_list: DriverListProcessor = dataclasses.field(default_factory=DriverListProcessor)
    position: PositionDataProcessor = dataclasses.field(default_factory=PositionDataProcessor)
    tyre_stints: TyreStintSeriesProcessor = dataclasses.field(default_factory=TyreStintSeriesProcessor)
    pit_stops: PitStopSeriesProcessor = dataclasses.field(default_factory=PitStopSeriesProcessor)
    timing_app_data: TimingAppDataProcessor = dataclasses.field(default_factory=TimingAppDataProcessor)
    timing_stats: TimingStatsProcessor = dataclasses.field(default_factory=TimingStatsProcessor)
    championship_prediction: ChampionshipPredictionProcessor = dataclasses.field(
        default_factory=ChampionshipPredictionProcessor
    )
    strict_ingestion: bool = False
    """Re-raise malformed-message errors during ingestion instead of skipping them."""

    @classmethod
    def from_config(cls, config: LiveTimingConfig) -> SessionState:
        clock = SessionClock(
            delay=timedelta(seconds=config.initial_delay_seconds),
            step_sizes={
                DelayStep.NORMAL: timedelta(seconds=config.delay_step_seconds),
                DelayStep.FINE: timedelta(seconds=config.fine_delay_step_seconds),
                DelayStep.COARSE: timedelta(seconds=config.coarse_delay_step_seconds),
            },
        )
        return cls(clock=clock, strict_ingestion=config.strict_ingestion)

    def processors(self) -> dict[DataTopic, Processor]:
        return {
            DataTopic.HEARTBEAT: self.heartbeat,
            DataTopic.LAP_COUNT: self.lap_count,
            DataTopic.TRACK_STATUS: self.track_status,
            DataTopic.WEATHER_DATA: self.weather,
            DataTopic.SESSION_INFO: self.session_info,
            DataTopic.TIMING_DATA: self.timing_data,
            DataTopic.DRIVER_LIST: self.driver_list,
            DataTopic.POSITION: self.position,
            DataTopic.TYRE_STINT_SERIES: self.tyre_stints,
            DataTopic.PIT_STOP_SERIES: self.pit_stops,
            DataTopic.TIMING_APP_DATA: self.timing_app_data,
            DataTopic.TIMING_STATS: self.timing_stats,
            DataTopic.CHAMPIONSHIP_PREDICTION: self.championship_prediction,
        }

    def processor_for(self, topic: DataTopic | str) -> Processor:
        """Return the processor for ``topic``.

        Raises
        ------
        ValueError
            When ``topic`` is not a known feed topic.
        """
        return self.processors()[DataTopic(topic)]

    def apply(self, topic: DataTopic | str, patch: LiveTimingModel) -> None:
        """Dispatch a typed patch to the processor owning ``topic``."""
        processor = self.processor_for(topic)
        processor.process(patch)

    def reset(self) -> None:
        """Drop all processor state, keeping the clock."""
        for processor in self.processors().values():
            processor.reset()
        _logger.info("Session state reset")
