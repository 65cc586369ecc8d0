"""Feed topics and normalized feed messages.

All ingestion paths (live stream, recorded file) convert their inputs into
:class:`TimingMessage` values. Only processors are allowed to merge them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pylivetiming.models._base import LiveTimingModel
from pylivetiming.models.drivers import DriverList
from pylivetiming.models.position import PositionData
from pylivetiming.models.series import PitStopSeries, TyreStintSeries
from pylivetiming.models.session import Heartbeat, LapCount, SessionInfo, TrackStatus, WeatherData
from pylivetiming.models.stats import ChampionshipPrediction, TimingAppData, TimingStats
from pylivetiming.models.timing import TimingData


class DataTopic(StrEnum):
    HEARTBEAT = "Heartbeat"
    LAP_COUNT = "LapCount"
    TRACK_STATUS = "TrackStatus"
    WEATHER_DATA = "WeatherData"
    SESSION_INFO = "SessionInfo"
    TIMING_DATA = "TimingData"
    DRIVER_LIST = "DriverList"
    POSITION = "Position.z"
    TYRE_STINT_SERIES = "TyreStintSeries"
    PIT_STOP_SERIES = "PitStopSeries"
    TIMING_APP_DATA = "TimingAppData"
    TIMING_STATS = "TimingStats"
    CHAMPIONSHIP_PREDICTION = "ChampionshipPrediction"

    @classmethod
    def _missing_(cls, value: object) -> DataTopic | None:
        # Decompressed position payloads are sometimes published without the ``.z`` suffix.
        if value == "Position":
            return cls.POSITION
        return None


TOPIC_MODELS: dict[DataTopic, type[LiveTimingModel]] = {
    DataTopic.HEARTBEAT: Heartbeat,
    DataTopic.LAP_COUNT: LapCount,
    DataTopic.TRACK_STATUS: TrackStatus,
    DataTopic.WEATHER_DATA: WeatherData,
    DataTopic.SESSION_INFO: SessionInfo,
    DataTopic.TIMING_DATA: TimingData,
    DataTopic.DRIVER_LIST: DriverList,
    DataTopic.POSITION: PositionData,
    DataTopic.TYRE_STINT_SERIES: TyreStintSeries,
    DataTopic.PIT_STOP_SERIES: PitStopSeries,
    DataTopic.TIMING_APP_DATA: TimingAppData,
    DataTopic.TIMING_STATS: TimingStats,
    DataTopic.CHAMPIONSHIP_PREDICTION: ChampionshipPrediction,
}


class TimingMessage(BaseModel):
    """A single deserialized feed message."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(..., description="Feed topic name, e.g. ``TimingData``")
    payload: dict[str, Any] = Field(default_factory=dict, description="Decoded (and decompressed) payload")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("topic")
    @classmethod
    def _normalize_topic(cls, value: str) -> str:
        topic = value.strip()
        if not topic:
            raise ValueError("topic must be non-empty")
        return topic

    @field_validator("timestamp")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
