"""pylivetiming - Live timing session state for motorsport feeds."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pylivetiming")
except PackageNotFoundError:
    __version__ = "0+local"
from pylivetiming.clock import ClockOperation, ClockState, DelayStep, SessionClock
from pylivetiming.config import LiveTimingConfig
from pylivetiming.exceptions import (
    EmptyTickSequenceError,
    LiveTimingConfigError,
    LiveTimingError,
    SchemaMismatchError,
    UnparsableDurationError,
)
from pylivetiming.ingestion.apply import apply_message, apply_messages, build_patch
from pylivetiming.ingestion.normalize import parse_lap_time, try_parse_lap_time
from pylivetiming.state.events import DataTopic, TimingMessage
from pylivetiming.state.merge import build_merge_plan, merge_into
from pylivetiming.state.processor import Processor
from pylivetiming.state.session import SessionState

__all__ = [
    "__version__",
    "ClockOperation",
    "ClockState",
    "DataTopic",
    "DelayStep",
    "EmptyTickSequenceError",
    "LiveTimingConfig",
    "LiveTimingConfigError",
    "LiveTimingError",
    "Processor",
    "SchemaMismatchError",
    "SessionClock",
    "SessionState",
    "TimingMessage",
    "UnparsableDurationError",
    "apply_message",
    "apply_messages",
    "build_merge_plan",
    "build_patch",
    "merge_into",
    "parse_lap_time",
    "try_parse_lap_time",
]
