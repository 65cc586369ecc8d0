"""Timing data processor with lap-by-lap history and best lap tracking.

On top of the generic merge, every driver line in a patch can produce:

- a lap snapshot: the first update reporting lap ``N`` for a driver stores a
  deep copy of the merged line at ``snapshots[N][driver]``, and later updates
  for the same lap never replace it
- a best lap entry: a copy of the merged line, kept while its best lap time
  is the fastest seen, and dropped when the feed blanks the best lap time
  (between qualifying segments)

Both indices key off what the *patch* reports, while the stored copy is the
fully merged line.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import NamedTuple

from pylivetiming.ingestion.normalize import is_blank, is_strictly_faster, try_parse_lap_time
from pylivetiming.models.timing import TimingData, TimingLine
from pylivetiming.state.merge import merge_into
from pylivetiming.state.processor import Processor

_logger = logging.getLogger(__name__)

LapSnapshots = Mapping[int, Mapping[str, TimingLine]]


class TimingView(NamedTuple):
    """Timing lines and both indices as of the same patch."""

    latest: TimingData
    snapshots: LapSnapshots
    """Lap number -> driver number -> timing line as of that lap."""
    best_laps: Mapping[str, TimingLine]
    """Driver number -> timing line as of the driver's fastest lap."""


def _empty_view() -> TimingView:
    return TimingView(latest=TimingData(), snapshots={}, best_laps={})


class TimingDataProcessor(Processor[TimingData]):
    """Timing lines plus the lap snapshot and best lap indices.

    All three are published together as one :class:`TimingView`. Read
    :attr:`view` once when ``latest`` and the indices must agree; the
    individual properties may each come from a different patch.
    """

    data_type = TimingData

    def __init__(self) -> None:
        self._view = _empty_view()
        super().__init__()

    # The base class reads and writes ``_latest``; route it through the view
    # so local updates republish alongside the current indices.
    @property
    def _latest(self) -> TimingData:
        return self._view.latest

    @_latest.setter
    def _latest(self, value: TimingData) -> None:
        self._view = self._view._replace(latest=value)

    @property
    def view(self) -> TimingView:
        return self._view

    @property
    def snapshots(self) -> LapSnapshots:
        """Lap number -> driver number -> timing line as of that lap."""
        return self._view.snapshots

    @property
    def best_laps(self) -> Mapping[str, TimingLine]:
        """Driver number -> timing line as of the driver's fastest lap."""
        return self._view.best_laps

    def process(self, patch: TimingData) -> None:
        self._check_patch(patch)
        with self._write_lock:
            current = self._view
            working = current.latest.model_copy(deep=True)
            previous_laps = {driver: line.number_of_laps for driver, line in working.lines.items()}
            merge_into(working, patch)

            snapshots = dict(current.snapshots)
            best_laps = dict(current.best_laps)
            for driver, line_patch in patch.lines.items():
                if line_patch is None:
                    continue
                line = working.lines[driver]
                _track_pit_lap(line, line_patch, previous_laps.get(driver))
                cloned = line.model_copy(deep=True)
                _record_snapshot(snapshots, driver, line_patch, cloned)
                _record_best_lap(best_laps, driver, line_patch, cloned)

            self._view = TimingView(latest=working, snapshots=snapshots, best_laps=best_laps)

    def reset(self) -> None:
        with self._write_lock:
            self._view = _empty_view()
        _logger.debug("Reset %s", type(self).__name__)

    def snapshot(self, lap: int, driver_number: str) -> TimingLine | None:
        return self.snapshots.get(lap, {}).get(driver_number)

    def laps_for(self, driver_number: str) -> dict[int, TimingLine]:
        """Every recorded lap snapshot for a driver, in lap order."""
        snapshots = self.snapshots
        return {
            lap: snapshots[lap][driver_number] for lap in sorted(snapshots) if driver_number in snapshots[lap]
        }

    def best_lap(self, driver_number: str) -> TimingLine | None:
        return self.best_laps.get(driver_number)

    def fastest_driver(self) -> str | None:
        """Driver holding the fastest parseable best lap, if any."""
        fastest: str | None = None
        fastest_time: timedelta | None = None
        for driver, line in self.best_laps.items():
            lap_time = try_parse_lap_time(line.best_lap_value)
            if lap_time is None:
                continue
            if fastest_time is None or lap_time < fastest_time:
                fastest, fastest_time = driver, lap_time
        return fastest


def _track_pit_lap(line: TimingLine, line_patch: TimingLine, previous_laps: int | None) -> None:
    in_pit_now = bool(line.in_pit or line.pit_out)
    if line_patch.number_of_laps is not None and line_patch.number_of_laps != previous_laps:
        line.is_pit_lap = in_pit_now
    else:
        line.is_pit_lap = bool(line.is_pit_lap) or in_pit_now


def _record_snapshot(
    snapshots: dict[int, dict[str, TimingLine]],
    driver: str,
    line_patch: TimingLine,
    cloned: TimingLine,
) -> None:
    lap = line_patch.number_of_laps
    if lap is None:
        return
    lap_drivers = snapshots.get(lap, {})
    if driver in lap_drivers:
        return
    snapshots[lap] = {**lap_drivers, driver: cloned}
    _logger.debug("Recorded lap %d snapshot for driver %s", lap, driver)


def _record_best_lap(
    best_laps: dict[str, TimingLine],
    driver: str,
    line_patch: TimingLine,
    cloned: TimingLine,
) -> None:
    new_value = line_patch.best_lap_value
    if not is_blank(new_value):
        existing = best_laps.get(driver)
        if existing is None or is_strictly_faster(new_value, existing.best_lap_value):
            best_laps[driver] = cloned
            _logger.debug("New best lap %s for driver %s", new_value, driver)

    if is_blank(cloned.best_lap_value) and best_laps.pop(driver, None) is not None:
        _logger.debug("Best lap cleared for driver %s", driver)
