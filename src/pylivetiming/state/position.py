"""Car position processor.

Position data is a growing sequence of timestamped ticks. The feed
collaborator opens each tick with :meth:`PositionDataProcessor.append_tick`;
:meth:`PositionDataProcessor.process` only ever merges into the newest one.
"""

from __future__ import annotations

import logging

from pylivetiming.exceptions import EmptyTickSequenceError
from pylivetiming.models.position import PositionData, PositionTick
from pylivetiming.state.merge import merge_into
from pylivetiming.state.processor import Processor

_logger = logging.getLogger(__name__)


class PositionDataProcessor(Processor[PositionData]):
    """Position ticks.

    Only the newest tick is ever copied on write; older ticks are shared
    between published values and never mutated again.
    """

    data_type = PositionData

    @property
    def latest_tick(self) -> PositionTick | None:
        ticks = self.latest.position
        return ticks[-1] if ticks else None

    def append_tick(self, tick: PositionTick) -> None:
        """Open a new tick. Subsequent patches merge into it."""
        if not isinstance(tick, PositionTick):
            raise TypeError(f"expected PositionTick, got {type(tick).__name__}")
        with self._write_lock:
            ticks = [*self._latest.position, tick.model_copy(deep=True)]
            self._latest = self._latest.model_copy(update={"position": ticks})

    def process(self, patch: PositionData) -> None:
        """Merge the entries of every tick in ``patch`` into the newest tick.

        Raises
        ------
        EmptyTickSequenceError
            When no tick has been appended yet.
        """
        self._check_patch(patch)
        with self._write_lock:
            ticks = self._latest.position
            if not ticks:
                raise EmptyTickSequenceError("No open position tick to merge into; append a tick first")
            current = ticks[-1].model_copy(deep=True)
            for tick in patch.position:
                merge_into(current, PositionTick(entries=tick.entries))
            self._latest = self._latest.model_copy(update={"position": [*ticks[:-1], current]})
        _logger.debug("Merged %d position update(s) into tick %s", len(patch.position), current.timestamp)
