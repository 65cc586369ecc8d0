"""Generic processor: owns the latest merged value for one data point kind."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import ClassVar, Generic, TypeVar

from pylivetiming.exceptions import SchemaMismatchError
from pylivetiming.models._base import LiveTimingModel
from pylivetiming.state.merge import merge_into

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=LiveTimingModel)
TResult = TypeVar("TResult")


class Processor(Generic[TModel]):
    """Stateful accumulator for one data point kind.

    Writes are copy-on-write: :meth:`process` merges into a private deep copy
    of :attr:`latest` and publishes it with a single reference swap. Readers
    never take a lock and only ever see fully merged values. Published values
    must be treated as read-only.

    A single producer is expected to call :meth:`process` in arrival order;
    the writer lock only serialises it against local mutations such as
    :meth:`update`.
    """

    data_type: ClassVar[type[LiveTimingModel]]

    def __init__(self) -> None:
        self._write_lock = threading.RLock()
        self._latest: TModel = self._new_latest()

    def _new_latest(self) -> TModel:
        return self.data_type()  # type: ignore[return-value]

    @property
    def latest(self) -> TModel:
        """The latest merged value."""
        return self._latest

    def _check_patch(self, patch: object) -> None:
        if not isinstance(patch, self.data_type):
            raise SchemaMismatchError(
                f"{type(self).__name__} expects {self.data_type.__name__}, got {type(patch).__name__}",
                path=self.data_type.__name__,
                expected=self.data_type.__name__,
            )

    def process(self, patch: TModel) -> None:
        """Merge ``patch`` into :attr:`latest`.

        On error the published value is left untouched.
        """
        self._check_patch(patch)
        with self._write_lock:
            working = self._latest.model_copy(deep=True)
            merge_into(working, patch)
            self._latest = working

    def update(self, mutator: Callable[[TModel], TResult]) -> TResult:
        """Apply a local mutation copy-on-write and return the mutator's result."""
        with self._write_lock:
            working = self._latest.model_copy(deep=True)
            result = mutator(working)
            self._latest = working
        return result

    def reset(self) -> None:
        """Drop all state, e.g. when switching to another session."""
        with self._write_lock:
            self._latest = self._new_latest()
        _logger.debug("Reset %s", type(self).__name__)
