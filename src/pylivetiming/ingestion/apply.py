"""Ingestion application helpers.

This module centralizes the common pattern used by every feed source:

- resolve the message topic
- validate the raw payload into the topic's typed patch model
- dispatch the patch to the owning processor in :class:`SessionState`

Malformed messages are the feed's problem, not the state's: by default they
are logged and skipped, since losing one field update is preferable to
aborting a multi-hour session. ``strict=True`` re-raises instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from pylivetiming.exceptions import SchemaMismatchError
from pylivetiming.models._base import LiveTimingModel
from pylivetiming.models.position import PositionData, PositionTick
from pylivetiming.state.events import TOPIC_MODELS, DataTopic, TimingMessage
from pylivetiming.state.session import SessionState

_logger = logging.getLogger(__name__)


def resolve_topic(topic: str) -> DataTopic | None:
    try:
        return DataTopic(topic)
    except ValueError:
        return None


def build_patch(topic: DataTopic | str, payload: dict[str, Any]) -> LiveTimingModel:
    """Validate a raw payload into the typed patch for ``topic``.

    Raises
    ------
    SchemaMismatchError
        When the payload does not match the topic's schema.
    ValueError
        When ``topic`` is unknown.
    """
    model = TOPIC_MODELS[DataTopic(topic)]
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise SchemaMismatchError(
            f"{topic} payload does not match {model.__name__}: {exc.error_count()} error(s)",
            path=model.__name__,
            expected=model.__name__,
        ) from exc


def apply_message(state: SessionState, message: TimingMessage, *, strict: bool | None = None) -> bool:
    """Build and apply one feed message.

    ``strict`` defaults to the session's ``strict_ingestion`` setting.
    Returns ``True`` when the message was applied, ``False`` when it was
    skipped (unknown topic, or a malformed message with ``strict=False``).
    """
    topic = resolve_topic(message.topic)
    if topic is None:
        _logger.debug("Ignoring message for unhandled topic %s", message.topic)
        return False

    try:
        patch = build_patch(topic, message.payload)
        if isinstance(patch, PositionData):
            _apply_position(state, patch, message)
        else:
            state.apply(topic, patch)
    except SchemaMismatchError as exc:
        if strict is None:
            strict = state.strict_ingestion
        if strict:
            raise
        _logger.warning(
            "Skipping %s message at %s: %s",
            topic,
            message.timestamp.isoformat(),
            exc,
            exc_info=_logger.isEnabledFor(logging.DEBUG),
        )
        return False

    _logger.debug("Applied %s message at %s", topic, message.timestamp.isoformat())
    return True


def apply_messages(state: SessionState, messages: Iterable[TimingMessage], *, strict: bool | None = None) -> int:
    """Apply messages in order and return how many were applied."""
    applied = 0
    for message in messages:
        if apply_message(state, message, strict=strict):
            applied += 1
    return applied


def _apply_position(state: SessionState, patch: PositionData, message: TimingMessage) -> None:
    """Open one position tick per sample in ``patch`` and merge the sample into it.

    Each feed sample is a complete tick, so the ingestion layer owns the tick
    boundaries. Samples without a timestamp take the message's.
    """
    for tick in patch.position:
        state.position.append_tick(PositionTick(timestamp=tick.timestamp or message.timestamp))
        state.position.process(PositionData(position=[tick]))
