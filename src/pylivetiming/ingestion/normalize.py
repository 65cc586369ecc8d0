"""Normalization helpers.

Centralizes lap time parsing and defensive handling of feed strings.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from pylivetiming.exceptions import UnparsableDurationError

# ``1:31.998``, ``31.998``, ``1:02:31.998`` (whole seconds are accepted too).
_LAP_TIME_RE = re.compile(r"^(?:(?:(?P<hours>\d+):)?(?P<minutes>\d{1,2}):)?(?P<seconds>\d{1,2}(?:\.\d+)?)$")


def is_blank(value: Any) -> bool:
    """Return True for ``None``, ``""`` and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_lap_time(value: Any) -> timedelta:
    """Parse a lap or sector time (``M:SS.fff`` or ``SS.fff``).

    Raises
    ------
    UnparsableDurationError
        When ``value`` is not a string in one of the accepted formats.
    """
    if not isinstance(value, str):
        raise UnparsableDurationError(value)
    match = _LAP_TIME_RE.match(value.strip())
    if match is None:
        raise UnparsableDurationError(value)
    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes") or 0)
    seconds = float(match.group("seconds"))
    if match.group("minutes") is not None and seconds >= 60:
        raise UnparsableDurationError(value)
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def try_parse_lap_time(value: Any) -> timedelta | None:
    """Like :func:`parse_lap_time` but returns ``None`` instead of raising."""
    try:
        return parse_lap_time(value)
    except UnparsableDurationError:
        return None


def is_strictly_faster(candidate: Any, reference: Any) -> bool:
    """Whether ``candidate`` is a strictly shorter lap time than ``reference``.

    Unparsable values on either side make the comparison inconclusive, which
    counts as "not faster".
    """
    candidate_time = try_parse_lap_time(candidate)
    reference_time = try_parse_lap_time(reference)
    if candidate_time is None or reference_time is None:
        return False
    return candidate_time < reference_time
