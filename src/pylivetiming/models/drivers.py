"""Driver roster model (``DriverList`` topic)."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, model_validator

from pylivetiming.models._base import LiveTimingModel


class Driver(LiveTimingModel):
    """A single roster entry."""

    LOCAL_FIELDS: ClassVar[frozenset[str]] = frozenset({"is_selected"})

    racing_number: str | None = None
    broadcast_name: str | None = None
    full_name: str | None = None
    tla: str | None = None
    """Three letter abbreviation, e.g. ``HAM``."""
    line: int | None = None
    team_name: str | None = None
    team_colour: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    reference: str | None = None
    headshot_url: str | None = None
    country_code: str | None = None
    is_selected: bool = True
    """Selected in the UI. Owned by the application, never by the feed."""


class DriverList(LiveTimingModel):
    """Roster keyed by racing number.

    The feed sends the map itself (``{"44": {...}, "1": {...}}``); it is
    wrapped into :attr:`drivers` on validation.
    """

    drivers: dict[str, Driver] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_roster(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "drivers" in values or "Drivers" in values:
            return values
        return {"drivers": {key: value for key, value in values.items() if not str(key).startswith("_")}}
