"""Base model for live timing data points.

Every feed record inherits from :class:`LiveTimingModel` which provides:

* ``alias_generator=to_pascal`` so PascalCase feed keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that turns JSON lists into
  index-keyed dicts for keyed-map fields. The feed sends the first
  message of a session with lists (``"Sectors": [{...}, {...}]``) and
  every later update as objects (``"Sectors": {"1": {...}}``).
* ``LOCAL_FIELDS``, the set of fields owned by the application rather
  than the feed. The merge engine never writes them.

Models are deliberately mutable: processors merge patches into a private
copy of their state and publish it once the merge is complete.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_pascal


def strip_optional(annotation: Any) -> Any:
    """Return ``X`` for ``X | None`` (or ``Optional[X]``), else ``annotation``."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def is_mapping_annotation(annotation: Any) -> bool:
    origin = typing.get_origin(strip_optional(annotation))
    return origin is dict or origin is Mapping


def index_list(values: list[Any]) -> dict[str, Any]:
    """``[a, b]`` -> ``{"0": a, "1": b}``."""
    return {str(index): value for index, value in enumerate(values)}


def _normalize_mapping(annotation: Any, value: Any) -> Any:
    if isinstance(value, list):
        value = index_list(value)
    if not isinstance(value, dict):
        return value
    args = typing.get_args(strip_optional(annotation))
    if len(args) == 2 and is_mapping_annotation(args[1]):
        return {key: _normalize_mapping(args[1], inner) for key, inner in value.items()}
    return value


class LiveTimingModel(BaseModel):
    """Base for every live timing record and patch."""

    LOCAL_FIELDS: ClassVar[frozenset[str]] = frozenset()
    """Fields mutated only by local calls, never by feed patches."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_pascal,
    )

    @model_validator(mode="before")
    @classmethod
    def _index_keyed_lists(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        normalized = dict(values)
        for name, field in cls.model_fields.items():
            if not is_mapping_annotation(field.annotation):
                continue
            for key in (field.alias, name):
                if key and key in normalized:
                    normalized[key] = _normalize_mapping(field.annotation, normalized[key])
        return normalized
