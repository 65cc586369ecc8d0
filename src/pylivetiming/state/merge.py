"""Structural merge of partial patches into live timing state.

This is the only code allowed to write feed data into processor state.

Merge semantics for a state ``S`` and a patch ``U`` of the same type:

- scalar field: ``U.f`` overwrites ``S.f`` unless it is ``None``
  (lists count as scalars and are replaced whole)
- nested record: merged leaf by leaf, never replaced wholesale
- keyed map: union of keys; shared keys are merged recursively,
  new keys are added, and no key is ever removed
- fields listed in ``LOCAL_FIELDS`` are never touched

A merge plan is derived once per model type from its declared pydantic
fields and cached.
"""

from __future__ import annotations

import copy
import enum
import functools
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel

from pylivetiming.exceptions import SchemaMismatchError
from pylivetiming.models._base import LiveTimingModel, strip_optional

TModel = TypeVar("TModel", bound=LiveTimingModel)


class ValueKind(enum.Enum):
    SCALAR = "scalar"
    RECORD = "record"
    MAPPING = "mapping"


@dataclass(frozen=True)
class ValuePlan:
    kind: ValueKind
    model: type[LiveTimingModel] | None = None
    """Record type, for ``RECORD`` values."""
    item: ValuePlan | None = None
    """Plan for the values of a ``MAPPING``."""


@dataclass(frozen=True)
class FieldPlan:
    name: str
    value: ValuePlan


@dataclass(frozen=True)
class MergePlan:
    model: type[LiveTimingModel]
    fields: tuple[FieldPlan, ...]


def _plan_value(annotation: Any) -> ValuePlan:
    annotation = strip_optional(annotation)
    if isinstance(annotation, type) and issubclass(annotation, LiveTimingModel):
        return ValuePlan(ValueKind.RECORD, model=annotation)
    origin = typing.get_origin(annotation)
    if origin is dict or origin is Mapping:
        args = typing.get_args(annotation)
        item_annotation = args[1] if len(args) == 2 else Any
        return ValuePlan(ValueKind.MAPPING, item=_plan_value(item_annotation))
    return ValuePlan(ValueKind.SCALAR)


@functools.cache
def build_merge_plan(model: type[LiveTimingModel]) -> MergePlan:
    """Return the (cached) merge plan for ``model``."""
    local_fields = model.LOCAL_FIELDS
    fields = tuple(
        FieldPlan(name=name, value=_plan_value(info.annotation))
        for name, info in model.model_fields.items()
        if name not in local_fields
    )
    return MergePlan(model=model, fields=fields)


def merge_into(state: TModel, patch: TModel) -> TModel:
    """Merge ``patch`` into ``state`` in place and return ``state``.

    Raises
    ------
    SchemaMismatchError
        When the patch does not have the same shape as the state.
    """
    if type(patch) is not type(state):
        raise SchemaMismatchError(
            f"Cannot merge {type(patch).__name__} into {type(state).__name__}",
            path=type(state).__name__,
            expected=type(state).__name__,
        )
    _merge_record(state, patch, build_merge_plan(type(state)), type(state).__name__)
    return state


def _merge_record(state: LiveTimingModel, patch: LiveTimingModel, plan: MergePlan, path: str) -> None:
    for field in plan.fields:
        incoming = getattr(patch, field.name)
        if incoming is None:
            continue
        field_path = f"{path}.{field.name}"
        merged = _merge_value(getattr(state, field.name), incoming, field.value, field_path)
        setattr(state, field.name, merged)


def _merge_value(current: Any, incoming: Any, plan: ValuePlan, path: str) -> Any:
    if plan.kind is ValueKind.SCALAR:
        if isinstance(incoming, (BaseModel, Mapping)):
            raise SchemaMismatchError(
                f"{path}: expected a scalar, got {type(incoming).__name__}",
                path=path,
                expected="scalar",
            )
        return copy.deepcopy(incoming) if isinstance(incoming, list) else incoming

    if plan.kind is ValueKind.RECORD:
        model = typing.cast(type[LiveTimingModel], plan.model)
        if not isinstance(incoming, model):
            raise SchemaMismatchError(
                f"{path}: expected {model.__name__}, got {type(incoming).__name__}",
                path=path,
                expected=model.__name__,
            )
        if current is None:
            current = model()
        elif not isinstance(current, model):
            raise SchemaMismatchError(
                f"{path}: state holds {type(current).__name__}, expected {model.__name__}",
                path=path,
                expected=model.__name__,
            )
        _merge_record(current, incoming, build_merge_plan(model), path)
        return current

    if not isinstance(incoming, Mapping):
        raise SchemaMismatchError(
            f"{path}: expected a mapping, got {type(incoming).__name__}",
            path=path,
            expected="mapping",
        )
    if current is None:
        current = {}
    elif not isinstance(current, dict):
        raise SchemaMismatchError(
            f"{path}: state holds {type(current).__name__}, expected a mapping",
            path=path,
            expected="mapping",
        )
    item_plan = typing.cast(ValuePlan, plan.item)
    for key, value in incoming.items():
        if value is None:
            continue
        current[key] = _merge_value(current.get(key), value, item_plan, f"{path}[{key!r}]")
    return current
