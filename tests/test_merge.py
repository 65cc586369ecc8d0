"""Tests for the structural merge engine."""

from __future__ import annotations

import pytest

from pylivetiming.exceptions import SchemaMismatchError
from pylivetiming.models.drivers import Driver
from pylivetiming.models.position import PositionData, PositionTick
from pylivetiming.models.series import TyreStintSeries
from pylivetiming.models.timing import TimingData, TimingLine
from pylivetiming.state.merge import ValueKind, build_merge_plan, merge_into

FULL_LINE: dict = {
    "GapToLeader": "+1.234",
    "IntervalToPositionAhead": {"Value": "+0.500", "Catching": True},
    "Line": 2,
    "Position": "2",
    "InPit": False,
    "PitOut": False,
    "NumberOfPitStops": 1,
    "NumberOfLaps": 12,
    "LastLapTime": {"Value": "1:33.100", "PersonalFastest": False},
    "Sectors": [
        {"Value": "30.100", "Segments": [{"Status": 2049}, {"Status": 2048}]},
        {"Value": "31.200", "Segments": [{"Status": 2048}]},
        {"Value": "31.800", "Segments": [{"Status": 2051}]},
    ],
    "BestLapTime": {"Value": "1:32.456", "Lap": 9},
    "Speeds": {"I1": {"Value": "301"}},
}


def _timing(lines: dict) -> TimingData:
    return TimingData.model_validate({"Lines": lines})


class TestScalars:
    def test_present_scalar_overwrites(self) -> None:
        state = _timing({"44": FULL_LINE})
        merge_into(state, _timing({"44": {"Position": "1"}}))

        assert state.lines["44"].position == "1"

    def test_absent_scalar_is_unchanged(self) -> None:
        state = _timing({"44": FULL_LINE})
        merge_into(state, _timing({"44": {"Position": "1"}}))

        assert state.lines["44"].gap_to_leader == "+1.234"
        assert state.lines["44"].number_of_laps == 12

    def test_empty_string_is_a_value(self) -> None:
        state = _timing({"44": FULL_LINE})
        merge_into(state, _timing({"44": {"BestLapTime": {"Value": ""}}}))

        assert state.lines["44"].best_lap_time is not None
        assert state.lines["44"].best_lap_time.value == ""
        assert state.lines["44"].best_lap_time.lap == 9

    def test_false_is_a_value(self) -> None:
        state = _timing({"44": {"InPit": True}})
        merge_into(state, _timing({"44": {"InPit": False}}))

        assert state.lines["44"].in_pit is False

    def test_list_replaced_whole_and_not_aliased(self) -> None:
        state = PositionData()
        patch = PositionData(position=[PositionTick(), PositionTick()])
        merge_into(state, patch)

        assert len(state.position) == 2
        assert state.position is not patch.position


class TestNestedRecords:
    def test_nested_record_merged_per_leaf(self) -> None:
        state = _timing({"44": FULL_LINE})
        merge_into(state, _timing({"44": {"IntervalToPositionAhead": {"Catching": False}}}))

        interval = state.lines["44"].interval_to_position_ahead
        assert interval is not None
        assert interval.value == "+0.500"
        assert interval.catching is False

    def test_missing_nested_record_is_created(self) -> None:
        state = _timing({"44": {"Position": "3"}})
        merge_into(state, _timing({"44": {"BestLapTime": {"Lap": 4}}}))

        assert state.lines["44"].best_lap_time is not None
        assert state.lines["44"].best_lap_time.lap == 4
        assert state.lines["44"].best_lap_time.value is None

    def test_unchanged_on_null_at_every_depth(self) -> None:
        state = _timing({"44": FULL_LINE, "1": FULL_LINE})
        before = state.model_dump()

        merge_into(state, _timing({"44": {"Sectors": {"1": {"Segments": {"0": {"Status": 2049}}}}}}))

        after = state.model_dump()
        assert after["lines"]["1"] == before["lines"]["1"]
        line_before, line_after = before["lines"]["44"], after["lines"]["44"]
        assert line_after["sectors"]["1"]["segments"]["0"]["status"] == 2049
        line_after["sectors"]["1"]["segments"]["0"]["status"] = 2048
        assert line_after == line_before


class TestKeyedMaps:
    def test_new_keys_added_existing_kept(self) -> None:
        state = _timing({"44": FULL_LINE})
        merge_into(state, _timing({"1": {"Position": "1"}}))

        assert set(state.lines) == {"44", "1"}
        assert state.lines["44"].position == "2"

    def test_shared_keys_merged_recursively(self) -> None:
        state = _timing({"44": FULL_LINE})
        merge_into(state, _timing({"44": {"Sectors": {"0": {"Value": "29.999"}}}}))

        sector = state.lines["44"].sectors["0"]
        assert sector.value == "29.999"
        assert set(sector.segments) == {"0", "1"}

    def test_no_key_is_ever_removed(self) -> None:
        state = _timing({"44": FULL_LINE, "1": {"Position": "1"}})
        patches = [
            _timing({}),
            _timing({"44": {"Sectors": {}}}),
            _timing({"1": {"Sectors": {"2": {"Value": "30.000"}}}}),
            _timing({"44": {"Speeds": {"FL": {"Value": "320"}}}}),
        ]

        key_counts = []
        for patch in patches:
            merge_into(state, patch)
            key_counts.append(
                (
                    len(state.lines),
                    len(state.lines["44"].sectors),
                    len(state.lines["44"].speeds),
                    len(state.lines["1"].sectors),
                )
            )

        assert key_counts == sorted(key_counts)
        assert set(state.lines["44"].sectors) == {"0", "1", "2"}
        assert set(state.lines["44"].speeds) == {"I1", "FL"}

    def test_map_of_maps(self) -> None:
        state = TyreStintSeries.model_validate({"Stints": {"44": [{"Compound": "SOFT", "TotalLaps": 3}]}})
        patch = TyreStintSeries.model_validate({"Stints": {"44": {"0": {"TotalLaps": 4}, "1": {"Compound": "HARD"}}}})
        merge_into(state, patch)

        assert state.stints["44"]["0"].compound == "SOFT"
        assert state.stints["44"]["0"].total_laps == 4
        assert state.stints["44"]["1"].compound == "HARD"


class TestLocalFields:
    def test_local_field_never_patched(self) -> None:
        state = Driver(tla="HAM", is_selected=False)
        merge_into(state, Driver(tla="HAM", is_selected=True))

        assert state.is_selected is False

    def test_local_field_default_on_new_map_entry(self) -> None:
        state = _timing({})
        patch = _timing({"44": {"Position": "1"}})
        patch.lines["44"].is_pit_lap = True
        merge_into(state, patch)

        assert state.lines["44"].is_pit_lap is None

    def test_plan_excludes_local_fields(self) -> None:
        plan = build_merge_plan(TimingLine)
        names = {field.name for field in plan.fields}

        assert "is_pit_lap" not in names
        assert "number_of_laps" in names

    def test_plan_is_cached(self) -> None:
        assert build_merge_plan(TimingLine) is build_merge_plan(TimingLine)

    def test_plan_kinds(self) -> None:
        kinds = {field.name: field.value.kind for field in build_merge_plan(TimingLine).fields}

        assert kinds["position"] is ValueKind.SCALAR
        assert kinds["best_lap_time"] is ValueKind.RECORD
        assert kinds["sectors"] is ValueKind.MAPPING


class TestSchemaMismatch:
    def test_different_patch_type_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError):
            merge_into(TimingData(), TimingLine())  # type: ignore[arg-type]

    def test_scalar_where_record_expected(self) -> None:
        patch = TimingLine.model_construct(best_lap_time="1:30.000")

        with pytest.raises(SchemaMismatchError) as excinfo:
            merge_into(TimingLine(), patch)

        assert excinfo.value.path == "TimingLine.best_lap_time"

    def test_scalar_where_mapping_expected(self) -> None:
        patch = TimingLine.model_construct(sectors="30.000")

        with pytest.raises(SchemaMismatchError):
            merge_into(TimingLine(), patch)

    def test_record_where_scalar_expected(self) -> None:
        patch = TimingLine.model_construct(position=TimingLine())

        with pytest.raises(SchemaMismatchError):
            merge_into(TimingLine(), patch)

    def test_schema_mismatch_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            merge_into(TimingData(), TimingLine())  # type: ignore[arg-type]


def test_idempotent() -> None:
    state = _timing({"44": FULL_LINE})
    patch = _timing({"44": {"Position": "1", "Sectors": {"2": {"Value": "31.000"}}}})

    merge_into(state, patch)
    once = state.model_dump()
    merge_into(state, patch)

    assert state.model_dump() == once
