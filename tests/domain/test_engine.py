"""Tests for the normalization engine entry point."""

from __future__ import annotations

import copy
import math
from datetime import date

import pytest

from chartnorm.domain.engine import normalize, scale_positions
from chartnorm.domain.errors import EmptyDatasetError, InvalidValueError
from chartnorm.domain.models import (
    BarResult,
    DataPoint,
    Geometry,
    Point,
    ScaleResult,
    StackedResult,
    as_points,
)
from chartnorm.domain.types import ChartKind

GEOM = Geometry(100.0, 50.0)


class TestLineAndPoint:
    def test_positions_match_input_length_and_order(self) -> None:
        points = [DataPoint(2, 1), DataPoint(0, 3), DataPoint(1, 2)]
        result = normalize(points, GEOM, ChartKind.LINE)
        assert isinstance(result, ScaleResult)
        assert len(result.positions) == len(points)
        assert [p.x for p in result.positions] == [100.0, 0.0, 50.0]

    def test_corners(self) -> None:
        result = normalize([(0, 0), (10, 10)], GEOM, "line")
        assert result.positions == (Point(0.0, 50.0), Point(100.0, 0.0))

    def test_point_kind_matches_line(self) -> None:
        data = [(0, 1), (3, -2), (5, 4)]
        assert normalize(data, GEOM, "point") == normalize(data, GEOM, "line")

    def test_single_point_centred(self) -> None:
        result = normalize([DataPoint(5, 5)], GEOM, ChartKind.POINT)
        (position,) = result.positions
        assert position == Point(50.0, 25.0)
        assert math.isfinite(result.baseline)

    def test_baseline_and_axes(self) -> None:
        result = normalize([(-10, -10), (20, 20)], Geometry(90.0, 90.0), "line")
        assert result.baseline == pytest.approx(60.0)
        assert result.axes.x_axis_y == pytest.approx(result.baseline)
        assert result.axes.y_axis_x == pytest.approx(30.0)

    def test_dates_on_x(self) -> None:
        data = [(date(2024, 1, 1), 1), (date(2024, 1, 2), 2), (date(2024, 1, 3), 3)]
        result = normalize(data, GEOM, "line")
        assert [p.x for p in result.positions] == [0.0, 50.0, 100.0]

    def test_ids_accepted_in_tuples(self) -> None:
        result = scale_positions([DataPoint(0, 0, "first"), DataPoint(1, 1, "second")], GEOM)
        assert len(result.positions) == 2


class TestDispatch:
    def test_bar(self) -> None:
        assert isinstance(normalize([(0, 1)], GEOM, "bar"), BarResult)

    def test_stacked_alias(self) -> None:
        result = normalize([(1, 2), (1, 3), (2, 5)], GEOM, "stackedBar")
        assert isinstance(result, StackedResult)
        assert [(g.key, g.sum) for g in result.groups] == [(1, 5), (2, 5)]

    def test_stack_options_forwarded(self) -> None:
        result = normalize([(0.1 + 0.2, 1), (0.3, 1)], GEOM, ChartKind.STACKED_BAR, key_digits=3)
        assert len(result.groups) == 1

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            normalize([(0, 1)], GEOM, "pie")


class TestFailures:
    @pytest.mark.parametrize("kind", list(ChartKind))
    def test_empty_dataset(self, kind: ChartKind) -> None:
        with pytest.raises(EmptyDatasetError):
            normalize([], GEOM, kind)

    @pytest.mark.parametrize("kind", list(ChartKind))
    def test_nan_value(self, kind: ChartKind) -> None:
        with pytest.raises(InvalidValueError):
            normalize([(0, 1), (1, float("nan"))], GEOM, kind)

    def test_negative_geometry(self) -> None:
        with pytest.raises(InvalidValueError):
            Geometry(-1.0, 10.0)

    def test_non_finite_geometry(self) -> None:
        with pytest.raises(InvalidValueError):
            Geometry(10.0, float("inf"))

    @pytest.mark.parametrize("item", [(1,), (1, 2, "a", "b"), 5, "xy"])
    def test_malformed_point(self, item: object) -> None:
        with pytest.raises(InvalidValueError) as exc_info:
            as_points([(0, 1), item])
        assert exc_info.value.index == 1

    @pytest.mark.parametrize("kind", list(ChartKind))
    def test_malformed_point_through_engine(self, kind: ChartKind) -> None:
        with pytest.raises(InvalidValueError):
            normalize([(0, 1), (1,)], GEOM, kind)


class TestLargeMagnitudes:
    def test_line_positions_finite(self) -> None:
        result = normalize([(-1e308, -1e308), (1e308, 1e308)], Geometry(100.0, 100.0), "line")
        assert isinstance(result, ScaleResult)
        assert result.positions == (Point(0.0, 100.0), Point(100.0, 0.0))
        assert result.baseline == 50.0
        assert result.axes.y_axis_x == 50.0


class TestPurity:
    @pytest.mark.parametrize("kind", list(ChartKind))
    def test_idempotent(self, kind: ChartKind, mixed_points: list[DataPoint]) -> None:
        first = normalize(mixed_points, GEOM, kind)
        second = normalize(mixed_points, GEOM, kind)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_input_not_mutated(self, mixed_points: list[DataPoint]) -> None:
        before = copy.deepcopy(mixed_points)
        for kind in ChartKind:
            normalize(mixed_points, GEOM, kind)
        assert mixed_points == before
