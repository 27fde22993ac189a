"""Tests for stack aggregation."""

from __future__ import annotations

import pytest

from chartnorm.domain.errors import EmptyDatasetError, InvalidValueError
from chartnorm.domain.models import DataPoint, Geometry
from chartnorm.domain.stacking import group_indices, quantized_key, slot_layout, stack

SQUARE = Geometry(100.0, 100.0)


def _points(*pairs: tuple[float, float]) -> list[DataPoint]:
    return [DataPoint(x, y) for x, y in pairs]


class TestStack:
    def test_groups_and_sums(self) -> None:
        result = stack(_points((1, 2), (1, 3), (2, 5)), SQUARE)
        assert [(g.key, g.sum) for g in result.groups] == [(1, 5), (2, 5)]

    def test_first_seen_order(self) -> None:
        result = stack(_points((3, 1), (1, 1), (3, 1)), SQUARE)
        assert [g.key for g in result.groups] == [3, 1]
        assert [g.sum for g in result.groups] == [2, 1]

    def test_equal_slots(self) -> None:
        result = stack(_points((1, 2), (1, 3), (2, 5)), SQUARE)
        assert [g.width for g in result.groups] == [50.0, 50.0]
        assert [g.offset for g in result.groups] == [25.0, 75.0]

    def test_segments_positive(self) -> None:
        result = stack(_points((1, 2), (1, 3), (2, 5)), SQUARE)
        first, second = result.groups[0].segments
        assert (first.start, first.end) == (0.0, 2.0)
        assert (second.start, second.end) == (2.0, 5.0)
        assert first.bottom == pytest.approx(100.0)
        assert first.top == pytest.approx(60.0)
        assert second.top == pytest.approx(0.0)
        assert result.baseline == 100.0

    def test_mixed_sign_segments(self) -> None:
        result = stack(_points((1, 4), (1, -2), (1, 1)), SQUARE)
        group = result.groups[0]
        assert group.sum == 3.0
        up, down, up_again = group.segments
        assert (up.start, up.end) == (0.0, 4.0)
        assert (down.start, down.end) == (0.0, -2.0)
        assert (up_again.start, up_again.end) == (4.0, 5.0)
        assert result.y_extent.min == -2.0
        assert result.y_extent.max == 5.0
        assert result.baseline == pytest.approx(100.0 - 2.0 / 7.0 * 100.0)
        assert down.top == pytest.approx(result.baseline)
        assert down.bottom == pytest.approx(100.0)

    def test_segment_ids_and_indices(self) -> None:
        points = [DataPoint(1, 2, "a"), DataPoint(2, 1, "b"), DataPoint(1, 1, "c")]
        result = stack(points, SQUARE)
        assert [(s.index, s.id) for s in result.groups[0].segments] == [(0, "a"), (2, "c")]

    def test_weighted_slots(self) -> None:
        result = stack(_points((1, 1), (2, 1)), SQUARE, widths={1: 3.0, 2: 1.0})
        assert [g.width for g in result.groups] == [75.0, 25.0]
        assert [g.offset for g in result.groups] == [37.5, 87.5]

    def test_fractions_match_pixel_widths(self) -> None:
        equal = stack(_points((1, 2), (1, 3), (2, 5)), SQUARE)
        assert [g.fraction for g in equal.groups] == [0.5, 0.5]
        weighted = stack(_points((1, 1), (2, 1)), Geometry(200.0, 100.0), widths={1: 3.0, 2: 1.0})
        assert [g.fraction for g in weighted.groups] == [0.75, 0.25]
        assert [g.width for g in weighted.groups] == [150.0, 50.0]

    def test_overflowing_totals_raise(self) -> None:
        with pytest.raises(InvalidValueError):
            stack(_points((1, 1e308), (1, 1e308)), SQUARE)

    def test_float_keys_split_without_quantization(self) -> None:
        result = stack(_points((0.1 + 0.2, 1), (0.3, 2)), SQUARE)
        assert len(result.groups) == 2

    def test_key_digits_merges_near_equal_keys(self) -> None:
        result = stack(_points((0.1 + 0.2, 1), (0.3, 2)), SQUARE, key_digits=6)
        assert len(result.groups) == 1
        assert result.groups[0].sum == 3.0

    def test_explicit_key_function(self) -> None:
        result = stack(_points((11, 1), (15, 2), (21, 3)), SQUARE, key=lambda p: p.x // 10)
        assert [(g.key, g.sum) for g in result.groups] == [(1, 3), (2, 3)]

    def test_empty_raises(self) -> None:
        with pytest.raises(EmptyDatasetError):
            stack([], SQUARE)

    def test_deterministic(self) -> None:
        points = _points((1, 0.1), (1, 0.2), (2, 0.3))
        assert stack(points, SQUARE) == stack(points, SQUARE)


class TestHelpers:
    def test_quantized_key_folds_negative_zero(self) -> None:
        key = quantized_key(2)
        assert key(DataPoint(-0.001, 1)) == 0.0
        assert str(key(DataPoint(-0.001, 1))) == "0.0"

    def test_group_indices(self) -> None:
        groups = group_indices(_points((2, 0), (1, 0), (2, 0)), lambda p: p.x)
        assert groups == {2: [0, 2], 1: [1]}

    def test_group_indices_reports_bad_key(self) -> None:
        with pytest.raises(InvalidValueError) as exc_info:
            group_indices([DataPoint(1, 1), DataPoint("x", 1)], quantized_key(1))
        assert exc_info.value.index == 1

    def test_slot_layout_rejects_bad_weight(self) -> None:
        with pytest.raises(InvalidValueError):
            slot_layout([1.0, 2.0], 100.0, {1.0: 0.0})

    def test_slot_layout_missing_weight_defaults(self) -> None:
        assert slot_layout([1.0, 2.0], 90.0, {1.0: 2.0}) == [(60.0, 30.0), (30.0, 75.0)]
