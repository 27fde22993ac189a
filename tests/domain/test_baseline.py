"""Tests for baseline and axis line placement."""

from __future__ import annotations

import pytest

from chartnorm.domain.baseline import axis_lines, baseline_x, baseline_y
from chartnorm.domain.models import Extent, Geometry
from chartnorm.domain.scale import map_y


class TestBaselineY:
    def test_all_positive_sits_at_bottom(self) -> None:
        assert baseline_y(Extent(1.0, 3.0), 100.0) == 100.0

    def test_all_negative_sits_at_top(self) -> None:
        assert baseline_y(Extent(-3.0, -1.0), 100.0) == 0.0

    def test_mixed_sign_proportional(self) -> None:
        # positive portion 20/30 of 90px above the line, negative 10/30 below
        assert baseline_y(Extent(-10.0, 20.0), 90.0) == pytest.approx(60.0)

    def test_zero_minimum(self) -> None:
        assert baseline_y(Extent(0.0, 10.0), 100.0) == 100.0

    def test_zero_maximum(self) -> None:
        assert baseline_y(Extent(-10.0, 0.0), 100.0) == 0.0

    def test_matches_data_mapping_for_mixed_extent(self) -> None:
        extent = Extent(-4.0, 12.0)
        assert baseline_y(extent, 64.0) == map_y(0.0, extent, 64.0)

    def test_degenerate_zero_extent_centred(self) -> None:
        assert baseline_y(Extent(0.0, 0.0), 100.0) == 50.0

    def test_degenerate_positive_extent_at_bottom(self) -> None:
        assert baseline_y(Extent(5.0, 5.0), 100.0) == 100.0


class TestAxisLines:
    def test_both_axes(self) -> None:
        axes = axis_lines(Extent(-5.0, 5.0), Extent(-10.0, 20.0), Geometry(100.0, 90.0))
        assert axes.y_axis_x == pytest.approx(50.0)
        assert axes.x_axis_y == pytest.approx(60.0)

    def test_vertical_axis_clamped(self) -> None:
        assert baseline_x(Extent(2.0, 4.0), 100.0) == 0.0
        assert baseline_x(Extent(-4.0, -2.0), 100.0) == 100.0
