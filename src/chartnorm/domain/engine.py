"""Normalization engine: one entry point for every chart kind.

INVARIANT: ``normalize`` is a pure function of its arguments. Identical
inputs yield identical output; nothing is cached or retained here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from chartnorm.domain.bars import scale_bars
from chartnorm.domain.baseline import axis_lines, baseline_y
from chartnorm.domain.extent import extents_of, project_dataset
from chartnorm.domain.models import (
    BarResult,
    DataPoint,
    Geometry,
    Point,
    ScaleResult,
    StackedResult,
    as_points,
)
from chartnorm.domain.scale import EPSILON, map_x, map_y
from chartnorm.domain.stacking import KeyFunc, stack
from chartnorm.domain.types import ChartKind

NormalizedChart = ScaleResult | BarResult | StackedResult


def scale_positions(
    dataset: Sequence[DataPoint],
    geometry: Geometry,
    *,
    epsilon: float = EPSILON,
) -> ScaleResult:
    """Map every point onto the drawing area (line and point charts)."""
    projected = project_dataset(dataset)
    x_extent, y_extent = extents_of(projected)
    positions = tuple(
        Point(
            x=map_x(x, x_extent, geometry.width, epsilon=epsilon),
            y=map_y(y, y_extent, geometry.height, epsilon=epsilon),
        )
        for x, y in projected
    )
    return ScaleResult(
        positions=positions,
        baseline=baseline_y(y_extent, geometry.height, epsilon=epsilon),
        x_extent=x_extent,
        y_extent=y_extent,
        axes=axis_lines(x_extent, y_extent, geometry, epsilon=epsilon),
    )


def normalize(
    dataset: Iterable[DataPoint | Sequence[Any]],
    geometry: Geometry,
    kind: ChartKind | str,
    *,
    epsilon: float = EPSILON,
    key: KeyFunc | None = None,
    widths: Mapping[float, float] | None = None,
    key_digits: int | None = None,
) -> NormalizedChart:
    """Produce render-ready coordinates for *dataset*.

    Args:
        dataset: ``DataPoint`` objects or ``(x, y[, id])`` tuples.
        geometry: Drawing area size.
        kind: Chart kind; strings are parsed with :meth:`ChartKind.parse`.
        epsilon: Minimum range floor.
        key, widths, key_digits: Stacking options, ignored by other kinds.

    Raises:
        EmptyDatasetError: *dataset* has no points.
        InvalidValueError: a value cannot be projected to a finite number.
    """
    chart_kind = kind if isinstance(kind, ChartKind) else ChartKind.parse(kind)
    points = as_points(dataset)

    if chart_kind in (ChartKind.LINE, ChartKind.POINT):
        return scale_positions(points, geometry, epsilon=epsilon)
    if chart_kind is ChartKind.BAR:
        return scale_bars(points, geometry, epsilon=epsilon)
    return stack(
        points,
        geometry,
        key=key,
        widths=widths,
        key_digits=key_digits,
        epsilon=epsilon,
    )
