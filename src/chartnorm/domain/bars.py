"""Sign-aware bar scaling.

Bars grow from the baseline toward their value. Positive and negative
bars use independent scale factors: the tallest positive value fills the
space above the baseline and the deepest negative value fills the space
below it, whatever the magnitude on the other side.
"""

from __future__ import annotations

from collections.abc import Sequence

from chartnorm.domain.baseline import axis_lines, baseline_y
from chartnorm.domain.extent import extents_of, project_dataset
from chartnorm.domain.models import BarResult, BarSegment, DataPoint, Extent, Geometry
from chartnorm.domain.scale import EPSILON
from chartnorm.domain.types import BarDirection


def bar_scales(
    y_extent: Extent,
    baseline: float,
    height: float,
    *,
    epsilon: float = EPSILON,
) -> tuple[float, float]:
    """Return ``(positive_scale, negative_scale)`` in pixels per domain unit."""
    above = baseline
    below = height - baseline
    positive_scale = above / max(y_extent.max, epsilon)
    negative_scale = below / max(abs(y_extent.min), epsilon)
    return positive_scale, negative_scale


def scale_bar(
    value: float,
    baseline: float,
    positive_scale: float,
    negative_scale: float,
) -> tuple[float, BarDirection, float, float]:
    """Return ``(length, direction, top, bottom)`` for one bar."""
    if value >= 0:
        length = value * positive_scale
        return length, BarDirection.UP, baseline - length, baseline
    length = abs(value) * negative_scale
    return length, BarDirection.DOWN, baseline, baseline + length


def scale_bars(
    dataset: Sequence[DataPoint],
    geometry: Geometry,
    *,
    epsilon: float = EPSILON,
) -> BarResult:
    """Size one bar per input index, in input order.

    Bars take equal slots across the width; ``x`` is the slot centre.
    """
    projected = project_dataset(dataset)
    x_extent, y_extent = extents_of(projected)
    baseline = baseline_y(y_extent, geometry.height, epsilon=epsilon)
    positive_scale, negative_scale = bar_scales(
        y_extent, baseline, geometry.height, epsilon=epsilon
    )
    slot_width = geometry.width / len(projected)

    bars: list[BarSegment] = []
    for index, ((_, value), point) in enumerate(zip(projected, dataset, strict=True)):
        length, direction, top, bottom = scale_bar(
            value, baseline, positive_scale, negative_scale
        )
        bars.append(
            BarSegment(
                index=index,
                value=value,
                x=(index + 0.5) * slot_width,
                slot_width=slot_width,
                length=length,
                direction=direction,
                top=top,
                bottom=bottom,
                id=point.id,
            )
        )

    return BarResult(
        bars=tuple(bars),
        baseline=baseline,
        positive_scale=positive_scale,
        negative_scale=negative_scale,
        y_extent=y_extent,
        axes=axis_lines(x_extent, y_extent, geometry, epsilon=epsilon),
    )
