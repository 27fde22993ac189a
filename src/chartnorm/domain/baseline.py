"""Zero-line placement.

INVARIANT: The baseline uses exactly the mapping applied to data points
(:func:`chartnorm.domain.scale.map_y`) against the same y-extent, clamped
into the drawing area. Axis lines reuse the same functions.
"""

from __future__ import annotations

from chartnorm.domain.models import AxisLines, Extent, Geometry
from chartnorm.domain.scale import EPSILON, clamp, map_x, map_y


def baseline_y(y_extent: Extent, height: float, *, epsilon: float = EPSILON) -> float:
    """Screen y of domain value zero.

    All-positive extents put it at the bottom (*height*), all-negative
    extents at the top (0), mixed extents proportionally in between.
    """
    return clamp(map_y(0.0, y_extent, height, epsilon=epsilon), 0.0, height)


def baseline_x(x_extent: Extent, width: float, *, epsilon: float = EPSILON) -> float:
    """Screen x of domain value zero, clamped into ``[0, width]``."""
    return clamp(map_x(0.0, x_extent, width, epsilon=epsilon), 0.0, width)


def axis_lines(
    x_extent: Extent,
    y_extent: Extent,
    geometry: Geometry,
    *,
    epsilon: float = EPSILON,
) -> AxisLines:
    """Both zero lines for one render pass."""
    return AxisLines(
        x_axis_y=baseline_y(y_extent, geometry.height, epsilon=epsilon),
        y_axis_x=baseline_x(x_extent, geometry.width, epsilon=epsilon),
    )
