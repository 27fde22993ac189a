"""Linear mapping from a domain extent onto a screen extent.

x grows rightward from 0; y is inverted so larger values sit higher on
screen. A range narrower than ``EPSILON`` is floored to it, so degenerate
extents never divide by zero.
"""

from __future__ import annotations

from chartnorm.domain.models import Extent

EPSILON = 1e-3


def normalized(value: float, extent: Extent, *, epsilon: float = EPSILON) -> float:
    """Position of *value* within *extent* as a fraction (0 at min, 1 at max).

    A degenerate extent centres its single value at 0.5; other values move
    away from the centre at the ``epsilon`` floor rate.
    """
    # Halved operands keep ``max - min`` finite for extents near +/-1e308.
    offset = value / 2 - extent.min / 2
    if extent.is_degenerate:
        return 0.5 + offset / (epsilon / 2)
    return offset / max(extent.max / 2 - extent.min / 2, epsilon / 2)


def map_linear(value: float, extent: Extent, target: float, *, epsilon: float = EPSILON) -> float:
    """Map *value* onto ``[0, target]``."""
    return normalized(value, extent, epsilon=epsilon) * target


def map_x(value: float, extent: Extent, width: float, *, epsilon: float = EPSILON) -> float:
    """Horizontal screen coordinate of *value*."""
    return map_linear(value, extent, width, epsilon=epsilon)


def map_y(value: float, extent: Extent, height: float, *, epsilon: float = EPSILON) -> float:
    """Vertical screen coordinate of *value* (inverted axis)."""
    return height - map_linear(value, extent, height, epsilon=epsilon)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
