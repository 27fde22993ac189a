"""Value objects flowing in and out of the normalization engine.

Screen space has its origin at the top-left corner with y growing
downward. All objects are frozen; the engine builds fresh ones per call
and never mutates its input.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from chartnorm.domain.errors import InvalidValueError
from chartnorm.domain.types import BarDirection

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DataPoint:
    """One datum. ``id`` is opaque and only distinguishes overlay points."""

    x: Any
    y: Any
    id: Any = None


@dataclass(frozen=True)
class Geometry:
    """Size of the drawing area in screen units."""

    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                msg = f"Geometry {name} must be a number, got {value!r}"
                raise InvalidValueError(msg, value=value)
            if not math.isfinite(value) or value < 0:
                msg = f"Geometry {name} must be finite and >= 0, got {value!r}"
                raise InvalidValueError(msg, value=value)


def as_points(dataset: Iterable[DataPoint | Sequence[Any]]) -> tuple[DataPoint, ...]:
    """Coerce ``(x, y)`` / ``(x, y, id)`` tuples into :class:`DataPoint` objects.

    Raises:
        InvalidValueError: an item is neither a DataPoint nor a 2- or 3-item sequence.
    """
    points: list[DataPoint] = []
    for index, item in enumerate(dataset):
        if isinstance(item, DataPoint):
            points.append(item)
            continue
        is_pair = isinstance(item, Sequence) and not isinstance(item, (str, bytes))
        if not is_pair or len(item) not in (2, 3):
            msg = f"Point {index} must be a DataPoint or an (x, y[, id]) sequence, got {item!r}"
            raise InvalidValueError(msg, value=item, index=index)
        points.append(DataPoint(*item))
    return tuple(points)


# ---------------------------------------------------------------------------
# Extents and positions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Extent:
    """Inclusive numeric range over one axis."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            msg = f"Extent min {self.min} exceeds max {self.max}"
            raise ValueError(msg)

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return self.min == self.max

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class Point:
    """A screen-space coordinate."""

    x: float
    y: float


@dataclass(frozen=True)
class AxisLines:
    """Where the zero lines of both axes fall on screen.

    ``x_axis_y`` is the y coordinate of the horizontal axis (domain y == 0),
    ``y_axis_x`` the x coordinate of the vertical axis (domain x == 0).
    """

    x_axis_y: float
    y_axis_x: float


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScaleResult:
    """Render-ready positions for line and point charts."""

    positions: tuple[Point, ...]
    baseline: float
    x_extent: Extent
    y_extent: Extent
    axes: AxisLines

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BarSegment:
    """One bar, anchored on the baseline."""

    index: int
    value: float
    x: float  # slot centre
    slot_width: float
    length: float
    direction: BarDirection
    top: float
    bottom: float
    id: Any = None


@dataclass(frozen=True)
class BarResult:
    """Render-ready bars with the per-sign scale factors used to size them."""

    bars: tuple[BarSegment, ...]
    baseline: float
    positive_scale: float
    negative_scale: float
    y_extent: Extent
    axes: AxisLines

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for bar in data["bars"]:
            bar["direction"] = str(bar["direction"])
        return data


@dataclass(frozen=True)
class StackSegment:
    """One datum's slice of a stacked column.

    ``start``/``end`` are cumulative domain values; ``top``/``bottom`` are
    the matching screen coordinates.
    """

    index: int
    value: float
    start: float
    end: float
    top: float
    bottom: float
    id: Any = None


@dataclass(frozen=True)
class StackedGroup:
    """All points sharing one x-key, summed and placed in a slot.

    ``width`` and ``offset`` are screen units (slot width and slot centre).
    ``fraction`` is the share of the x-extent allotted to the key, so
    ``width == fraction * geometry.width``.
    """

    key: float
    sum: float
    width: float
    offset: float  # slot centre
    fraction: float = 1.0
    segments: tuple[StackSegment, ...] = ()


@dataclass(frozen=True)
class StackedResult:
    """Render-ready stacked columns."""

    groups: tuple[StackedGroup, ...]
    baseline: float
    y_extent: Extent
    axes: AxisLines

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
