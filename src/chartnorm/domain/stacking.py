"""Stack aggregation for stacked bar charts.

Points are grouped by exact equality of a key (the x projection by
default) in first-seen order. Floating-point x values rarely compare
equal after arithmetic, so callers should pass ``key_digits`` or an
explicit ``key`` function when x is not already discrete.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence

from chartnorm.domain.baseline import axis_lines, baseline_y
from chartnorm.domain.errors import InvalidValueError
from chartnorm.domain.extent import compute_extent, project_dataset, stacked_extent
from chartnorm.domain.models import (
    DataPoint,
    Extent,
    Geometry,
    StackedGroup,
    StackedResult,
    StackSegment,
)
from chartnorm.domain.scale import EPSILON, map_y
from chartnorm.domain.values import project

KeyFunc = Callable[[DataPoint], float]


def quantized_key(digits: int) -> KeyFunc:
    """Key function rounding the x projection to *digits* decimal places."""

    def key(point: DataPoint) -> float:
        # +0.0 folds -0.0 into 0.0 so both land in one group.
        return round(project(point.x), digits) + 0.0

    return key


def _default_key(point: DataPoint) -> float:
    return project(point.x)


def group_indices(
    dataset: Sequence[DataPoint],
    key: KeyFunc,
) -> dict[float, list[int]]:
    """Map each distinct key to the input indices carrying it, in first-seen order."""
    groups: dict[float, list[int]] = {}
    for index, point in enumerate(dataset):
        try:
            k = key(point)
        except InvalidValueError as exc:
            if exc.index is None:
                exc.index = index
            raise
        groups.setdefault(k, []).append(index)
    return groups


def slot_weights(
    keys: Sequence[float],
    widths: Mapping[float, float] | None = None,
) -> list[float]:
    """Relative slot weight per key; keys missing from *widths* weigh 1.0."""
    weights: list[float] = []
    for k in keys:
        weight = 1.0 if widths is None else float(widths.get(k, 1.0))
        if not math.isfinite(weight) or weight <= 0:
            msg = f"Slot weight for key {k!r} must be finite and > 0, got {weight!r}"
            raise InvalidValueError(msg, value=weight)
        weights.append(weight)
    return weights


def slot_layout(
    keys: Sequence[float],
    width: float,
    widths: Mapping[float, float] | None = None,
) -> list[tuple[float, float]]:
    """Return ``(slot_width, slot_centre)`` per key.

    Slots are equal unless *widths* gives relative weights.
    """
    weights = slot_weights(keys, widths)
    total = sum(weights)

    layout: list[tuple[float, float]] = []
    cursor = 0.0
    for weight in weights:
        slot = width * weight / total
        layout.append((slot, cursor + slot / 2))
        cursor += slot
    return layout


def _segments(
    indices: Sequence[int],
    ys: Sequence[float],
) -> tuple[list[tuple[int, float, float, float]], float, float]:
    """Cumulative ``(index, value, start, end)`` per point plus column totals.

    Positive values stack upward from zero, negative values downward.
    """
    positive = 0.0
    negative = 0.0
    out: list[tuple[int, float, float, float]] = []
    for index in indices:
        value = ys[index]
        if value >= 0:
            start, positive = positive, positive + value
            out.append((index, value, start, positive))
        else:
            start, negative = negative, negative + value
            out.append((index, value, start, negative))
    return out, positive, negative


def stack(
    dataset: Sequence[DataPoint],
    geometry: Geometry,
    *,
    key: KeyFunc | None = None,
    widths: Mapping[float, float] | None = None,
    key_digits: int | None = None,
    epsilon: float = EPSILON,
) -> StackedResult:
    """Group, sum, and place stacked columns.

    Args:
        dataset: Points to stack; must not be empty.
        geometry: Drawing area size.
        key: Explicit key extraction. Takes precedence over *key_digits*.
        widths: Optional relative slot weight per key.
        key_digits: Round x projections to this many decimals before grouping.
        epsilon: Minimum range floor for the y mapping.
    """
    projected = project_dataset(dataset)
    ys = [y for _, y in projected]
    if key is None:
        key = quantized_key(key_digits) if key_digits is not None else _default_key

    grouped = group_indices(dataset, key)
    columns = [_segments(indices, ys) for indices in grouped.values()]
    y_extent = stacked_extent((pos, neg) for _, pos, neg in columns)
    baseline = baseline_y(y_extent, geometry.height, epsilon=epsilon)
    weights = slot_weights(list(grouped), widths)
    total = sum(weights)
    fractions = [weight / total for weight in weights]
    layout = slot_layout(list(grouped), geometry.width, widths)

    groups: list[StackedGroup] = []
    for k, indices, (cells, _, _), (slot, centre), fraction in zip(
        grouped, grouped.values(), columns, layout, fractions, strict=True
    ):
        segments = tuple(
            _stack_segment(index, value, start, end, dataset, y_extent, geometry, epsilon)
            for index, value, start, end in cells
        )
        groups.append(
            StackedGroup(
                key=k,
                sum=_ordered_sum(ys, indices),
                width=slot,
                offset=centre,
                fraction=fraction,
                segments=segments,
            )
        )

    x_extent = compute_extent(project(k) for k in grouped)
    return StackedResult(
        groups=tuple(groups),
        baseline=baseline,
        y_extent=y_extent,
        axes=axis_lines(x_extent, y_extent, geometry, epsilon=epsilon),
    )


def _ordered_sum(ys: Sequence[float], indices: Sequence[int]) -> float:
    total = 0.0
    for index in indices:
        total += ys[index]
    return total


def _stack_segment(
    index: int,
    value: float,
    start: float,
    end: float,
    dataset: Sequence[DataPoint],
    y_extent: Extent,
    geometry: Geometry,
    epsilon: float,
) -> StackSegment:
    return StackSegment(
        index=index,
        value=value,
        start=start,
        end=end,
        top=map_y(max(start, end), y_extent, geometry.height, epsilon=epsilon),
        bottom=map_y(min(start, end), y_extent, geometry.height, epsilon=epsilon),
        id=dataset[index].id,
    )
