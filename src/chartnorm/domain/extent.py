"""Extent computation over projected values.

Pure functions, single linear scan, no dependency on input order.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from chartnorm.domain.errors import EmptyDatasetError, InvalidValueError
from chartnorm.domain.models import DataPoint, Extent
from chartnorm.domain.values import project_point


def compute_extent(values: Iterable[float]) -> Extent:
    """Return the ``[min, max]`` extent of *values*.

    Raises:
        EmptyDatasetError: *values* is empty.
        InvalidValueError: a value is NaN or infinite.
    """
    lo = math.inf
    hi = -math.inf
    count = 0
    for index, value in enumerate(values):
        if not math.isfinite(value):
            msg = f"Non-finite value {value!r} in extent input"
            raise InvalidValueError(msg, value=value, index=index)
        if value < lo:
            lo = value
        if value > hi:
            hi = value
        count += 1
    if count == 0:
        raise EmptyDatasetError
    return Extent(min=lo, max=hi)


def project_dataset(dataset: Sequence[DataPoint]) -> list[tuple[float, float]]:
    """Project every point, reporting the failing index on error."""
    if not dataset:
        raise EmptyDatasetError
    return [project_point(point, index=i) for i, point in enumerate(dataset)]


def dataset_extents(dataset: Sequence[DataPoint]) -> tuple[Extent, Extent]:
    """Return ``(x_extent, y_extent)`` for *dataset*."""
    return extents_of(project_dataset(dataset))


def extents_of(projected: Sequence[tuple[float, float]]) -> tuple[Extent, Extent]:
    """Return ``(x_extent, y_extent)`` for already-projected pairs."""
    return (
        compute_extent(x for x, _ in projected),
        compute_extent(y for _, y in projected),
    )


def stacked_extent(totals: Iterable[tuple[float, float]]) -> Extent:
    """Extent covered by stacked columns.

    *totals* holds one ``(positive_total, negative_total)`` pair per column.
    Stacks grow from zero, so zero is always inside the result.
    """
    lo = 0.0
    hi = 0.0
    seen = False
    for positive, negative in totals:
        seen = True
        hi = max(hi, positive)
        lo = min(lo, negative)
    if not seen:
        raise EmptyDatasetError
    if not (math.isfinite(lo) and math.isfinite(hi)):
        msg = f"Stacked totals overflow the float range: [{lo}, {hi}]"
        raise InvalidValueError(msg, value=(lo, hi))
    return Extent(min=lo, max=hi)
