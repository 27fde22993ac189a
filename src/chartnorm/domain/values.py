"""Projection of domain values onto numbers.

Any ordered domain value can be plotted as long as it projects to a finite
float. Numbers project to themselves, dates and times to seconds or ordinals,
and anything else must implement :class:`Plottable`.

INVARIANT: Equal values project equally. Projection is pure and never
consults state outside its argument.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from chartnorm.domain.errors import InvalidValueError

if TYPE_CHECKING:
    from chartnorm.domain.models import DataPoint


@runtime_checkable
class Plottable(Protocol):
    """A domain value that knows its own numeric projection."""

    def to_numeric(self) -> float: ...


def _raw_projection(value: Any) -> float:
    # bool is an int subclass; plotting True/False is almost always a mistake.
    if isinstance(value, bool):
        msg = f"Cannot plot boolean value {value!r}"
        raise InvalidValueError(msg, value=value)
    if isinstance(value, (int, float, Decimal, Fraction)):
        return float(value)
    if isinstance(value, datetime):
        moment = value if value.tzinfo is not None else value.replace(tzinfo=UTC)
        return moment.timestamp()
    if isinstance(value, date):
        return float(value.toordinal())
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, Plottable):
        return float(value.to_numeric())
    msg = f"Cannot project value of type {type(value).__name__}"
    raise InvalidValueError(msg, value=value)


def project(value: Any, *, index: int | None = None) -> float:
    """Return the finite numeric projection of *value*.

    Raises:
        InvalidValueError: unsupported type, or the projection is NaN/Infinity.
    """
    try:
        numeric = _raw_projection(value)
    except InvalidValueError as exc:
        if index is not None and exc.index is None:
            exc.index = index
        raise
    except (TypeError, ValueError, OverflowError) as exc:
        msg = f"Projection of {value!r} failed: {exc}"
        raise InvalidValueError(msg, value=value, index=index) from exc
    if not math.isfinite(numeric):
        msg = f"Value {value!r} projects to non-finite {numeric}"
        raise InvalidValueError(msg, value=value, index=index)
    return numeric


def project_point(point: DataPoint, *, index: int | None = None) -> tuple[float, float]:
    """Project both coordinates of *point*."""
    return project(point.x, index=index), project(point.y, index=index)
