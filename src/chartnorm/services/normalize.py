"""NormalizationService: the engine behind the ServiceResult contract.

The engine raises; this service is the caller that decides. Engine
failures become ``ok=False`` results with the error's code, successful
runs carry the render-ready payload plus advisory warnings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from chartnorm.domain.engine import NormalizedChart, normalize
from chartnorm.domain.errors import InvalidValueError, NormalizationError
from chartnorm.domain.extent import dataset_extents
from chartnorm.domain.models import DataPoint, Extent, Geometry, StackedResult, as_points
from chartnorm.domain.types import ChartKind
from chartnorm.services.cache import NormalizationCache, cache_key
from chartnorm.services.result import ServiceResult
from chartnorm.services.telemetry import get_current_span, trace_span, traced

if TYPE_CHECKING:
    from chartnorm.config.settings import ChartnormSettings

log = structlog.get_logger(__name__)

Dataset = Iterable[DataPoint | Sequence[Any]]


class NormalizationService:
    """Normalize datasets for rendering, with optional memoization.

    Usage::

        svc = NormalizationService(settings)
        result = svc.normalize(points, "bar", Geometry(300, 200))
        if result.ok:
            draw(result.data["bars"])
    """

    def __init__(
        self,
        settings: ChartnormSettings,
        cache: NormalizationCache | None = None,
    ) -> None:
        self._settings = settings
        if cache is None and settings.cache.enabled:
            cache = NormalizationCache(settings.cache.max_entries)
        self._cache = cache

    @property
    def cache(self) -> NormalizationCache | None:
        return self._cache

    def default_geometry(self) -> Geometry:
        return Geometry(self._settings.geometry.width, self._settings.geometry.height)

    # ── Operations ────────────────────────────────────────────────────

    @traced
    def normalize(
        self,
        dataset: Dataset,
        kind: ChartKind | str,
        geometry: Geometry | None = None,
        *,
        key_digits: int | None = None,
        widths: Mapping[float, float] | None = None,
    ) -> ServiceResult:
        """Normalize *dataset* for *kind* into screen coordinates."""
        op = "normalize"
        try:
            chart_kind = kind if isinstance(kind, ChartKind) else ChartKind.parse(kind)
        except ValueError:
            choices = ", ".join(k.value for k in ChartKind)
            return ServiceResult.failure(
                op, "INVALID_KIND", f"Unknown chart kind {kind!r} (expected one of: {choices})"
            )
        return self._run(op, dataset, chart_kind, geometry, key_digits=key_digits, widths=widths)

    @traced
    def stack(
        self,
        dataset: Dataset,
        geometry: Geometry | None = None,
        *,
        key_digits: int | None = None,
        widths: Mapping[float, float] | None = None,
    ) -> ServiceResult:
        """Stacked-bar normalization, reported under its own op name."""
        return self._run(
            "stack",
            dataset,
            ChartKind.STACKED_BAR,
            geometry,
            key_digits=key_digits,
            widths=widths,
        )

    @traced
    def extent(self, dataset: Dataset) -> ServiceResult:
        """Report the x and y extents of *dataset*."""
        op = "extent"
        try:
            points = as_points(dataset)
            with trace_span("extent"):
                x_extent, y_extent = dataset_extents(points)
        except NormalizationError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(points), "x": x_extent.to_dict(), "y": y_extent.to_dict()},
            warnings=_degenerate_warnings(x_extent, y_extent),
        )

    # ── Internals ─────────────────────────────────────────────────────

    def _run(
        self,
        op: str,
        dataset: Dataset,
        kind: ChartKind,
        geometry: Geometry | None,
        *,
        key_digits: int | None,
        widths: Mapping[float, float] | None,
    ) -> ServiceResult:
        digits = key_digits if key_digits is not None else self._settings.stacking.key_digits
        epsilon = self._settings.engine.epsilon
        try:
            points = as_points(dataset)
            geom = geometry or self.default_geometry()
            chart, cache_status = self._normalize_cached(
                points, kind, geom, epsilon=epsilon, key_digits=digits, widths=widths
            )
            with trace_span("warnings"):
                warnings = _chart_warnings(points, chart, key_digits=digits)
        except NormalizationError as exc:
            return self._failure(op, exc)

        span = get_current_span()
        if span is not None:
            span.annotate("points", len(points))
            span.annotate("kind", kind.value)

        data = {"kind": kind.value, "width": geom.width, "height": geom.height, **chart.to_dict()}
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={"cache": cache_status},
        )

    def _normalize_cached(
        self,
        points: Sequence[DataPoint],
        kind: ChartKind,
        geometry: Geometry,
        **options: Any,
    ) -> tuple[NormalizedChart, str]:
        if self._cache is None:
            with trace_span("engine"):
                return normalize(points, geometry, kind, **options), "disabled"

        with trace_span("cache_key"):
            key = cache_key(kind.value, points, geometry, **options)
        cached = self._cache.get(key)
        if cached is not None:
            log.debug("cache.hit", kind=kind.value, points=len(points))
            return cached, "hit"

        log.debug("cache.miss", kind=kind.value, points=len(points))
        with trace_span("engine"):
            chart = normalize(points, geometry, kind, **options)
        self._cache.put(key, chart)
        return chart, "miss"

    @staticmethod
    def _failure(op: str, exc: NormalizationError) -> ServiceResult:
        detail = exc.detail() if isinstance(exc, InvalidValueError) else {}
        log.warning("normalization.failed", op=op, code=exc.code, error=str(exc))
        return ServiceResult.failure(op, exc.code, str(exc), detail)


def _degenerate_warnings(x_extent: Extent, y_extent: Extent) -> list[str]:
    warnings: list[str] = []
    if x_extent.is_degenerate:
        warnings.append(f"Degenerate x extent ({x_extent.min}); points are centred horizontally")
    if y_extent.is_degenerate:
        warnings.append(f"Degenerate y extent ({y_extent.min}); points are centred vertically")
    return warnings


def _chart_warnings(
    points: Sequence[DataPoint],
    chart: NormalizedChart,
    *,
    key_digits: int | None,
) -> list[str]:
    if isinstance(chart, StackedResult):
        if key_digits is None and any(not float(group.key).is_integer() for group in chart.groups):
            return [
                "Stacking on non-integral x keys without quantization; "
                "set key_digits to group nearly-equal keys"
            ]
        return []
    x_extent, y_extent = dataset_extents(points)
    return _degenerate_warnings(x_extent, y_extent)
