"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from chartnorm.services.result import ServiceResult
from chartnorm.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="s").duration_ms == 0.0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_annotate(self) -> None:
        span = Span(name="s")
        span.annotate("points", 3)
        assert span.to_dict()["annotations"] == {"points": 3}


class TestTraced:
    def test_disabled_is_passthrough(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="op")

        assert op().meta is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            with trace_span("engine") as span:
                assert span is not None
            return ServiceResult(ok=True, op="op", meta={"cache": "miss"})

        result = op()
        assert result.meta is not None
        assert result.meta["cache"] == "miss"
        tree = result.meta["telemetry"]
        assert tree["name"].endswith("op")
        assert [child["name"] for child in tree["children"]] == ["engine"]

    def test_exception_propagates_and_resets(self) -> None:
        enable_telemetry()

        @traced
        def boom() -> ServiceResult:
            raise RuntimeError("x")

        with pytest.raises(RuntimeError):
            boom()
        assert _current_span.get() is None

    def test_non_result_return_untouched(self) -> None:
        enable_telemetry()

        @traced
        def plain() -> int:
            return 7

        assert plain() == 7


class TestTraceSpan:
    def test_yields_none_when_disabled(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_yields_none_without_parent(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None

    def test_get_current_span_disabled(self) -> None:
        assert get_current_span() is None
