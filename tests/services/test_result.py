"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from chartnorm.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="normalize", data={"baseline": 60.0})
        assert result.ok is True
        assert result.op == "normalize"
        assert result.data == {"baseline": 60.0}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure("normalize", "EMPTY_DATASET", "Dataset contains no points")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "EMPTY_DATASET"
        assert result.error.detail == {}

    def test_failure_with_detail(self) -> None:
        result = ServiceResult.failure("stack", "INVALID_VALUE", "bad", {"index": 2})
        assert result.error is not None
        assert result.error.detail == {"index": 2}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="extent", data={"count": 3}, meta={"cache": "miss"})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["count"] == 3
        assert parsed["meta"]["cache"] == "miss"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code="E001", message="bad")
        assert error.detail == {}
