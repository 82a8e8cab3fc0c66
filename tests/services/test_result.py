"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from tiresolve.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="resolve", data={"path": "/t/x/xterm"})
        assert result.ok is True
        assert result.op == "resolve"
        assert result.data == {"path": "/t/x/xterm"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="Terminfo entry not found: xterm")
        result = ServiceResult(ok=False, op="resolve", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="test", data={"size": 12}, meta={"duration_ms": 42})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["size"] == 12
        assert parsed["meta"]["duration_ms"] == 42

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="HARD",
            message="Input/output error",
            detail={"errno": "EIO", "path": "/t/x/xterm"},
        )
        assert error.detail["errno"] == "EIO"

    def test_default_detail(self) -> None:
        assert ServiceError(code="HARD", message="bad").detail == {}
