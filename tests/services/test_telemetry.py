"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from tiresolve.config.models import SearchConfig
from tiresolve.config.settings import TiSettings
from tiresolve.services.resolve import ResolveService
from tiresolve.services.result import ServiceError, ServiceResult
from tiresolve.services.telemetry import (
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
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()
    _current_span.set(None)


# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "duration_ms" in d
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_with_children(self) -> None:
        root = Span(name="root")
        child = Span(name="child", parent=root)
        root.children.append(child)
        child.end()
        root.end()
        d = root.to_dict()
        assert [c["name"] for c in d["children"]] == ["child"]

    def test_child_attaches_to_parent(self) -> None:
        root = Span(name="root")
        child = root.child("search")
        assert child.parent is root
        assert root.children == [child]

    def test_annotate(self) -> None:
        span = Span(name="test")
        span.annotate("attempts", 4)
        span.end()
        assert span.to_dict()["annotations"] == {"attempts": 4}


# ── trace_span tests ─────────────────────────────────────────────────


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_nested_spans(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("a"):
                with trace_span("b"):
                    pass
            assert root.children[0].name == "a"
            assert root.children[0].children[0].name == "b"
            assert root.children[0].end_time is not None
        finally:
            _current_span.reset(token)


# ── @traced decorator tests ──────────────────────────────────────────


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert my_func().meta is None

    def test_injects_meta_when_enabled(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            with trace_span("stage"):
                pass
            return ServiceResult(ok=True, op="test", meta={"existing": "data"})

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert result.meta["existing"] == "data"
        assert result.meta["telemetry"]["name"].endswith("my_func")
        assert result.meta["telemetry"]["children"][0]["name"] == "stage"

    def test_non_service_result_passthrough(self) -> None:
        @traced
        def my_func() -> str:
            return "hello"

        enable_telemetry()
        assert my_func() == "hello"

    def test_exception_propagates(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            msg = "boom"
            raise ValueError(msg)

        enable_telemetry()
        with pytest.raises(ValueError, match="boom"):
            my_func()

    def test_error_result_gets_telemetry(self) -> None:
        @traced
        def my_func() -> ServiceResult:
            return ServiceResult(
                ok=False,
                op="test",
                error=ServiceError(code="HARD", message="oops"),
            )

        enable_telemetry()
        result = my_func()
        assert result.meta is not None
        assert "telemetry" in result.meta


class TestGetCurrentSpan:
    def test_returns_none_when_disabled(self) -> None:
        assert get_current_span() is None

    def test_returns_span_when_enabled(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            assert get_current_span() is root
        finally:
            _current_span.reset(token)


# ── Spans on the real service ────────────────────────────────────────


class TestTracedOnResolveService:
    def test_resolve_has_search_span(
        self, tmp_path: Path, make_entry: Callable[..., Path]
    ) -> None:
        make_entry(tmp_path, "xterm")
        settings = TiSettings(search=SearchConfig(terminfo="", terminfo_dirs=str(tmp_path)))
        svc = ResolveService(settings, environ={})

        enable_telemetry()
        result = svc.resolve("xterm")
        assert result.ok
        assert result.meta is not None
        tel = result.meta["telemetry"]
        assert "ResolveService.resolve" in tel["name"]
        search = tel["children"][0]
        assert search["name"] == "search"
        assert search["annotations"] == {"attempts": 1, "step": "fallback"}

    def test_home_step_is_recorded(
        self, tmp_path: Path, make_entry: Callable[..., Path]
    ) -> None:
        make_entry(tmp_path / "home" / ".terminfo", "xterm")
        settings = TiSettings(search=SearchConfig(terminfo="", terminfo_dirs=""))
        svc = ResolveService(settings, environ={"HOME": str(tmp_path / "home")})

        enable_telemetry()
        result = svc.resolve("xterm")
        assert result.ok
        assert result.meta is not None
        assert result.meta["telemetry"]["children"][0]["annotations"]["step"] == "HOME"

    def test_disabled_telemetry_leaves_no_meta(
        self, tmp_path: Path, make_entry: Callable[..., Path]
    ) -> None:
        make_entry(tmp_path, "xterm")
        settings = TiSettings(search=SearchConfig(terminfo="", terminfo_dirs=str(tmp_path)))
        result = ResolveService(settings, environ={}).resolve("xterm")
        assert result.ok
        assert result.meta is None
