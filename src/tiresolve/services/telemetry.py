"""Timing spans for service operations.

``--verbose`` switches telemetry on. Each ``@traced`` service call then
becomes a root span, ``trace_span`` blocks nest under it, and the finished
tree lands in ``ServiceResult.meta["telemetry"]``. Code below the service
layer annotates the open span through :func:`get_current_span`; the
resolver uses it to record which search step produced the record.

With telemetry off every entry point costs one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from tiresolve.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


@dataclass
class Span:
    """A named, timed region with annotations and nested child spans."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def child(self, name: str) -> Span:
        span = Span(name=name, parent=self)
        self.children.append(span)
        return span

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The innermost open span, or None when telemetry is off or no span is open."""
    if not _enabled.get():
        return None
    return _current_span.get()


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child of the current span for the duration of the block.

    Yields None outside a traced call.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return

    span = parent.child(name)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Run a service method as a root span and attach the tree to its result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _current_span.set(span)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            span.end()
            _current_span.reset(token)
            _log_span(span, ok=ok)

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def _log_span(span: Span, *, ok: bool) -> None:
    structlog.get_logger("tiresolve.telemetry").debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 2),
        ok=ok,
        steps=[c.name for c in span.children],
    )
