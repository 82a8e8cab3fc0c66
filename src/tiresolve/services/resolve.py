"""ResolveService — terminfo lookups as ServiceResults.

Translates resolver outcomes into the service contract: a loaded record
becomes ``ok=True`` with its location and size; a failure becomes a
:class:`ServiceError` whose ``code`` is the :class:`ErrorKind` value.
Soft failures along the way only appear in ``data["attempts"]``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO

from tiresolve.domain.outcome import Attempt, Failure, LoadedRecord, Outcome, errno_name
from tiresolve.services.base import BaseService
from tiresolve.services.result import ServiceError, ServiceResult
from tiresolve.services.telemetry import trace_span, traced


class ResolveService(BaseService):
    """Resolve, inspect, and read terminfo records."""

    @traced
    def resolve(self, name: str, *, output: Path | None = None) -> ServiceResult:
        """Resolve *name* through the search precedence chain."""
        trace: list[Attempt] = []
        with trace_span("search") as span:
            outcome = self.resolver.resolve(name, trace=trace)
            if span:
                span.annotate("attempts", len(trace))
        return self._result("resolve", outcome, trace, name=name, output=output)

    @traced
    def resolve_env(self, *, output: Path | None = None) -> ServiceResult:
        """Resolve the entry named by ``$TERM``."""
        trace: list[Attempt] = []
        with trace_span("search") as span:
            outcome = self.resolver.resolve_env(trace=trace)
            if span:
                span.annotate("attempts", len(trace))
        term = self.resolver.environ.get("TERM")
        return self._result("resolve_env", outcome, trace, name=term, output=output)

    @traced
    def search_order(self, name: str | None = None) -> ServiceResult:
        """List the directories a lookup would probe, in order."""
        with trace_span("expand"):
            entries = self.resolver.search_order(name)
        data: dict[str, Any] = {"items": entries, "count": len(entries)}
        if name is not None:
            data["name"] = name
        return ServiceResult(ok=True, op="search_order", data=data)

    @traced
    def load_file(self, path: Path) -> ServiceResult:
        """Read a record from an explicit file."""
        with trace_span("read"):
            outcome = self.resolver.load_file(path)
        return self._result("load_file", outcome, [], name=None, output=None)

    @traced
    def load_stream(self, stream: BinaryIO, *, label: str = "<stdin>") -> ServiceResult:
        """Read a record from an open binary stream."""
        with trace_span("read"):
            outcome = self.resolver.load_stream(stream, label=label)
        return self._result("load_stream", outcome, [], name=None, output=None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _result(
        self,
        op: str,
        outcome: Outcome,
        trace: list[Attempt],
        *,
        name: str | None,
        output: Path | None,
    ) -> ServiceResult:
        attempts = [a.to_dict() for a in trace]
        if isinstance(outcome, Failure):
            return _error_result(op, outcome, attempts)

        warnings: list[str] = []
        if outcome.truncated:
            warnings.append(f"Record truncated at {outcome.size} bytes")

        data: dict[str, Any] = {
            "path": outcome.path,
            "layout": str(outcome.layout) if outcome.layout else None,
            "size": outcome.size,
            "truncated": outcome.truncated,
        }
        if name is not None:
            data = {"name": name, **data}
        if attempts:
            data["attempts"] = attempts

        if output is not None:
            written = write_record(outcome, output)
            if isinstance(written, ServiceError):
                return ServiceResult(ok=False, op=op, error=written)
            data["output"] = str(written)

        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)


def _error_result(op: str, failure: Failure, attempts: list[dict[str, Any]]) -> ServiceResult:
    detail: dict[str, Any] = {"errno": errno_name(failure.errno)}
    if failure.path is not None:
        detail["path"] = failure.path
    if attempts:
        detail["attempts"] = attempts
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=str(failure.kind), message=failure.message, detail=detail),
    )


def write_record(record: LoadedRecord, output: Path) -> Path | ServiceError:
    """Write the raw bytes of *record* to *output*."""
    try:
        output.write_bytes(record.data)
    except OSError as exc:
        return ServiceError(
            code="WRITE_FAILED",
            message=f"Cannot write {output}: {exc.strerror or exc}",
            detail={"errno": errno_name(exc.errno), "path": str(output)},
        )
    return output
