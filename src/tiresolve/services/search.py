"""TerminfoResolver — the precedence-ordered terminfo search.

Search order (first success wins):

1. ``$TERMINFO`` — a single directory; any failure moves on.
2. ``$HOME/.terminfo`` — a hard failure aborts the search.
3. ``$TERMINFO_DIRS`` — a directory list; a hard failure aborts.
4. The configured fallback list — its outcome is final.

The compiled-in locations come from :class:`SearchConfig` and are fixed
for the lifetime of a resolver. The environment is read on every call.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO

from tiresolve.config.models import SearchConfig
from tiresolve.domain.names import validate_name
from tiresolve.domain.outcome import (
    Attempt,
    ErrorKind,
    Failure,
    Layout,
    LoadedRecord,
    Outcome,
    SearchStep,
)
from tiresolve.infrastructure.path_builder import Decoder, PathBuilder, Reader
from tiresolve.infrastructure.reader import read_stream
from tiresolve.infrastructure.walker import WalkState, iter_directories, search_list
from tiresolve.services.telemetry import get_current_span

logger = logging.getLogger(__name__)

HOME_MIDDLE = ".terminfo"


class TerminfoResolver:
    """Locate and load terminfo records.

    Args:
        config: Compiled-in search locations and errno policy.
        environ: Environment mapping; defaults to ``os.environ``.
        decoder: Record decoder handed the raw bytes of each hit.
        reader: Override for the file reader (tests).
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        decoder: Decoder | None = None,
        reader: Reader | None = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.environ = os.environ if environ is None else environ
        self.policy = self.config.errno_policy()
        self.builder = PathBuilder(
            self.policy,
            capacity=self.config.max_record_size,
            decoder=decoder,
            reader=reader,
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, name: str, *, trace: list[Attempt] | None = None) -> Outcome:
        """Resolve *name* through the full precedence chain."""
        problem = validate_name(name)
        if problem is not None:
            return Failure(kind=ErrorKind.INVALID_INPUT, message=problem, errno=errno.EINVAL)

        env = self.environ

        terminfo = env.get("TERMINFO")
        if terminfo is not None:
            outcome = self.builder.build_and_load(terminfo, None, name, trace=trace)
            if isinstance(outcome, LoadedRecord):
                return _settled(SearchStep.TERMINFO, outcome)
            logger.debug("TERMINFO lookup failed: %s", outcome.message)

        home = env.get("HOME")
        if home is not None:
            outcome = self.builder.build_and_load(home, HOME_MIDDLE, name, trace=trace)
            if isinstance(outcome, LoadedRecord) or not outcome.recoverable:
                return _settled(SearchStep.HOME, outcome)

        terminfo_dirs = env.get("TERMINFO_DIRS")
        if terminfo_dirs is not None:
            outcome = self._search_list(terminfo_dirs, name, trace)
            if isinstance(outcome, LoadedRecord) or not outcome.recoverable:
                return _settled(SearchStep.TERMINFO_DIRS, outcome)

        outcome = self._search_list(self.config.terminfo_dirs, name, trace)
        if isinstance(outcome, Failure) and outcome.recoverable:
            return Failure.not_found(f"Terminfo entry not found: {name}")
        return _settled(SearchStep.FALLBACK, outcome)

    def resolve_env(self, *, trace: list[Attempt] | None = None) -> Outcome:
        """Resolve the entry named by ``$TERM``."""
        term = self.environ.get("TERM")
        if term is None:
            return Failure.not_found("TERM is not set")
        return self.resolve(term, trace=trace)

    def _search_list(self, dir_list: str, name: str, trace: list[Attempt] | None) -> Outcome:
        return search_list(
            self.builder,
            dir_list,
            name,
            default_dir=self.config.terminfo,
            trace=trace,
        )

    # ------------------------------------------------------------------
    # Explicit sources
    # ------------------------------------------------------------------

    def load_file(self, path: str | Path) -> Outcome:
        """Read and decode the record at *path*, bypassing the search."""
        return self.builder.load(path)

    def load_stream(self, stream: BinaryIO, *, label: str = "<stream>") -> Outcome:
        """Read and decode a record from an open binary stream."""
        try:
            data = read_stream(stream, self.builder.capacity)
        except OSError as exc:
            return Failure(
                kind=ErrorKind.HARD,
                message=exc.strerror or str(exc),
                errno=exc.errno,
                path=label,
            )
        try:
            decoded = self.builder.decode(data)
        except ValueError as exc:
            return Failure(
                kind=ErrorKind.HARD,
                message=f"Malformed terminfo record: {exc}",
                errno=errno.EINVAL,
                path=label,
            )
        return LoadedRecord(path=label, layout=None, data=data, decoded=decoded)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def search_order(self, name: str | None = None) -> list[dict[str, Any]]:
        """The directories :meth:`resolve` would probe, in order.

        When *name* is given, each directory also lists its candidate
        paths under both layouts.
        """
        env = self.environ
        steps: list[tuple[SearchStep, list[str], str | None]] = []
        if env.get("TERMINFO") is not None:
            steps.append((SearchStep.TERMINFO, [env["TERMINFO"]], None))
        if env.get("HOME") is not None:
            steps.append((SearchStep.HOME, [env["HOME"]], HOME_MIDDLE))
        if env.get("TERMINFO_DIRS") is not None:
            steps.append((SearchStep.TERMINFO_DIRS, self._expand(env["TERMINFO_DIRS"]), None))
        steps.append((SearchStep.FALLBACK, self._expand(self.config.terminfo_dirs), None))

        entries: list[dict[str, Any]] = []
        for step, directories, middle in steps:
            for directory in directories:
                entry: dict[str, Any] = {"step": str(step), "directory": directory}
                if middle is not None:
                    entry["directory"] = f"{directory}/{middle}"
                if name is not None:
                    entry["candidates"] = [
                        self.builder.candidate_path(directory, middle, name, layout)
                        for layout in Layout
                    ]
                entries.append(entry)
        return entries

    def _expand(self, dir_list: str) -> list[str]:
        return list(iter_directories(dir_list, WalkState.for_default(self.config.terminfo)))


def _settled(step: SearchStep, outcome: Outcome) -> Outcome:
    """Note on the open telemetry span which step decided the lookup."""
    span = get_current_span()
    if span is not None:
        span.annotate("step", str(step))
    return outcome
