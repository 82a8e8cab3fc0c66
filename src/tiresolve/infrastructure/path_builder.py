"""Candidate path construction and per-directory probing.

A directory is probed with :attr:`Layout.LETTER` first. Only when that
candidate is missing (``ENOENT``) is the :attr:`Layout.HEX` candidate
tried; any other failure is reported as-is so real errors are never
masked by the retry.

INVARIANT: Each candidate is opened, read, and closed before the next
one is built. No descriptor survives a single attempt.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from tiresolve.domain.outcome import (
    Attempt,
    ErrnoPolicy,
    ErrorKind,
    Failure,
    Layout,
    LoadedRecord,
    Outcome,
    errno_name,
)
from tiresolve.domain.sizes import PATH_OVERHEAD, SIZE_MAX, PathSize
from tiresolve.infrastructure.reader import MAX_RECORD_SIZE, has_more, read_file

logger = logging.getLogger(__name__)

Decoder = Callable[[bytes], Any]
Reader = Callable[[str, int], bytes]


def raw_decoder(data: bytes) -> bytes:
    """Identity decoder: the record is handed back as raw bytes."""
    return data


def _byte_len(value: str) -> int:
    return len(os.fsencode(value))


class PathBuilder:
    """Builds candidate paths under a directory and loads the first that exists.

    Args:
        policy: errno classification table (soft vs. hard failures).
        capacity: Maximum number of record bytes read per candidate.
        size_limit: Largest representable path size; sums past it are
            treated as an allocation failure.
        decoder: Called with the raw bytes of a loaded record. A
            ``ValueError`` marks the record as malformed.
        reader: ``(path, capacity) -> bytes``; defaults to
            :func:`~tiresolve.infrastructure.reader.read_file`.
    """

    def __init__(
        self,
        policy: ErrnoPolicy | None = None,
        *,
        capacity: int = MAX_RECORD_SIZE,
        size_limit: int = SIZE_MAX,
        decoder: Decoder | None = None,
        reader: Reader | None = None,
    ) -> None:
        self.policy = policy or ErrnoPolicy()
        self.capacity = capacity
        self.size_limit = size_limit
        self._decoder = decoder or raw_decoder
        self._reader = reader or read_file

    # ------------------------------------------------------------------
    # Path composition
    # ------------------------------------------------------------------

    def path_size(self, directory: str, middle: str | None, name: str) -> PathSize:
        """Total buffer size a candidate path needs, with overflow tracking."""
        size = PathSize(limit=self.size_limit)
        mid_len = _byte_len(middle) + 1 if middle is not None else 0
        for part in (_byte_len(directory), mid_len, _byte_len(name), PATH_OVERHEAD):
            if size.add(part):
                break
        return size

    @staticmethod
    def candidate_path(directory: str, middle: str | None, name: str, layout: Layout) -> str:
        """``<directory>/[<middle>/]<layout suffix>``."""
        prefix = f"{directory}/{middle}/" if middle is not None else f"{directory}/"
        return prefix + layout.suffix(name)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def build_and_load(
        self,
        directory: str,
        middle: str | None,
        name: str,
        *,
        trace: list[Attempt] | None = None,
    ) -> Outcome:
        """Probe *directory* for *name* under both layouts.

        Returns the :class:`LoadedRecord` of the first layout that loads,
        or the failure of the last attempt made.
        """
        if self.path_size(directory, middle, name).overflowed:
            logger.warning("Path size overflow for directory of %d chars", len(directory))
            return Failure.out_of_memory(
                f"Candidate path for {name!r} exceeds the maximum path size"
            )

        outcome = self._probe(directory, middle, name, Layout.LETTER, trace)
        if isinstance(outcome, LoadedRecord) or not self.policy.is_missing(outcome.errno):
            return outcome
        return self._probe(directory, middle, name, Layout.HEX, trace)

    def _probe(
        self,
        directory: str,
        middle: str | None,
        name: str,
        layout: Layout,
        trace: list[Attempt] | None,
    ) -> Outcome:
        try:
            path = self.candidate_path(directory, middle, name, layout)
        except MemoryError:
            return Failure.out_of_memory(f"Cannot allocate candidate path for {name!r}")
        return self.load(path, directory=directory, layout=layout, trace=trace)

    def load(
        self,
        path: str | Path,
        *,
        directory: str | None = None,
        layout: Layout | None = None,
        trace: list[Attempt] | None = None,
    ) -> Outcome:
        """Read and decode a single record file."""
        path = str(path)
        try:
            data = self._reader(path, self.capacity)
        except OSError as exc:
            self._record(trace, directory, path, layout, exc.errno)
            return self._failure(exc, path)
        except ValueError as exc:
            # os.open rejects paths with an embedded NUL before any syscall
            self._record(trace, directory, path, layout, errno.EINVAL)
            logger.warning("Unusable path %r: %s", path, exc)
            return Failure(
                kind=ErrorKind.HARD,
                message=f"Unusable path: {exc}",
                errno=errno.EINVAL,
                path=path,
            )

        self._record(trace, directory, path, layout, None)
        try:
            decoded = self.decode(data)
        except ValueError as exc:
            logger.warning("Malformed terminfo record %s: %s", path, exc)
            return Failure(
                kind=ErrorKind.HARD,
                message=f"Malformed terminfo record: {exc}",
                errno=errno.EINVAL,
                path=path,
            )

        truncated = len(data) >= self.capacity and has_more(path, len(data))
        logger.debug("Loaded %s (%d bytes)", path, len(data))
        return LoadedRecord(
            path=path,
            layout=layout,
            data=data,
            truncated=truncated,
            decoded=decoded,
        )

    def decode(self, data: bytes) -> Any:
        """Hand raw record bytes to the configured decoder."""
        return self._decoder(data)

    def _failure(self, exc: OSError, path: str) -> Failure:
        kind = self.policy.classify(exc.errno)
        if kind is ErrorKind.HARD:
            logger.warning("Hard error reading %s: %s", path, exc)
        else:
            logger.debug("Skipping %s (%s)", path, errno_name(exc.errno))
        return Failure(
            kind=kind,
            message=exc.strerror or str(exc),
            errno=exc.errno,
            path=path,
        )

    @staticmethod
    def _record(
        trace: list[Attempt] | None,
        directory: str | None,
        path: str,
        layout: Layout | None,
        code: int | None,
    ) -> None:
        if trace is None or layout is None:
            return
        trace.append(Attempt(directory=directory or "", path=path, layout=layout, errno=code))
