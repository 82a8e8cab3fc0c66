"""Resolution outcomes, layouts, and the errno classification table.

Every search layer returns an :data:`Outcome`: either a
:class:`LoadedRecord` or a :class:`Failure` carrying an :class:`ErrorKind`.

INVARIANT: ``NOT_FOUND`` and ``SOFT_ACCESS`` failures never abort a search;
``HARD`` failures always do. ``INVALID_INPUT`` is raised before any search.
"""

from __future__ import annotations

import errno
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Terminating error classification reported to callers."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    SOFT_ACCESS = "SOFT_ACCESS"
    HARD = "HARD"


class Layout(StrEnum):
    """Subdirectory naming used inside a terminfo tree."""

    LETTER = "letter"
    HEX = "hex"

    def suffix(self, name: str) -> str:
        """Return the layout-specific ``<subdir>/<name>`` part of a path.

        ``LETTER`` uses the first character (``x/xterm``); ``HEX`` uses the
        two-digit lowercase hex of the first byte (``78/xterm``).
        """
        if self is Layout.LETTER:
            return f"{name[0]}/{name}"
        return f"{os.fsencode(name)[0]:02x}/{name}"


class SearchStep(StrEnum):
    """Where in the precedence chain a directory came from."""

    TERMINFO = "TERMINFO"
    HOME = "HOME"
    TERMINFO_DIRS = "TERMINFO_DIRS"
    FALLBACK = "fallback"


def errno_name(code: int | None) -> str | None:
    """Symbolic name for an errno value (``ENOENT``), or None."""
    if code is None:
        return None
    return errno.errorcode.get(code, str(code))


@dataclass(frozen=True)
class Attempt:
    """A single probed candidate path."""

    directory: str
    path: str
    layout: Layout
    errno: int | None = None

    @property
    def ok(self) -> bool:
        return self.errno is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "directory": self.directory,
            "path": self.path,
            "layout": str(self.layout),
            "error": errno_name(self.errno),
        }


@dataclass(frozen=True)
class LoadedRecord:
    """Raw record bytes read from *path*, plus the decoder's result.

    ``data`` holds at most the reader's capacity; ``truncated`` is True
    when the file had more bytes than that.
    """

    path: str
    layout: Layout | None
    data: bytes
    truncated: bool = False
    decoded: Any = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Failure:
    """A failed lookup with its classification."""

    kind: ErrorKind
    message: str
    errno: int | None = None
    path: str | None = None

    @property
    def recoverable(self) -> bool:
        """True when the search may continue past this failure."""
        return self.kind in (ErrorKind.NOT_FOUND, ErrorKind.SOFT_ACCESS)

    @classmethod
    def not_found(cls, message: str = "Terminfo entry not found") -> Failure:
        return cls(kind=ErrorKind.NOT_FOUND, message=message, errno=errno.ENOENT)

    @classmethod
    def out_of_memory(cls, message: str, path: str | None = None) -> Failure:
        return cls(kind=ErrorKind.HARD, message=message, errno=errno.ENOMEM, path=path)


Outcome = LoadedRecord | Failure


DEFAULT_SOFT_ERRORS: tuple[str, ...] = ("ENOENT", "EPERM", "EACCES")


@dataclass(frozen=True)
class ErrnoPolicy:
    """Classification table deciding which OS errors continue a search.

    ``missing`` codes mean "no such entry" and are the only codes that
    trigger the alternate-layout retry. ``soft`` codes are absorbed and
    the search moves on; anything else is a hard error.
    """

    soft: frozenset[int] = field(
        default_factory=lambda: frozenset(getattr(errno, n) for n in DEFAULT_SOFT_ERRORS)
    )
    missing: frozenset[int] = frozenset({errno.ENOENT})

    @classmethod
    def from_names(cls, names: Iterable[str]) -> ErrnoPolicy:
        """Build a policy from errno names such as ``["ENOENT", "EACCES"]``."""
        codes: set[int] = set()
        for name in names:
            code = getattr(errno, name.strip().upper(), None)
            if not isinstance(code, int):
                msg = f"Unknown errno name: {name!r}"
                raise ValueError(msg)
            codes.add(code)
        return cls(soft=frozenset(codes))

    def is_missing(self, code: int | None) -> bool:
        return code in self.missing

    def is_soft(self, code: int | None) -> bool:
        return code in self.soft

    def classify(self, code: int | None) -> ErrorKind:
        if not self.is_soft(code):
            return ErrorKind.HARD
        if self.is_missing(code):
            return ErrorKind.NOT_FOUND
        return ErrorKind.SOFT_ACCESS

    def names(self) -> list[str]:
        return sorted(errno_name(code) or str(code) for code in self.soft)
