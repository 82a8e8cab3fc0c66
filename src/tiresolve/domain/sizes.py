"""Overflow-checked size arithmetic for candidate path buffers.

Lengths come from environment variables and configuration, so every
addition that sizes a path is checked before the path is built.
Arithmetic is modular over ``[0, limit]`` and reports wrap-around the
same way an unsigned size type would.
"""

from __future__ import annotations

import sys

SIZE_MAX: int = sys.maxsize

# "/" + up to two layout characters + "/" + terminator
PATH_OVERHEAD: int = 1 + 2 + 1 + 1


def checked_add(dst: int, src: int, *, limit: int = SIZE_MAX) -> tuple[int, bool]:
    """Add *src* to *dst* modulo ``limit + 1``.

    Returns ``(total, overflowed)``; ``overflowed`` is True when the sum
    wrapped past *limit*.
    """
    total = (dst + src) % (limit + 1)
    return total, total < src


class PathSize:
    """Running total of a path size with sticky overflow detection.

    Usage::

        size = PathSize()
        if size.add(len(directory)) or size.add(len(name)):
            ...  # overflow
    """

    def __init__(self, *, limit: int = SIZE_MAX) -> None:
        self.limit = limit
        self.total = 0
        self.overflowed = False

    def add(self, n: int) -> bool:
        """Add *n* to the total. Returns True if this or any earlier add overflowed."""
        self.total, wrapped = checked_add(self.total, n, limit=self.limit)
        self.overflowed = self.overflowed or wrapped
        return self.overflowed
