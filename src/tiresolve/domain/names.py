"""Terminfo entry name validation.

INVARIANT: An invalid name is rejected before any filesystem access.
Rejection is caller misuse (``EINVAL``), never a "not found".
"""

from __future__ import annotations

import os

# Separators that would let a name escape its layout subdirectory.
_SEPARATORS: frozenset[str] = frozenset(
    sep for sep in ("/", os.sep, os.altsep) if sep
)


def validate_name(name: str) -> str | None:
    """Return an error message if *name* is not a usable entry name, else None."""
    if not name:
        return "Terminfo name must not be empty"
    if name.startswith("."):
        return f"Terminfo name must not start with '.': {name!r}"
    if "\0" in name:
        return f"Terminfo name must not contain a NUL byte: {name!r}"
    if any(sep in name for sep in _SEPARATORS):
        return f"Terminfo name must not contain a path separator: {name!r}"
    return None
