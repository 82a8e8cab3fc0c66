"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tiresolve.toml only contains
overrides. The defaults mirror a typical ncurses build.
"""

from __future__ import annotations

import errno

from pydantic import BaseModel, Field, field_validator

from tiresolve.domain.outcome import DEFAULT_SOFT_ERRORS, ErrnoPolicy
from tiresolve.infrastructure.reader import MAX_RECORD_SIZE

DEFAULT_TERMINFO = "/usr/share/terminfo"
DEFAULT_TERMINFO_DIRS = ":".join(
    [
        "/etc/terminfo",
        "/lib/terminfo",
        "/usr/share/terminfo",
        "/usr/lib/terminfo",
        "/usr/local/share/terminfo",
        "/usr/local/lib/terminfo",
    ]
)


class SearchConfig(BaseModel):
    """[search] section — the compiled-in search locations."""

    model_config = {"frozen": True}

    terminfo: str = DEFAULT_TERMINFO
    terminfo_dirs: str = DEFAULT_TERMINFO_DIRS
    soft_errors: tuple[str, ...] = DEFAULT_SOFT_ERRORS
    max_record_size: int = Field(default=MAX_RECORD_SIZE, gt=0)

    @field_validator("soft_errors")
    @classmethod
    def _known_errno_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        names = tuple(name.strip().upper() for name in value)
        unknown = [name for name in names if not isinstance(getattr(errno, name, None), int)]
        if unknown:
            msg = f"Unknown errno name(s): {', '.join(unknown)}"
            raise ValueError(msg)
        return names

    def errno_policy(self) -> ErrnoPolicy:
        return ErrnoPolicy.from_names(self.soft_errors)
