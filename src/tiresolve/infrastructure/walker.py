"""Colon-separated directory list traversal.

An empty entry in a list stands for the compiled-in default directory,
but the default is substituted at most once per list. Repeated or
trailing empty entries after that contribute nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from tiresolve.domain.outcome import Attempt, Failure, LoadedRecord, Outcome

if TYPE_CHECKING:
    from tiresolve.infrastructure.path_builder import PathBuilder

logger = logging.getLogger(__name__)

LIST_SEPARATOR = ":"


class DefaultSubstitution(Enum):
    """Whether the default directory has been used for an empty entry yet."""

    PENDING = "pending"
    DONE = "done"


def initial_substitution(default_dir: str) -> DefaultSubstitution:
    """An empty default directory counts as already substituted."""
    return DefaultSubstitution.DONE if default_dir == "" else DefaultSubstitution.PENDING


@dataclass
class WalkState:
    """Per-list traversal state."""

    default_dir: str
    substitution: DefaultSubstitution = DefaultSubstitution.PENDING

    @classmethod
    def for_default(cls, default_dir: str) -> WalkState:
        return cls(default_dir=default_dir, substitution=initial_substitution(default_dir))

    def substitute(self) -> str | None:
        """Return the default directory once, then None on every later call."""
        if self.substitution is DefaultSubstitution.DONE:
            return None
        self.substitution = DefaultSubstitution.DONE
        return self.default_dir


def split_dir_list(value: str) -> list[str]:
    """Split a directory list on ``:``, keeping empty entries."""
    return value.split(LIST_SEPARATOR)


def iter_directories(dir_list: str, state: WalkState) -> Iterator[str]:
    """Yield the directories a list stands for, in order.

    Empty entries yield the default directory the first time only.
    An empty list yields nothing.
    """
    if not dir_list:
        return
    for entry in split_dir_list(dir_list):
        if entry:
            yield entry
            continue
        default = state.substitute()
        if default is not None:
            yield default


def search_list(
    builder: PathBuilder,
    dir_list: str,
    name: str,
    *,
    default_dir: str,
    state: WalkState | None = None,
    trace: list[Attempt] | None = None,
) -> Outcome:
    """Probe every directory of *dir_list* for *name*.

    Returns the first :class:`LoadedRecord`, the first failure that is
    not recoverable, or a ``NOT_FOUND`` failure once the list is
    exhausted.
    """
    if not dir_list:
        return Failure.not_found("Empty directory list")
    if state is None:
        state = WalkState.for_default(default_dir)

    for directory in iter_directories(dir_list, state):
        outcome = builder.build_and_load(directory, None, name, trace=trace)
        if isinstance(outcome, LoadedRecord):
            return outcome
        if not outcome.recoverable:
            logger.warning("Aborting directory list search at %s: %s", directory, outcome.message)
            return outcome

    return Failure.not_found(f"Terminfo entry {name!r} not found in {dir_list!r}")
