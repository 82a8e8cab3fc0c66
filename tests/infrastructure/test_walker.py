"""Tests for colon-separated directory list traversal."""

from __future__ import annotations

import errno
from collections.abc import Callable
from pathlib import Path

from tiresolve.domain.outcome import Attempt, ErrorKind, Failure, Layout, LoadedRecord, Outcome
from tiresolve.infrastructure.path_builder import PathBuilder
from tiresolve.infrastructure.walker import (
    DefaultSubstitution,
    WalkState,
    initial_substitution,
    iter_directories,
    search_list,
    split_dir_list,
)


class RecordingBuilder:
    """PathBuilder double: records probed directories, replays canned outcomes."""

    def __init__(self, outcomes: dict[str, Outcome] | None = None) -> None:
        self.outcomes = outcomes or {}
        self.directories: list[str] = []

    def build_and_load(
        self,
        directory: str,
        middle: str | None,
        name: str,
        *,
        trace: list[Attempt] | None = None,
    ) -> Outcome:
        self.directories.append(directory)
        return self.outcomes.get(directory, Failure.not_found())


def _hit(directory: str) -> LoadedRecord:
    return LoadedRecord(path=f"{directory}/x/xterm", layout=Layout.LETTER, data=b"rec")


class TestSplit:
    def test_keeps_empty_entries(self) -> None:
        assert split_dir_list(":/a::/b:") == ["", "/a", "", "/b", ""]

    def test_single_entry(self) -> None:
        assert split_dir_list("/a") == ["/a"]


class TestSubstitutionState:
    def test_initial_pending(self) -> None:
        assert initial_substitution("/usr/share/terminfo") is DefaultSubstitution.PENDING

    def test_empty_default_counts_as_done(self) -> None:
        assert initial_substitution("") is DefaultSubstitution.DONE

    def test_substitute_once(self) -> None:
        state = WalkState.for_default("/d0")
        assert state.substitute() == "/d0"
        assert state.substitution is DefaultSubstitution.DONE
        assert state.substitute() is None


class TestIterDirectories:
    def test_default_substituted_once(self) -> None:
        state = WalkState.for_default("/d0")
        assert list(iter_directories(":/a:", state)) == ["/d0", "/a"]

    def test_repeated_empty_entries(self) -> None:
        state = WalkState.for_default("/d0")
        assert list(iter_directories("::/a::", state)) == ["/d0", "/a"]

    def test_empty_default_never_substituted(self) -> None:
        state = WalkState.for_default("")
        assert list(iter_directories(":/a:", state)) == ["/a"]

    def test_empty_list(self) -> None:
        assert list(iter_directories("", WalkState.for_default("/d0"))) == []


class TestSearchList:
    def test_empty_list_is_not_found_without_default(self) -> None:
        builder = RecordingBuilder()
        outcome = search_list(builder, "", "xterm", default_dir="/d0")
        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.NOT_FOUND
        assert builder.directories == []

    def test_default_only_for_first_empty_entry(self) -> None:
        builder = RecordingBuilder()
        state = WalkState.for_default("/d0")
        outcome = search_list(
            builder,
            ":/a:",
            "xterm",
            default_dir="/d0",
            state=state,
        )
        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.NOT_FOUND
        assert builder.directories == ["/d0", "/a"]
        assert state.substitution is DefaultSubstitution.DONE

    def test_returns_first_hit(self) -> None:
        builder = RecordingBuilder({"/b": _hit("/b"), "/c": _hit("/c")})
        outcome = search_list(builder, "/a:/b:/c", "xterm", default_dir="/d0")
        assert isinstance(outcome, LoadedRecord)
        assert outcome.path == "/b/x/xterm"
        assert builder.directories == ["/a", "/b"]

    def test_soft_access_continues(self) -> None:
        denied = Failure(kind=ErrorKind.SOFT_ACCESS, message="denied", errno=errno.EACCES)
        builder = RecordingBuilder({"/a": denied, "/b": _hit("/b")})
        outcome = search_list(builder, "/a:/b", "xterm", default_dir="/d0")
        assert isinstance(outcome, LoadedRecord)
        assert builder.directories == ["/a", "/b"]

    def test_hard_error_aborts(self) -> None:
        broken = Failure(kind=ErrorKind.HARD, message="I/O error", errno=errno.EIO)
        builder = RecordingBuilder({"/a": broken, "/b": _hit("/b")})
        outcome = search_list(builder, "/a:/b", "xterm", default_dir="/d0")
        assert outcome is broken
        assert builder.directories == ["/a"]

    def test_real_tree(self, tmp_path: Path, make_entry: Callable[..., Path]) -> None:
        first, second = tmp_path / "first", tmp_path / "second"
        make_entry(second, "vt100", layout="hex")
        trace: list[Attempt] = []
        outcome = search_list(
            PathBuilder(),
            f"{first}:{second}",
            "vt100",
            default_dir="",
            trace=trace,
        )
        assert isinstance(outcome, LoadedRecord)
        assert outcome.path == f"{second}/76/vt100"
        assert [a.path for a in trace] == [
            f"{first}/v/vt100",
            f"{first}/76/vt100",
            f"{second}/v/vt100",
            f"{second}/76/vt100",
        ]
