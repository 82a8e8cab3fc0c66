"""Shared pytest fixtures and test helpers for tiresolve tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from tiresolve.services.telemetry import _current_span, disable_telemetry

# Minimal legacy-format header: magic 0432 followed by zeroed section sizes.
RECORD_BYTES = b"\x1a\x01" + b"\x00" * 10

EntryFactory = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo telemetry and logging changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg_level = logging.getLogger("tiresolve").level
    yield
    disable_telemetry()
    _current_span.set(None)
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("tiresolve").setLevel(pkg_level)


@pytest.fixture
def make_entry() -> EntryFactory:
    """Return a factory writing a compiled entry into a terminfo tree.

    ``make_entry(root, "xterm")`` writes ``root/x/xterm``;
    ``make_entry(root, "xterm", layout="hex")`` writes ``root/78/xterm``.
    """

    def _make(
        root: Path,
        name: str,
        *,
        layout: str = "letter",
        data: bytes = RECORD_BYTES,
    ) -> Path:
        subdir = name[0] if layout == "letter" else f"{name.encode()[0]:02x}"
        path = root / subdir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def search_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate the CLI from the host's terminfo setup.

    CWD moves to *tmp_path* (no stray ``tiresolve.toml``), the terminfo
    variables are cleared, ``HOME`` points at an empty directory, and the
    fallback locations point at ``tmp_path/default`` and
    ``tmp_path/system``.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    for var in ("TERMINFO", "TERMINFO_DIRS", "TERM", "TIRESOLVE_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("TIRESOLVE_SEARCH__TERMINFO", str(tmp_path / "default"))
    monkeypatch.setenv("TIRESOLVE_SEARCH__TERMINFO_DIRS", str(tmp_path / "system"))
    return tmp_path
