"""Locating and reading ``tiresolve.toml``.

``$TIRESOLVE_CONFIG`` names the file outright. Without it, the nearest
``tiresolve.toml`` in the starting directory or one of its parents is
used, the way git finds ``.git/``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "tiresolve.toml"
CONFIG_ENV_VAR = "TIRESOLVE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies from *start* (default: cwd).

    A ``$TIRESOLVE_CONFIG`` naming no file disables the config rather than
    falling back to the walk-up search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML; a syntax error is reported as a CLI error."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
