"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TIRESOLVE_*`` prefix (``TIRESOLVE_SEARCH__TERMINFO_DIRS``)
  3. TOML file    — ``tiresolve.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

The terminfo variables themselves (``TERMINFO``, ``TERMINFO_DIRS``, ...)
are not settings: they are read by the resolver at lookup time.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from tiresolve.config.discovery import find_config, read_config
from tiresolve.config.models import SearchConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``tiresolve.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_config(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class TiSettings(BaseSettings):
    """Unified settings for the tiresolve CLI.

    Stored on the :class:`~tiresolve.commands._context.AppContext`
    created by the root CLI group.

    Attributes:
        config_path: The TOML file in effect, or None when running on
            defaults.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TIRESOLVE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    search: SearchConfig = Field(default_factory=SearchConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> TiSettings:
        """Construct settings from CLI invocation.

        Uses the explicit *config_path* when given, otherwise discovers
        ``tiresolve.toml`` by walking up from *start* (default: cwd).
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                import click

                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
