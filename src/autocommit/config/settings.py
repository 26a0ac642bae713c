"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``AUTOCOMMIT_*`` prefix
  3. TOML file    — ``autocommit.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`autocommit.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from autocommit.config.discovery import find_config
from autocommit.config.models import DiffConfig, OllamaConfig, PreflightConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``autocommit.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class AutoCommitSettings(BaseSettings):
    """Unified settings for the autocommit CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    :class:`~autocommit.commands._context.AppContext` at invocation time.

    Attributes:
        repo_root: Directory git commands run in (CWD unless overridden).
        config_path: The TOML file that was loaded, or None.
        model: Model requested on the command line; None falls back to
            ``ollama.model``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "AUTOCOMMIT_",
        "env_nested_delimiter": "__",
    }

    repo_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    model: str | None = None
    dry_run: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
    preflight: PreflightConfig = Field(default_factory=PreflightConfig)

    @property
    def resolved_model(self) -> str:
        """The model to generate with: CLI argument, else the configured default."""
        return self.model or self.ollama.model

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
        repo_root: Path | None = None,
        **cli_flags: Any,
    ) -> AutoCommitSettings:
        """Construct settings from CLI invocation.

        Discovers ``autocommit.toml`` via walk-up (or explicit *config_path*)
        and merges CLI flags as highest-priority overrides.  Flags passed as
        None are dropped so they don't mask env or TOML values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(repo_root)

        flags = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(
                repo_root=repo_root or Path.cwd(),
                config_path=toml_path,
                **flags,
            )
        finally:
            _tls.toml_path = None
