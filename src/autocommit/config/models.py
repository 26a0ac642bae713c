"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, autocommit.toml only contains overrides.
A fresh repository needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_MODEL = "gpt-oss:20b"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"


class SamplingOptions(BaseModel):
    """[ollama.options] section — sent verbatim as the generate ``options`` object."""

    model_config = {"frozen": True}

    temperature: float = 0
    top_p: float = 1
    top_k: int = 1


class OllamaConfig(BaseModel):
    """[ollama] section."""

    model_config = {"frozen": True}

    host: str = DEFAULT_OLLAMA_HOST
    model: str = DEFAULT_MODEL
    # None disables the client timeout; generation on large models can take minutes.
    timeout: float | None = None
    options: SamplingOptions = Field(default_factory=SamplingOptions)

    @property
    def base_url(self) -> str:
        return self.host.rstrip("/")


class DiffConfig(BaseModel):
    """[diff] section."""

    model_config = {"frozen": True}

    max_lines: int = 100
    max_files: int = 20


class PreflightConfig(BaseModel):
    """[preflight] section."""

    model_config = {"frozen": True}

    required_executables: list[str] = Field(default_factory=lambda: ["git"])
