"""Toolchain — the single dependency injected into every service.

Bundles the resolved settings with the two external collaborators: the
git working tree and the Ollama server.  The HTTP client is opened lazily
so that checks which never reach the server don't create one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autocommit.infrastructure.git import GitRepository

if TYPE_CHECKING:
    from autocommit.config.settings import AutoCommitSettings
    from autocommit.infrastructure.ollama import OllamaClient


class Toolchain:
    """Settings plus git and Ollama handles for one CLI run."""

    def __init__(
        self,
        settings: AutoCommitSettings,
        *,
        git: GitRepository | None = None,
        ollama: OllamaClient | None = None,
    ) -> None:
        self.settings = settings
        self.git = git or GitRepository(settings.repo_root)
        self._ollama = ollama

    @property
    def ollama(self) -> OllamaClient:
        """The Ollama client (created lazily on first access)."""
        if self._ollama is None:
            from autocommit.infrastructure import ollama as ollama_mod

            self._ollama = ollama_mod.OllamaClient(self.settings.ollama)
        return self._ollama

    def close(self) -> None:
        if self._ollama is not None:
            self._ollama.close()
