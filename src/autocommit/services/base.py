"""BaseService — abstract foundation for all autocommit services.

Every service receives a :class:`Toolchain` at construction time. The
toolchain provides the git working tree, the Ollama client, and the
resolved settings.  Services never print, prompt, or exit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autocommit.config.settings import AutoCommitSettings
    from autocommit.infrastructure.git import GitRepository
    from autocommit.infrastructure.ollama import OllamaClient
    from autocommit.infrastructure.toolchain import Toolchain


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ChangeService(BaseService):
            def collect(self) -> ServiceResult:
                diff = self._git.staged_diff()
                ...
    """

    def __init__(self, toolchain: Toolchain) -> None:
        self._toolchain = toolchain

    @property
    def _settings(self) -> AutoCommitSettings:
        return self._toolchain.settings

    @property
    def _git(self) -> GitRepository:
        return self._toolchain.git

    @property
    def _ollama(self) -> OllamaClient:
        return self._toolchain.ollama
