"""PreflightService — environment checks run before any repository work.

Pipeline: DEPENDENCIES → REPOSITORY → SERVER → MODEL (→ PULL)
"""

from __future__ import annotations

import logging
import shutil

from autocommit.infrastructure.ollama import OllamaError
from autocommit.services.base import BaseService
from autocommit.services.result import ServiceResult

logger = logging.getLogger(__name__)


def model_matches(requested: str, available: str) -> bool:
    """Whether a locally listed model satisfies *requested*.

    Prefix match, so ``llama3.2`` is satisfied by ``llama3.2:latest``.
    """
    return available.startswith(requested)


class PreflightService(BaseService):
    """Verifies executables, the working tree, and the Ollama server."""

    def check_dependencies(self) -> ServiceResult:
        op = "check_dependencies"
        required = self._settings.preflight.required_executables
        found = {name: shutil.which(name) for name in required}
        missing = [name for name, path in found.items() if path is None]
        if missing:
            return ServiceResult.failure(
                op,
                "DEPENDENCY_MISSING",
                f"{', '.join(missing)} is required but not installed.",
                missing=missing,
            )
        return ServiceResult(ok=True, op=op, data={"executables": found})

    def check_repository(self) -> ServiceResult:
        op = "check_repository"
        if not self._git.is_inside_work_tree():
            return ServiceResult.failure(
                op,
                "NOT_A_REPOSITORY",
                "Not in a git repository!",
                path=str(self._git.root),
            )
        return ServiceResult(ok=True, op=op, data={"path": str(self._git.root)})

    def check_server(self) -> ServiceResult:
        op = "check_server"
        host = self._ollama.base_url
        try:
            version = self._ollama.version()
        except OllamaError as exc:
            logger.debug("Ollama version check failed: %s", exc)
            return ServiceResult.failure(
                op,
                "SERVER_UNREACHABLE",
                f"Ollama is not running or not accessible at {host}",
                host=host,
                hint="Please start Ollama with: ollama serve",
            )
        return ServiceResult(ok=True, op=op, data={"host": host, "version": version})

    def check_model(self, model: str) -> ServiceResult:
        """Report whether *model* is available locally, with the full model list."""
        op = "check_model"
        try:
            models = self._ollama.list_models()
        except OllamaError as exc:
            return ServiceResult.failure(
                op,
                "MODEL_LIST_FAILED",
                f"Could not list models: {exc}",
                model=model,
            )
        available = any(model_matches(model, name) for name in models)
        logger.debug("Model %s available=%s among %d models", model, available, len(models))
        return ServiceResult(
            ok=True,
            op=op,
            data={"model": model, "available": available, "models": models},
        )

    def pull_model(self, model: str) -> ServiceResult:
        op = "pull_model"
        try:
            status = self._ollama.pull(model)
        except OllamaError as exc:
            return ServiceResult.failure(
                op,
                "MODEL_PULL_FAILED",
                f"Failed to pull model '{model}': {exc}",
                model=model,
            )
        return ServiceResult(ok=True, op=op, data={"model": model, "status": status})
