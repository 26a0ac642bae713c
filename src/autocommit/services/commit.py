"""CommitService — records the staged changes and optionally pushes them."""

from __future__ import annotations

import logging

from autocommit.infrastructure.git import GitError
from autocommit.services.base import BaseService
from autocommit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class CommitService(BaseService):
    """Wraps ``git commit`` and ``git push`` in the ServiceResult contract."""

    def commit(self, message: str) -> ServiceResult:
        """Commit the index with *message*.

        INVARIANT: git is never invoked with an empty message.
        """
        op = "commit"
        message = message.strip()
        if not message:
            return ServiceResult.failure(
                op, "EMPTY_MESSAGE", "Refusing to commit with an empty message."
            )

        try:
            output = self._git.commit(message)
        except GitError as exc:
            return ServiceResult.failure(
                op,
                "COMMIT_FAILED",
                "Failed to commit changes.",
                stderr=exc.stderr,
            )

        try:
            remotes = self._git.remotes()
        except GitError as exc:
            logger.debug("git remote failed after commit: %s", exc)
            remotes = []

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "message": message,
                "output": output,
                "has_remote": bool(remotes),
                "remotes": remotes,
            },
        )

    def push(self) -> ServiceResult:
        op = "push"
        try:
            output = self._git.push()
        except GitError as exc:
            return ServiceResult.failure(
                op,
                "PUSH_FAILED",
                "Failed to push to remote repository.",
                stderr=exc.stderr,
            )
        return ServiceResult(ok=True, op=op, data={"output": output})
