"""GitRepository — thin subprocess wrapper over the git CLI.

Every call runs ``git`` in the repository root with captured text output.
Non-zero exits raise :class:`GitError`; callers that expect a non-zero
status (``diff --quiet``) inspect the return code themselves.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(Exception):
    """A git command failed to start or exited non-zero."""

    def __init__(self, args: tuple[str, ...], returncode: int | None, stderr: str) -> None:
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr.strip()
        command = " ".join(("git", *args))
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"`{command}` failed (exit {returncode}){detail}")


class GitRepository:
    """Git operations scoped to a working directory."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root or Path.cwd()

    @property
    def root(self) -> Path:
        return self._root

    # ------------------------------------------------------------------
    # Subprocess helper
    # ------------------------------------------------------------------

    def _run_git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run a git command in the repository root."""
        logger.debug("git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self._root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise GitError(args, None, str(exc)) from exc
        if check and result.returncode != 0:
            raise GitError(args, result.returncode, result.stderr)
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_inside_work_tree(self) -> bool:
        try:
            result = self._run_git("rev-parse", "--is-inside-work-tree")
        except GitError as exc:
            logger.debug("rev-parse failed: %s", exc)
            return False
        return result.stdout.strip() == "true"

    def has_staged_changes(self) -> bool:
        """True if the index differs from HEAD."""
        result = self._run_git("diff", "--cached", "--quiet", check=False)
        if result.returncode == 0:
            return False
        if result.returncode == 1:
            return True
        raise GitError(("diff", "--cached", "--quiet"), result.returncode, result.stderr)

    def unstaged_files(self) -> list[str]:
        """Tracked files modified in the working tree but not staged."""
        return _lines(self._run_git("diff", "--name-only").stdout)

    def staged_diff(self) -> str:
        return self._run_git("diff", "--cached").stdout.rstrip("\n")

    def staged_stat(self) -> str:
        return self._run_git("diff", "--cached", "--stat").stdout.rstrip("\n")

    def staged_files(self) -> list[str]:
        return _lines(self._run_git("diff", "--cached", "--name-only").stdout)

    def remotes(self) -> list[str]:
        return _lines(self._run_git("remote").stdout)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def stage_all(self) -> None:
        self._run_git("add", "-A")

    def commit(self, message: str) -> str:
        """Commit the index with *message*. Returns git's summary output."""
        return self._run_git("commit", "-m", message).stdout.rstrip("\n")

    def push(self) -> str:
        # git reports push progress on stderr
        result = self._run_git("push")
        return (result.stdout + result.stderr).rstrip("\n")


def _lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]
