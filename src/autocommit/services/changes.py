"""ChangeService — collects the staged changes that feed generation.

Pipeline: STAGE (if nothing staged) → DIFF → SUMMARIZE (if too long)

``stage()`` can run on its own so callers can report staging before the
diff is inspected; ``collect()`` runs it first.

When the staged diff exceeds ``diff.max_lines`` it is replaced by the
``--stat`` summary plus a capped list of file names, which keeps the
prompt within what small local models handle well.
"""

from __future__ import annotations

import logging

from autocommit.infrastructure.git import GitError
from autocommit.services.base import BaseService
from autocommit.services.result import ServiceResult

logger = logging.getLogger(__name__)

TRUNCATION_NOTE = "... and more files"


def summarize_diff(stat: str, files: list[str], max_files: int) -> str:
    """Build the compact stand-in for an oversized diff.

    Examples:
        >>> print(summarize_diff(" a | 1 +", ["a"], 20))
         a | 1 +
        <BLANKLINE>
        Files changed:
        a
    """
    parts = [stat, "", "Files changed:", *files[:max_files]]
    if len(files) > max_files:
        parts.append(TRUNCATION_NOTE)
    return "\n".join(parts)


class ChangeService(BaseService):
    """Stages pending work and produces the generation input text."""

    def stage(self) -> ServiceResult:
        """Stage every modified file unless something is already staged."""
        op = "stage_changes"
        try:
            if self._git.has_staged_changes():
                return ServiceResult(
                    ok=True, op=op, data={"has_changes": True, "staged_all": False}
                )
            if not self._git.unstaged_files():
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"has_changes": False},
                    warnings=["No changes detected in the repository."],
                )
            logger.debug("Nothing staged; staging all modified files")
            self._git.stage_all()
        except GitError as exc:
            return ServiceResult.failure(op, "GIT_FAILED", str(exc), stderr=exc.stderr)
        return ServiceResult(ok=True, op=op, data={"has_changes": True, "staged_all": True})

    def collect(self) -> ServiceResult:
        op = "collect_changes"
        staged = self.stage()
        if not staged.ok or not staged.data["has_changes"]:
            return staged
        staged_all = staged.data["staged_all"]
        warnings: list[str] = []

        try:
            diff = self._git.staged_diff()
            if not diff:
                return ServiceResult.failure(op, "EMPTY_DIFF", "No staged changes found.")

            line_count = len(diff.splitlines())
            max_lines = self._settings.diff.max_lines
            summarized = line_count > max_lines
            text = diff
            if summarized:
                warnings.append(f"Diff is large ({line_count} lines). Using summary instead.")
                text = summarize_diff(
                    self._git.staged_stat(),
                    self._git.staged_files(),
                    self._settings.diff.max_files,
                )
        except GitError as exc:
            return ServiceResult.failure(op, "GIT_FAILED", str(exc), stderr=exc.stderr)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "has_changes": True,
                "staged_all": staged_all,
                "text": text,
                "line_count": line_count,
                "summarized": summarized,
            },
            warnings=warnings,
        )

    def stat(self) -> ServiceResult:
        """The ``--stat`` summary and file names of what is currently staged."""
        op = "staged_stat"
        try:
            stat = self._git.staged_stat()
            files = self._git.staged_files()
        except GitError as exc:
            return ServiceResult.failure(op, "GIT_FAILED", str(exc), stderr=exc.stderr)
        return ServiceResult(ok=True, op=op, data={"stat": stat, "files": files})
