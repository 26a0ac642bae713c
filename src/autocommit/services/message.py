"""MessageService — turns staged changes into a one-line commit message.

Pipeline: PROMPT → GENERATE → CLEAN → FALLBACK

Cleanup is heuristic.  Local models often wrap the answer in quotes,
reasoning blocks, or a preamble; the last surviving line is taken as the
message.  When nothing usable survives, a deterministic
``chore: update ...`` message derived from the staged file list is used.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath

from autocommit.infrastructure.git import GitError
from autocommit.infrastructure.ollama import OllamaError
from autocommit.services.base import BaseService
from autocommit.services.result import ServiceResult

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """\
Generate a git commit message in conventional format for these changes. \
Output ONLY the commit message, nothing else.

Format: type: description
Types: feat, fix, docs, style, refactor, test, chore
Keep description under 50 characters, lowercase, no period.

Changes:
{changes}

Commit message:"""

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)
# Lines that are model chatter rather than the message itself.
_NOISE_LINE = re.compile(r"^\[|<think|Explanation|Output:|Commit message:")
# A "message" that still looks like log or debug output.
_LOG_LIKE = re.compile(r"^\[|<think|INFO|ERROR|WARNING")


def build_prompt(changes: str) -> str:
    return PROMPT_TEMPLATE.format(changes=changes)


def _strip_line(line: str) -> str:
    line = line.strip()
    line = line.removeprefix('"').removesuffix('"')
    return line.strip()


def clean_message(raw: str) -> str:
    """Reduce a raw model response to a single candidate message line.

    Returns an empty string when no line survives cleanup.

    Examples:
        >>> clean_message('"feat: add login."')
        'feat: add login'
        >>> clean_message("Here you go:\\nOutput:\\nfix: handle null ids")
        'fix: handle null ids'
    """
    text = _THINK_BLOCK.sub("", raw)
    lines = [_strip_line(line) for line in text.splitlines()]
    kept = [line for line in lines if line and not _NOISE_LINE.search(line)]
    if not kept:
        return ""
    return kept[-1].removesuffix(".").strip()


def looks_like_log_output(message: str) -> bool:
    return bool(_LOG_LIKE.search(message))


def fallback_message(staged_files: list[str]) -> str:
    """Deterministic message used when the model output is unusable.

    Examples:
        >>> fallback_message(["src/app/main.py"])
        'chore: update main.py'
        >>> fallback_message(["a.py", "b.py", "c.py"])
        'chore: update 3 files'
    """
    if len(staged_files) == 1:
        return f"chore: update {PurePosixPath(staged_files[0]).name}"
    return f"chore: update {len(staged_files)} files"


class MessageService(BaseService):
    """Generates and cleans the commit message for the staged changes."""

    def generate(self, model: str, changes: str) -> ServiceResult:
        op = "generate_message"
        prompt = build_prompt(changes)
        logger.debug("Prompt is %d characters for model %s", len(prompt), model)

        try:
            raw = self._ollama.generate(model, prompt)
        except OllamaError as exc:
            logger.debug("Generation request failed: %s", exc)
            return ServiceResult.failure(
                op,
                "GENERATION_FAILED",
                "Failed to generate commit message from Ollama",
                model=model,
                cause=str(exc),
            )

        if raw is None or not raw.strip() or raw.strip() == "null":
            return ServiceResult.failure(
                op,
                "GENERATION_FAILED",
                "Failed to generate commit message from Ollama",
                model=model,
                cause="empty response",
            )

        message = clean_message(raw)
        used_fallback = not message or looks_like_log_output(message)
        if used_fallback:
            logger.debug("Unusable model output %r; using fallback message", message)
            try:
                staged = self._git.staged_files()
            except GitError as exc:
                return ServiceResult.failure(op, "GIT_FAILED", str(exc), stderr=exc.stderr)
            message = fallback_message(staged)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "message": message,
                "raw": raw,
                "fallback": used_fallback,
                "model": model,
            },
        )
