"""Shared pytest fixtures and test helpers for autocommit tests."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from autocommit.config.models import OllamaConfig
from autocommit.config.settings import AutoCommitSettings
from autocommit.infrastructure import ollama as ollama_mod
from autocommit.infrastructure.ollama import OllamaClient
from autocommit.infrastructure.toolchain import Toolchain


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's AUTOCOMMIT_* environment out of every test."""
    for key in list(os.environ):
        if key.startswith("AUTOCOMMIT_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test; the CLI reconfigures it per run."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("autocommit")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


# ---------------------------------------------------------------------------
# Git repositories
# ---------------------------------------------------------------------------


def git(cwd: Path, *args: str) -> str:
    """Run a git command in *cwd*, asserting success, and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def git_log(cwd: Path) -> list[str]:
    """Commit subjects, newest first."""
    return git(cwd, "log", "--format=%s").strip().splitlines()


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary git repository with one commit, used as the CWD."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("hello\n", encoding="utf-8")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "init")
    monkeypatch.chdir(repo)
    return repo


@pytest.fixture
def git_remote(git_repo: Path, tmp_path: Path) -> Path:
    """Bare remote wired up as ``origin`` with the current branch tracked."""
    remote = tmp_path / "remote.git"
    git(tmp_path, "init", "--bare", str(remote))
    git(git_repo, "remote", "add", "origin", str(remote))
    git(git_repo, "push", "-u", "origin", "HEAD")
    return remote


# ---------------------------------------------------------------------------
# Fake Ollama server
# ---------------------------------------------------------------------------


@dataclass
class FakeOllama:
    """In-process stand-in for the Ollama HTTP API, served via MockTransport."""

    models: list[str] = field(default_factory=lambda: ["gpt-oss:20b", "llama3.2:latest"])
    response: Any = "feat: add greeting"
    generate_status: int = 200
    reachable: bool = True
    requests: list[httpx.Request] = field(default_factory=list)
    generate_payloads: list[dict[str, Any]] = field(default_factory=list)
    pulled: list[str] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.reachable:
            raise httpx.ConnectError("Connection refused", request=request)
        path = request.url.path
        if path == "/api/version":
            return httpx.Response(200, json={"version": "0.6.2"})
        if path == "/api/tags":
            return httpx.Response(200, json={"models": [{"name": n} for n in self.models]})
        if path == "/api/pull":
            body = json.loads(request.content)
            self.pulled.append(body["model"])
            self.models.append(body["model"])
            return httpx.Response(200, json={"status": "success"})
        if path == "/api/generate":
            self.generate_payloads.append(json.loads(request.content))
            if self.generate_status != 200:
                return httpx.Response(self.generate_status, text="model crashed")
            return httpx.Response(200, json={"model": "x", "response": self.response})
        return httpx.Response(404, text="not found")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, config: OllamaConfig | None = None) -> OllamaClient:
        return OllamaClient(config, transport=self.transport())

    @property
    def generate_calls(self) -> int:
        return len(self.generate_payloads)


@pytest.fixture
def fake_ollama(monkeypatch: pytest.MonkeyPatch) -> FakeOllama:
    """FakeOllama that every lazily-created OllamaClient talks to."""
    fake = FakeOllama()
    monkeypatch.setattr(ollama_mod, "OllamaClient", fake.client)
    return fake


@pytest.fixture
def toolchain(git_repo: Path, fake_ollama: FakeOllama) -> Generator[Toolchain]:
    """Toolchain over the temp repository and the fake server."""
    settings = AutoCommitSettings.from_cli(repo_root=git_repo)
    tools = Toolchain(settings, ollama=fake_ollama.client(settings.ollama))
    try:
        yield tools
    finally:
        tools.close()
