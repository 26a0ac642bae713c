"""Tests for GitRepository — subprocess git against real temp repositories."""

from __future__ import annotations

from pathlib import Path

import pytest

from autocommit.infrastructure.git import GitError, GitRepository
from tests.conftest import git, git_log


@pytest.fixture
def repo(git_repo: Path) -> GitRepository:
    return GitRepository(git_repo)


class TestQueries:
    def test_inside_work_tree(self, repo: GitRepository) -> None:
        assert repo.is_inside_work_tree() is True

    def test_outside_work_tree(self, tmp_path: Path) -> None:
        outside = tmp_path / "plain"
        outside.mkdir()
        assert GitRepository(outside).is_inside_work_tree() is False

    def test_clean_tree_has_nothing_staged(self, repo: GitRepository) -> None:
        assert repo.has_staged_changes() is False
        assert repo.unstaged_files() == []
        assert repo.staged_diff() == ""

    def test_unstaged_modification_listed(self, repo: GitRepository, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("hello world\n", encoding="utf-8")
        assert repo.unstaged_files() == ["README.md"]
        assert repo.has_staged_changes() is False

    def test_untracked_files_are_not_unstaged_modifications(
        self, repo: GitRepository, git_repo: Path
    ) -> None:
        (git_repo / "new.txt").write_text("x\n", encoding="utf-8")
        assert repo.unstaged_files() == []

    def test_staged_diff_and_stat(self, repo: GitRepository, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("hello world\n", encoding="utf-8")
        git(git_repo, "add", "README.md")
        assert repo.has_staged_changes() is True
        assert "+hello world" in repo.staged_diff()
        assert "README.md" in repo.staged_stat()
        assert repo.staged_files() == ["README.md"]
        assert not repo.staged_diff().endswith("\n")

    def test_no_remotes(self, repo: GitRepository) -> None:
        assert repo.remotes() == []

    @pytest.mark.usefixtures("git_remote")
    def test_remote_listed(self, repo: GitRepository) -> None:
        assert repo.remotes() == ["origin"]


class TestMutations:
    def test_stage_all_includes_untracked(self, repo: GitRepository, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("changed\n", encoding="utf-8")
        (git_repo / "new.txt").write_text("x\n", encoding="utf-8")
        repo.stage_all()
        assert sorted(repo.staged_files()) == ["README.md", "new.txt"]

    def test_commit(self, repo: GitRepository, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("changed\n", encoding="utf-8")
        repo.stage_all()
        output = repo.commit("docs: update readme")
        assert "docs: update readme" in output
        assert git_log(git_repo)[0] == "docs: update readme"

    def test_commit_with_nothing_staged_raises(self, repo: GitRepository) -> None:
        with pytest.raises(GitError) as exc_info:
            repo.commit("chore: nothing")
        assert exc_info.value.returncode == 1
        assert exc_info.value.git_args == ("commit", "-m", "chore: nothing")

    def test_push_without_remote_raises(self, repo: GitRepository) -> None:
        with pytest.raises(GitError):
            repo.push()

    def test_push_to_remote(self, repo: GitRepository, git_repo: Path, git_remote: Path) -> None:
        (git_repo / "README.md").write_text("changed\n", encoding="utf-8")
        repo.stage_all()
        repo.commit("docs: update readme")
        repo.push()
        assert git(git_remote, "log", "--format=%s", "-1").strip() == "docs: update readme"


class TestGitError:
    def test_message_includes_command_and_stderr(self) -> None:
        err = GitError(("push",), 128, "fatal: no remote\n")
        assert "`git push`" in str(err)
        assert "exit 128" in str(err)
        assert err.stderr == "fatal: no remote"

    def test_missing_binary(self, git_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        empty = git_repo.parent / "no-bin"
        empty.mkdir()
        monkeypatch.setenv("PATH", str(empty))
        with pytest.raises(GitError) as exc_info:
            GitRepository(git_repo).staged_diff()
        assert exc_info.value.returncode is None
