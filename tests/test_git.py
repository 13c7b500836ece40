"""
Tests for GitRepository and ChangeCollector.

Run with:
    pytest tests/test_git.py -v
"""

import shutil
import subprocess
import threading
import time

import pytest

from gic import LOCK_FILES
from gic.git import ChangeCollector, CollectionError, FileChange, GitError, GitRepository
from gic.prompts import DETAIL_HEADER, SUMMARY_HEADER, DiffSelector, PromptBudget, PromptBuilder

from conftest import FakeRepo


# ---------------------------------------------------------------------------
# GitRepository - command construction
# ---------------------------------------------------------------------------

class RecordingRepository(GitRepository):
    """GitRepository that records git arguments instead of running them."""

    def __init__(self, outputs=None, error=None):
        super().__init__(verify=False)
        self.calls = []
        self.outputs = outputs or {}
        self.error = error

    def _run_git(self, *args):
        self.calls.append(list(args))
        if self.error:
            raise GitError(self.error)
        return self.outputs.get(args[0], "")


class TestGitRepositoryCommands:

    def test_diff_excludes_lock_files_on_both_sides(self):
        repo = RecordingRepository()
        repo.diff()

        assert len(repo.calls) == 2
        for call in repo.calls:
            separator = call.index("--")
            assert call[separator + 1:] == [f":(exclude){name}" for name in LOCK_FILES]
        assert "--cached" in repo.calls[0]
        assert "--cached" not in repo.calls[1]

    def test_diff_files_puts_paths_and_excludes_after_separator(self):
        repo = RecordingRepository()
        repo.diff_files(["src/app.ts", "package-lock.json"])

        assert len(repo.calls) == 2
        for call in repo.calls:
            separator = call.index("--")
            assert not any(arg.startswith(":(exclude)") for arg in call[:separator])
            pathspecs = call[separator + 1:]
            assert pathspecs[:2] == ["src/app.ts", "package-lock.json"]
            assert ":(exclude)package-lock.json" in pathspecs[2:]

    def test_diff_files_with_no_paths_skips_git(self):
        repo = RecordingRepository()
        assert repo.diff_files([]) == ""
        assert repo.calls == []

    def test_diff_joins_staged_and_unstaged(self):
        repo = RecordingRepository(outputs={"diff": "X"})
        assert repo.diff() == "X\nX"

    def test_diff_stat_sides(self):
        repo = RecordingRepository(outputs={"diff": "1\t2\ta.py\n"})
        assert repo.diff_stat(staged=True) == [FileChange("a.py", 1, 2)]
        assert repo.calls[-1] == ["diff", "--numstat", "--no-renames", "--cached"]
        repo.diff_stat(staged=False)
        assert repo.calls[-1] == ["diff", "--numstat", "--no-renames"]

    def test_history_uses_limit(self):
        repo = RecordingRepository()
        repo.history(limit=3)
        assert repo.calls == [["log", "-3", "--oneline"]]

    def test_history_without_commits_is_empty(self):
        repo = RecordingRepository(error="git log failed: fatal: your current branch 'main' does not have any commits yet")
        assert repo.history() == ""

    def test_history_other_errors_propagate(self):
        repo = RecordingRepository(error="git log failed: fatal: bad object")
        with pytest.raises(GitError):
            repo.history()

    def test_add_defaults_to_everything(self):
        repo = RecordingRepository()
        repo.add()
        assert repo.calls == [["add", "."]]


# ---------------------------------------------------------------------------
# ChangeCollector
# ---------------------------------------------------------------------------

class TestChangeCollector:

    def test_collects_snapshot(self):
        repo = FakeRepo(
            status="On branch main\n",
            diff="diff --git a/a b/a\n",
            history="abc first\n",
            staged=[FileChange("a", 2, 0)],
            unstaged=[FileChange("a", 0, 3), FileChange("b", 1, 1)],
        )
        snapshot = ChangeCollector(repo).collect()

        assert snapshot.status == "On branch main\n"
        assert snapshot.diff == "diff --git a/a b/a\n"
        assert snapshot.history == "abc first\n"
        assert {c.path: (c.added, c.removed) for c in snapshot.changes} == {"a": (2, 3), "b": (1, 1)}

    @pytest.mark.parametrize("diff, expected", [
        ("", False),
        ("   \n  ", False),
        ("\n\n", False),
        ("diff --git a/a b/a\n", True),
    ])
    def test_has_changes(self, diff, expected):
        snapshot = ChangeCollector(FakeRepo(diff=diff)).collect()
        assert snapshot.has_changes is expected

    def test_fetches_run_concurrently(self):
        barrier = threading.Barrier(4, timeout=5)

        class BarrierRepo(FakeRepo):
            def status(self):
                barrier.wait()
                return super().status()

            def diff(self):
                barrier.wait()
                return super().diff()

            def history(self, limit=10):
                barrier.wait()
                return super().history(limit)

            def diff_stat(self, staged):
                if staged:
                    barrier.wait()
                return super().diff_stat(staged)

        snapshot = ChangeCollector(BarrierRepo(diff="x")).collect()
        assert snapshot.diff == "x"

    @pytest.mark.parametrize("method, label", [
        ("status", "git status failed"),
        ("diff", "git diff failed"),
        ("history", "git log failed"),
        ("diff_stat", "git diff stat failed"),
    ])
    def test_failure_names_sub_operation(self, method, label):
        repo = FakeRepo()

        def boom(*args, **kwargs):
            raise GitError("exit status 128")

        setattr(repo, method, boom)
        with pytest.raises(CollectionError) as exc_info:
            ChangeCollector(repo).collect()

        assert str(exc_info.value) == f"{label}: exit status 128"
        assert isinstance(exc_info.value.__cause__, GitError)

    def test_collection_error_is_a_git_error(self):
        assert issubclass(CollectionError, GitError)

    def test_history_limit_passed_through(self):
        seen = []

        class LimitRepo(FakeRepo):
            def history(self, limit=10):
                seen.append(limit)
                return ""

        ChangeCollector(LimitRepo(), history_limit=4).collect()
        assert seen == [4]

    def test_timeout(self):
        release = threading.Event()

        class SlowRepo(FakeRepo):
            def status(self):
                release.wait(5)
                return ""

        try:
            start = time.time()
            with pytest.raises(CollectionError, match="timed out"):
                ChangeCollector(SlowRepo(), timeout=0.05).collect()
            assert time.time() - start < 2
        finally:
            release.set()


# ---------------------------------------------------------------------------
# Integration - real git repository
# ---------------------------------------------------------------------------

@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestGitIntegration:

    @pytest.fixture
    def git_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
        monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
        for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
            monkeypatch.setenv(var, "Test User")
        for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
            monkeypatch.setenv(var, "test@example.com")
        work = tmp_path / "work"
        work.mkdir()
        subprocess.run(["git", "init", "-q"], cwd=work, check=True)
        return work

    @pytest.fixture
    def repo_dir(self, git_env):
        (git_env / "src").mkdir()
        (git_env / "src" / "app.ts").write_text("export const a = 1;\n")
        (git_env / "package-lock.json").write_text('{"lockfileVersion": 1}\n')
        subprocess.run(["git", "add", "."], cwd=git_env, check=True)
        subprocess.run(["git", "commit", "-q", "-m", "initial"], cwd=git_env, check=True)

        (git_env / "src" / "app.ts").write_text("export const a = 2;\n")
        (git_env / "package-lock.json").write_text('{"lockfileVersion": 2, "marker": "LOCKFILE"}\n')
        return git_env

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(GitError, match="Not inside a git repository"):
            GitRepository(cwd=tmp_path)

    def test_empty_repository_history(self, git_env):
        assert GitRepository(cwd=git_env).history() == ""

    def test_full_diff_excludes_lock_file(self, repo_dir):
        diff = GitRepository(cwd=repo_dir).diff()
        assert "export const a = 2;" in diff
        assert "LOCKFILE" not in diff

    def test_selected_diff_excludes_lock_file(self, repo_dir):
        diff = GitRepository(cwd=repo_dir).diff_files(["src/app.ts", "package-lock.json"])
        assert "export const a = 2;" in diff
        assert "LOCKFILE" not in diff

    def test_stats_include_lock_file(self, repo_dir):
        repo = GitRepository(cwd=repo_dir)
        repo.add("src/app.ts")
        snapshot = ChangeCollector(repo).collect()

        paths = {c.path for c in snapshot.changes}
        assert paths == {"src/app.ts", "package-lock.json"}
        assert "initial" in snapshot.history

    def test_commit_and_head_hash(self, repo_dir):
        repo = GitRepository(cwd=repo_dir)
        repo.add(".")
        repo.commit("Bump lock file and constant")
        assert repo.head_hash()
        assert "Bump lock file and constant" in repo.history()

    def test_over_budget_prompt_uses_selected_diff(self, repo_dir):
        repo = GitRepository(cwd=repo_dir)
        snapshot = ChangeCollector(repo).collect()
        summary = DiffSelector().build_summary(snapshot.changes)
        # Room for the summary and both estimated diffs, but not the full diff
        budget = PromptBudget(
            max_chars=len(snapshot.status) + len(snapshot.history) + len(summary) + 25,
            overhead_chars=0,
        )
        builder = PromptBuilder(repo=repo, budget=budget)

        prompt = builder.build(snapshot)

        assert builder.needs_smart_diff(snapshot)
        assert SUMMARY_HEADER in prompt
        assert DETAIL_HEADER in prompt
        assert "export const a = 2;" in prompt
        assert "LOCKFILE" not in prompt

    def test_staged_rename_stats_are_usable_paths(self, repo_dir):
        repo = GitRepository(cwd=repo_dir)
        subprocess.run(["git", "mv", "src/app.ts", "src/main.ts"], cwd=repo_dir, check=True)

        paths = {c.path for c in repo.diff_stat(staged=True)}
        assert paths == {"src/app.ts", "src/main.ts"}
        assert "export const a = 2;" in repo.diff_files(["src/main.ts"])
