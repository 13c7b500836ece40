"""Git Repository - Thin wrapper over the git CLI."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from gic import LOCK_FILES, HISTORY_LIMIT

LOCK_FILE_EXCLUDES = [f':(exclude){name}' for name in LOCK_FILES]

NO_COMMITS_MARKER = 'does not have any commits yet'


@dataclass
class FileChange:
    """Line statistics for a single changed file."""
    path: str
    added: int = 0
    removed: int = 0

    @property
    def churn(self) -> int:
        return self.added + self.removed


class GitError(Exception):
    """Raised when git operations fail."""
    pass


def parse_numstat(output: str) -> list[FileChange]:
    """Parse 'git diff --numstat' output. Binary files ('-') count as 0."""
    files = []
    for line in output.strip().split('\n'):
        parts = line.split('\t')
        if len(parts) < 3:
            continue
        added = int(parts[0]) if parts[0].isdigit() else 0
        removed = int(parts[1]) if parts[1].isdigit() else 0
        files.append(FileChange(path=parts[2], added=added, removed=removed))
    return files


def merge_diff_stats(*groups: list[FileChange]) -> list[FileChange]:
    """Merge stat lists keyed by path, summing counts. First-seen order wins."""
    merged: dict[str, FileChange] = {}
    for group in groups:
        for change in group:
            existing = merged.get(change.path)
            if existing:
                existing.added += change.added
                existing.removed += change.removed
            else:
                merged[change.path] = FileChange(change.path, change.added, change.removed)
    return list(merged.values())


class GitRepository:
    """Read and write operations against the repository in `cwd`."""

    def __init__(self, cwd: str | Path | None = None, verify: bool = True):
        self.cwd = str(cwd) if cwd else None
        if verify:
            self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            detail = e.stderr.strip() if e.stderr else f"exit status {e.returncode}"
            raise GitError(f"git {' '.join(args)} failed: {detail}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError as e:
            if 'not installed' in str(e):
                raise
            raise GitError("Not inside a git repository")

    # Inspection

    def status(self) -> str:
        return self._run_git('status')

    def diff(self) -> str:
        """Staged and unstaged diff, lock files excluded."""
        staged = self._run_git('diff', '--cached', '--', *LOCK_FILE_EXCLUDES)
        unstaged = self._run_git('diff', '--', *LOCK_FILE_EXCLUDES)
        return staged + "\n" + unstaged

    def diff_stat(self, staged: bool) -> list[FileChange]:
        """Per-file added/removed counts for the staged or unstaged side."""
        args = ['diff', '--numstat', '--no-renames']
        if staged:
            args.append('--cached')
        return parse_numstat(self._run_git(*args))

    def diff_files(self, paths: list[str]) -> str:
        """Staged and unstaged diff restricted to `paths`, lock files excluded."""
        if not paths:
            return ""
        staged = self._run_git('diff', '--cached', '--', *paths, *LOCK_FILE_EXCLUDES)
        unstaged = self._run_git('diff', '--', *paths, *LOCK_FILE_EXCLUDES)
        return staged + "\n" + unstaged

    def history(self, limit: int = HISTORY_LIMIT) -> str:
        """Recent one-line log, newest first. Empty for a repo with no commits."""
        try:
            return self._run_git('log', f'-{limit}', '--oneline')
        except GitError as e:
            if NO_COMMITS_MARKER in str(e):
                return ""
            raise

    # Mutation

    def add(self, *paths: str) -> None:
        self._run_git('add', *(paths or ('.',)))

    def commit(self, message: str) -> None:
        self._run_git('commit', '-m', message)

    def head_hash(self) -> str:
        """Short hash of HEAD, or empty string when there is none."""
        try:
            return self._run_git('rev-parse', '--short', 'HEAD').strip()
        except GitError:
            return ""
