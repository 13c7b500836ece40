"""Change Collector - Gather one point-in-time snapshot of the working tree."""

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field

from gic import HISTORY_LIMIT
from gic.git.repository import FileChange, GitError, merge_diff_stats


@dataclass
class RepositorySnapshot:
    """Status, diff, stats and history captured in one collection pass."""
    status: str = ""
    diff: str = ""
    history: str = ""
    changes: list[FileChange] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.diff.strip())

    @property
    def total_added(self) -> int:
        return sum(c.added for c in self.changes)

    @property
    def total_removed(self) -> int:
        return sum(c.removed for c in self.changes)


class CollectionError(GitError):
    """Raised when any of the snapshot fetches fails."""
    pass


class ChangeCollector:
    """Runs the four read-only repository fetches concurrently.

    `repo` is anything exposing status(), diff(), diff_stat(staged) and
    history(limit); normally a GitRepository.
    """

    WORKERS = 4

    def __init__(self, repo, history_limit: int = HISTORY_LIMIT, timeout: float | None = None):
        self.repo = repo
        self.history_limit = history_limit
        self.timeout = timeout

    def _diff_stat(self) -> list[FileChange]:
        staged = self.repo.diff_stat(staged=True)
        unstaged = self.repo.diff_stat(staged=False)
        return merge_diff_stats(staged, unstaged)

    def collect(self) -> RepositorySnapshot:
        """Fetch everything, failing with the first error seen."""
        tasks = {
            'status': ("git status failed", self.repo.status),
            'changes': ("git diff stat failed", self._diff_stat),
            'diff': ("git diff failed", self.repo.diff),
            'history': ("git log failed", lambda: self.repo.history(self.history_limit)),
        }

        # Not a context manager: shutdown(wait=True) would defeat the timeout
        executor = ThreadPoolExecutor(max_workers=self.WORKERS, thread_name_prefix='gic-collect')
        try:
            futures = {executor.submit(fn): name for name, (_, fn) in tasks.items()}
            done, pending = wait(futures, timeout=self.timeout, return_when=FIRST_EXCEPTION)

            for future in done:
                error = future.exception()
                if error is not None:
                    label = tasks[futures[future]][0]
                    raise CollectionError(f"{label}: {error}") from error

            if pending:
                raise CollectionError(f"Repository analysis timed out after {self.timeout}s")

            results = {futures[f]: f.result() for f in done}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return RepositorySnapshot(**results)
