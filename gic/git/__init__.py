"""Git Operations Package"""

from gic.git.repository import GitRepository, GitError, FileChange, merge_diff_stats, parse_numstat
from gic.git.collector import ChangeCollector, CollectionError, RepositorySnapshot

__all__ = [
    "GitRepository",
    "GitError",
    "FileChange",
    "merge_diff_stats",
    "parse_numstat",
    "ChangeCollector",
    "CollectionError",
    "RepositorySnapshot",
]
