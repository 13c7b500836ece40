"""Prompt Budget - Fit a changeset into a fixed character budget."""

from dataclasses import dataclass, field

from gic import MAX_PROMPT_CHARS, PROMPT_OVERHEAD, PER_LINE_ESTIMATE
from gic.git.repository import FileChange

SUMMARY_HEADER = "Changed Files Summary:"
DETAIL_HEADER = "Detailed Diffs (selected files):"


@dataclass
class PromptBudget:
    """Tunable size limits, in characters."""
    max_chars: int = MAX_PROMPT_CHARS
    overhead_chars: int = PROMPT_OVERHEAD
    per_line_estimate: int = PER_LINE_ESTIMATE

    def total_size(self, status: str, diff: str, history: str) -> int:
        return len(status) + len(diff) + len(history) + self.overhead_chars

    def fits(self, status: str, diff: str, history: str) -> bool:
        return self.total_size(status, diff, history) <= self.max_chars

    def available_for_diff(self, status: str, history: str) -> int:
        """Room left for the diff portion. May be zero or negative."""
        return self.max_chars - len(status) - len(history) - self.overhead_chars


@dataclass
class DiffSelection:
    """Outcome of the greedy selection: which files get full diffs."""
    selected: list[FileChange] = field(default_factory=list)
    excluded: list[FileChange] = field(default_factory=list)

    @property
    def selected_paths(self) -> list[str]:
        return [f.path for f in self.selected]

    @property
    def excluded_paths(self) -> list[str]:
        return [f.path for f in self.excluded]


class DiffSelector:
    """Builds a summary-plus-selected-diffs block when the full diff is too big.

    Files are tried smallest churn first.
    """

    def __init__(self, budget: PromptBudget | None = None):
        self.budget = budget or PromptBudget()

    def estimate_size(self, change: FileChange) -> int:
        """Rough diff size: churn times a per-line overhead constant."""
        return change.churn * self.budget.per_line_estimate

    def rank(self, changes: list[FileChange]) -> list[FileChange]:
        # sorted() is stable, so equal churn keeps input order
        return sorted(changes, key=lambda c: c.churn)

    def select(self, changes: list[FileChange], available: int) -> DiffSelection:
        """Greedy best-fit-remaining scan over ascending churn.

        An oversized file is excluded but does not stop the walk; later files
        are still tried against what is left.
        """
        selection = DiffSelection()
        used = 0
        for change in self.rank(changes):
            size = self.estimate_size(change)
            if used + size > available:
                selection.excluded.append(change)
                continue
            selection.selected.append(change)
            used += size
        return selection

    def build_summary(self, changes: list[FileChange]) -> str:
        lines = [SUMMARY_HEADER]
        lines.extend(f"  {c.path}: +{c.added} -{c.removed} lines" for c in changes)
        return "\n".join(lines) + "\n\n"

    def build_smart_diff(self, changes: list[FileChange], full_diff: str,
                         status: str, history: str, repo) -> str:
        """Summary of every file, full diffs for those that fit, note for the rest.

        `repo` supplies diff_files(paths) for the selected subset.
        """
        if not changes:
            return full_diff

        summary = self.build_summary(changes)
        available = self.budget.available_for_diff(status, history) - len(summary)
        selection = self.select(changes, available)

        parts = [summary]
        if selection.selected:
            parts.append(f"{DETAIL_HEADER}\n\n")
            parts.append(repo.diff_files(selection.selected_paths))

        if selection.excluded:
            excluded = selection.excluded_paths
            parts.append(f"\n[Note: Diffs excluded for {len(excluded)} large files: {', '.join(excluded)}]\n")

        return "".join(parts)
