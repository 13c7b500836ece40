"""Prompt Builder - Construct the commit message request from a snapshot."""

from gic.git.collector import RepositorySnapshot
from gic.prompts.budget import PromptBudget, DiffSelector

FENCE = "```"

SMART_DIFF_NOTE = (
    "(Note: Due to large changeset, detailed diffs shown for selected files only. "
    "Use summary above for full picture.)"
)


class PromptBuilder:
    """Assembles the instruction text sent to the model.

    Pure text assembly over collected data; the only I/O is the selected-files
    diff fetched through `repo` when the changeset is over budget.
    """

    def __init__(self, repo=None, budget: PromptBudget | None = None):
        self.repo = repo
        self.budget = budget or PromptBudget()
        self.selector = DiffSelector(self.budget)

    def needs_smart_diff(self, snapshot: RepositorySnapshot) -> bool:
        return not self.budget.fits(snapshot.status, snapshot.diff, snapshot.history)

    def uses_selected_diffs(self, snapshot: RepositorySnapshot) -> bool:
        """True when the diff section will be the summary-plus-selection block."""
        return bool(snapshot.changes) and self.needs_smart_diff(snapshot)

    def prepare_diff(self, snapshot: RepositorySnapshot) -> str:
        """Full diff when it fits, otherwise the smart-selected block."""
        if not self.uses_selected_diffs(snapshot):
            return snapshot.diff
        return self.selector.build_smart_diff(
            snapshot.changes, snapshot.diff, snapshot.status, snapshot.history, self.repo
        )

    def build(self, snapshot: RepositorySnapshot, hint: str | None = None) -> str:
        diff = self.prepare_diff(snapshot)
        sections = [
            "Analyze the following git repository state and generate a concise commit message.",
            self._build_status_section(snapshot.status),
            self._build_diff_section(diff, self.uses_selected_diffs(snapshot)),
            self._build_history_section(snapshot.history),
            self._build_hint_section(hint),
            self._build_instructions(),
        ]
        return "\n\n".join(filter(None, sections))

    def _fenced(self, title: str, body: str) -> str:
        return f"{title}:\n{FENCE}\n{body}\n{FENCE}"

    def _build_status_section(self, status: str) -> str:
        return self._fenced("Git Status", status)

    def _build_diff_section(self, diff: str, selected: bool) -> str:
        if selected:
            diff = f"{diff}\n{SMART_DIFF_NOTE}\n"
        return self._fenced("Git Diff", diff)

    def _build_history_section(self, history: str) -> str:
        return self._fenced("Recent Commits (for style reference)", history)

    def _build_hint_section(self, hint: str | None) -> str:
        if not hint:
            return ""
        return self._fenced("User Input", hint)

    def _build_instructions(self) -> str:
        return """IMPORTANT: Your entire response must be ONLY the commit message text itself.
Do NOT include:
- Any analysis or explanation
- Prefixes like "Claude:", "Here's", "Based on"
- Phrases like "I'll analyze" or "my suggested commit message is"
- Signatures or attributions

Write a commit message that:
1. Summarizes the changes concisely (1-2 sentences)
2. Focuses on WHY rather than WHAT
3. Follows the style of recent commits shown above

Start your response directly with the commit message text."""
