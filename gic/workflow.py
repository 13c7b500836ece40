"""Commit Workflow - Stage, collect, budget, ask, commit."""

from dataclasses import dataclass

from gic import HISTORY_LIMIT
from gic.auth import CredentialProvider
from gic.git import ChangeCollector, GitRepository, RepositorySnapshot
from gic.llm import LLMClient, LLMResponse
from gic.llm.base import clean_commit_message
from gic.prompts import PromptBudget, PromptBuilder


class NoChangesError(Exception):
    """Raised when the working tree has nothing to commit."""

    def __init__(self, message: str = "No changes to commit"):
        super().__init__(message)


@dataclass
class GeneratedMessage:
    message: str
    prompt: str
    smart_diff: bool
    response: LLMResponse


class CommitWorkflow:
    """Glue between the repository, the prompt budgeter and the model.

    Every collaborator is injected so the CLI and the MCP server share one path.
    """

    def __init__(
        self,
        repo: GitRepository,
        client: LLMClient,
        credentials: CredentialProvider,
        budget: PromptBudget | None = None,
        history_limit: int = HISTORY_LIMIT,
        timeout: float | None = None,
    ):
        self.repo = repo
        self.client = client
        self.credentials = credentials
        self.builder = PromptBuilder(repo=repo, budget=budget)
        self.collector = ChangeCollector(repo, history_limit=history_limit, timeout=timeout)

    def stage(self) -> None:
        self.repo.add('.')

    def collect(self) -> RepositorySnapshot:
        return self.collector.collect()

    def generate(self, snapshot: RepositorySnapshot, hint: str | None = None) -> GeneratedMessage:
        """Build the budgeted prompt and ask the model for a message.

        Raises NoChangesError before any prompt is built if the diff is blank.
        """
        if not snapshot.has_changes:
            raise NoChangesError()

        smart_diff = self.builder.uses_selected_diffs(snapshot)
        prompt = self.builder.build(snapshot, hint=hint)
        token = self.credentials.current_token()
        response = self.client.ask(token, prompt)

        return GeneratedMessage(
            message=clean_commit_message(response.content),
            prompt=prompt,
            smart_diff=smart_diff,
            response=response,
        )

    def commit(self, message: str) -> str:
        """Create the commit and return its short hash."""
        self.repo.commit(message)
        return self.repo.head_hash()
